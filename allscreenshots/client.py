"""Async client for the Allscreenshots API.

Example:
    async with AllscreenshotsClient() as client:
        request = ScreenshotRequest.builder().url("https://github.com").build()
        image = await client.screenshot(request)
"""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote, urlencode

from allscreenshots.models import (
    AsyncJobCreatedResponse,
    BulkJobSummary,
    BulkRequest,
    BulkResponse,
    BulkStatusResponse,
    ComposeJobStatusResponse,
    ComposeJobSummaryResponse,
    ComposeRequest,
    ComposeResponse,
    CreateScheduleRequest,
    JobResponse,
    LayoutPreviewResponse,
    LayoutType,
    QuotaStatusResponse,
    ScheduleHistoryResponse,
    ScheduleListResponse,
    ScheduleResponse,
    ScreenshotRequest,
    UpdateScheduleRequest,
    UsageResponse,
)
from allscreenshots.settings import API_KEY_ENV_VAR, get_settings
from allscreenshots.shared.exceptions import AllscreenshotsEnvVarError
from allscreenshots.shared.requests import (
    BINARY,
    ClientCredentials,
    JsonResponse,
    Operation,
    RequestDispatcher,
    create_default_async_client,
)
from allscreenshots.shared.retry import RetryPolicy

if TYPE_CHECKING:
    from typing import Self

    import httpx

logger = logging.getLogger("allscreenshots")

T = TypeVar("T")


def _segment(value: str) -> str:
    """Percent-encode an id for use as a single path segment."""
    return quote(str(value), safe="")


def _with_query(path: str, params: dict[str, Any]) -> str:
    present = {
        key: value.value if isinstance(value, Enum) else value
        for key, value in params.items()
        if value is not None
    }
    return f"{path}?{urlencode(present)}" if present else path


class AllscreenshotsClient:
    """
    Client for the Allscreenshots screenshot API.

    Configuration not passed explicitly is read from the environment and env
    files when the client is created (see :class:`allscreenshots.settings.Settings`).
    Every call is retried on transient failures according to the client's
    :class:`RetryPolicy` and raises an
    :class:`~allscreenshots.shared.exceptions.AllscreenshotsError` on failure.

    One client can serve many concurrent calls; it shares a single connection pool.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
        verbose: bool = False,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: API key; defaults to ALLSCREENSHOTS_API_KEY
            base_url: API base URL; defaults to ALLSCREENSHOTS_BASE_URL or the public API
            timeout: Per-request transport timeout in seconds
            max_retries: Retries after the first attempt; overrides ``retry_policy.max_retries``
            retry_policy: Full backoff configuration
            http_client: Caller-owned httpx client to send requests with
            verbose: Log requests and retries at DEBUG to stderr

        Raises:
            AllscreenshotsEnvVarError: No API key was given or configured.
            AllscreenshotsConfigError: The API key is empty or a setting is invalid.
        """
        settings = get_settings()

        if api_key is None:
            api_key = settings.api_key
        if api_key is None:
            raise AllscreenshotsEnvVarError(API_KEY_ENV_VAR)

        self.credentials = ClientCredentials(api_key=api_key, base_url=base_url or settings.base_url)

        if retry_policy is None:
            retry_policy = RetryPolicy(
                max_retries=settings.max_retries if max_retries is None else max_retries
            )
        elif max_retries is not None:
            retry_policy = dataclasses.replace(retry_policy, max_retries=max_retries)
        self.retry_policy = retry_policy

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = create_default_async_client(
                timeout=settings.timeout if timeout is None else timeout
            )
        self.http_client = http_client
        self._dispatcher = RequestDispatcher(self.credentials, http_client, retry_policy)

        if verbose:
            self._setup_verbose_logging()

    @classmethod
    def from_env(cls, **kwargs: Any) -> AllscreenshotsClient:
        """Create a client whose API key comes from ALLSCREENSHOTS_API_KEY."""
        return cls(None, **kwargs)

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    def _setup_verbose_logging(self) -> None:
        """Configure verbose logging for debugging."""
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[%(levelname)s] %(asctime)s - %(name)s - %(message)s")
            )
            logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

    async def _send(self, operation: Operation[T]) -> T:
        return await self._dispatcher.dispatch(operation)

    # Screenshots

    async def screenshot(self, request: ScreenshotRequest) -> bytes:
        """Capture a page and return the encoded image (or PDF) bytes."""
        return await self._send(Operation.post("/v1/screenshots", BINARY, request))

    async def screenshot_async(self, request: ScreenshotRequest) -> AsyncJobCreatedResponse:
        """Queue a capture; poll it with :meth:`get_job`."""
        return await self._send(
            Operation.post("/v1/screenshots/async", JsonResponse(AsyncJobCreatedResponse), request)
        )

    async def list_jobs(self) -> list[JobResponse]:
        return await self._send(
            Operation.get("/v1/screenshots/jobs", JsonResponse(list[JobResponse]))
        )

    async def get_job(self, job_id: str) -> JobResponse:
        return await self._send(
            Operation.get(f"/v1/screenshots/jobs/{_segment(job_id)}", JsonResponse(JobResponse))
        )

    async def get_job_result(self, job_id: str) -> bytes:
        """Download the image produced by a completed job."""
        return await self._send(
            Operation.get(f"/v1/screenshots/jobs/{_segment(job_id)}/result", BINARY)
        )

    async def cancel_job(self, job_id: str) -> JobResponse:
        return await self._send(
            Operation.post(
                f"/v1/screenshots/jobs/{_segment(job_id)}/cancel", JsonResponse(JobResponse)
            )
        )

    # Bulk

    async def create_bulk_job(self, request: BulkRequest) -> BulkResponse:
        return await self._send(
            Operation.post("/v1/screenshots/bulk", JsonResponse(BulkResponse), request)
        )

    async def list_bulk_jobs(self) -> list[BulkJobSummary]:
        return await self._send(
            Operation.get("/v1/screenshots/bulk", JsonResponse(list[BulkJobSummary]))
        )

    async def get_bulk_job(self, bulk_job_id: str) -> BulkStatusResponse:
        return await self._send(
            Operation.get(
                f"/v1/screenshots/bulk/{_segment(bulk_job_id)}", JsonResponse(BulkStatusResponse)
            )
        )

    async def cancel_bulk_job(self, bulk_job_id: str) -> BulkJobSummary:
        return await self._send(
            Operation.post(
                f"/v1/screenshots/bulk/{_segment(bulk_job_id)}/cancel",
                JsonResponse(BulkJobSummary),
            )
        )

    # Compose

    async def compose(self, request: ComposeRequest) -> ComposeResponse:
        """Capture and lay out several screenshots, waiting for the result."""
        return await self._send(
            Operation.post("/v1/screenshots/compose", JsonResponse(ComposeResponse), request)
        )

    async def compose_async(self, request: ComposeRequest) -> ComposeJobStatusResponse:
        """Submit ``request`` as a compose job; poll it with :meth:`get_compose_job`."""
        request = request.model_copy(update={"is_async": True})
        return await self._send(
            Operation.post(
                "/v1/screenshots/compose", JsonResponse(ComposeJobStatusResponse), request
            )
        )

    async def preview_layout(
        self,
        layout: LayoutType | str,
        image_count: int,
        canvas_width: int | None = None,
        canvas_height: int | None = None,
        aspect_ratios: str | None = None,
    ) -> LayoutPreviewResponse:
        """
        Compute where ``image_count`` images would be placed, without capturing.

        Args:
            layout: Layout algorithm
            image_count: Number of images to place
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            aspect_ratios: Comma-separated width/height ratios, one per image
        """
        path = _with_query(
            "/v1/screenshots/compose/preview",
            {
                "layout": layout,
                "image_count": image_count,
                "canvas_width": canvas_width,
                "canvas_height": canvas_height,
                "aspect_ratios": aspect_ratios,
            },
        )
        return await self._send(Operation.get(path, JsonResponse(LayoutPreviewResponse)))

    async def list_compose_jobs(self) -> list[ComposeJobSummaryResponse]:
        return await self._send(
            Operation.get(
                "/v1/screenshots/compose/jobs", JsonResponse(list[ComposeJobSummaryResponse])
            )
        )

    async def get_compose_job(self, job_id: str) -> ComposeJobStatusResponse:
        return await self._send(
            Operation.get(
                f"/v1/screenshots/compose/jobs/{_segment(job_id)}",
                JsonResponse(ComposeJobStatusResponse),
            )
        )

    # Schedules

    async def create_schedule(self, request: CreateScheduleRequest) -> ScheduleResponse:
        return await self._send(
            Operation.post("/v1/schedules", JsonResponse(ScheduleResponse), request)
        )

    async def list_schedules(self) -> ScheduleListResponse:
        return await self._send(Operation.get("/v1/schedules", JsonResponse(ScheduleListResponse)))

    async def get_schedule(self, schedule_id: str) -> ScheduleResponse:
        return await self._send(
            Operation.get(f"/v1/schedules/{_segment(schedule_id)}", JsonResponse(ScheduleResponse))
        )

    async def update_schedule(
        self, schedule_id: str, request: UpdateScheduleRequest
    ) -> ScheduleResponse:
        return await self._send(
            Operation.put(
                f"/v1/schedules/{_segment(schedule_id)}", JsonResponse(ScheduleResponse), request
            )
        )

    async def delete_schedule(self, schedule_id: str) -> None:
        await self._send(Operation.delete(f"/v1/schedules/{_segment(schedule_id)}"))

    async def _schedule_action(self, schedule_id: str, action: str) -> ScheduleResponse:
        return await self._send(
            Operation.post(
                f"/v1/schedules/{_segment(schedule_id)}/{action}", JsonResponse(ScheduleResponse)
            )
        )

    async def pause_schedule(self, schedule_id: str) -> ScheduleResponse:
        return await self._schedule_action(schedule_id, "pause")

    async def resume_schedule(self, schedule_id: str) -> ScheduleResponse:
        return await self._schedule_action(schedule_id, "resume")

    async def trigger_schedule(self, schedule_id: str) -> ScheduleResponse:
        """Run the schedule once now, outside its cron timing."""
        return await self._schedule_action(schedule_id, "trigger")

    async def get_schedule_history(
        self, schedule_id: str, limit: int | None = None
    ) -> ScheduleHistoryResponse:
        path = _with_query(f"/v1/schedules/{_segment(schedule_id)}/history", {"limit": limit})
        return await self._send(Operation.get(path, JsonResponse(ScheduleHistoryResponse)))

    # Usage

    async def get_usage(self) -> UsageResponse:
        return await self._send(Operation.get("/v1/usage", JsonResponse(UsageResponse)))

    async def get_quota(self) -> QuotaStatusResponse:
        return await self._send(Operation.get("/v1/usage/quota", JsonResponse(QuotaStatusResponse)))
