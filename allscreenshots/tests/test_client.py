"""Tests for the client facade and its endpoint catalog."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from allscreenshots.client import AllscreenshotsClient
from allscreenshots.models import (
    BulkRequest,
    CaptureItem,
    ComposeRequest,
    CreateScheduleRequest,
    JobStatus,
    LayoutType,
    ScreenshotRequest,
    UpdateScheduleRequest,
)
from allscreenshots.settings import DEFAULT_BASE_URL, Settings
from allscreenshots.shared.exceptions import (
    AllscreenshotsConfigError,
    AllscreenshotsEnvVarError,
    AllscreenshotsRetriesExhaustedError,
)
from allscreenshots.shared.retry import RetryPolicy

BASE_URL = "https://api.test.com"

SCHEDULE = {"id": "s 1", "name": "Home", "url": "https://a.com", "schedule": "0 * * * *", "status": "ACTIVE"}
JOB = {"id": "job_1", "status": "QUEUED"}
BULK_SUMMARY = {
    "id": "bulk_1",
    "status": "PROCESSING",
    "totalJobs": 2,
    "completedJobs": 0,
    "failedJobs": 0,
    "progress": 0,
}


def _settings(**overrides: Any) -> Settings:
    values = {"api_key": None, "base_url": DEFAULT_BASE_URL, "timeout": 60.0, "max_retries": 3}
    values.update(overrides)
    return Settings.model_construct(**values)


class _Recorder:
    """MockTransport handler answering every request the same way and recording requests."""

    def __init__(self, status_code: int, **response_kwargs: Any) -> None:
        self.status_code = status_code
        self.response_kwargs = response_kwargs
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, **self.response_kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _client(
    status_code: int, *, max_retries: int | None = None, **response_kwargs: Any
) -> tuple[AllscreenshotsClient, _Recorder]:
    recorder = _Recorder(status_code, **response_kwargs)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    client = AllscreenshotsClient(
        "test-key", base_url=BASE_URL, http_client=http_client, max_retries=max_retries
    )
    return client, recorder


class TestConstruction:
    def test_missing_api_key(self):
        with patch("allscreenshots.client.get_settings", return_value=_settings()):
            with pytest.raises(AllscreenshotsEnvVarError) as exc_info:
                AllscreenshotsClient()
        assert exc_info.value.var_name == "ALLSCREENSHOTS_API_KEY"

    def test_empty_api_key(self):
        with patch("allscreenshots.client.get_settings", return_value=_settings()):
            with pytest.raises(AllscreenshotsConfigError):
                AllscreenshotsClient("")

    def test_key_and_defaults_from_settings(self):
        settings = _settings(api_key="env-key", max_retries=5)
        with patch("allscreenshots.client.get_settings", return_value=settings):
            client = AllscreenshotsClient.from_env()
        assert client.credentials.api_key == "env-key"
        assert client.base_url == DEFAULT_BASE_URL
        assert client.retry_policy.max_retries == 5

    def test_explicit_arguments_override_settings(self):
        settings = _settings(api_key="env-key", base_url="https://env.example.com")
        with patch("allscreenshots.client.get_settings", return_value=settings):
            client = AllscreenshotsClient(
                "arg-key", base_url="https://arg.example.com/", timeout=5.0, max_retries=0
            )
        assert client.credentials.api_key == "arg-key"
        assert client.base_url == "https://arg.example.com"
        assert client.retry_policy.max_retries == 0
        assert client.http_client.timeout.read == 5.0

    def test_max_retries_overrides_policy(self):
        policy = RetryPolicy(initial_delay=1.0, jitter=0.0)
        client = AllscreenshotsClient("k", base_url=BASE_URL, retry_policy=policy, max_retries=1)
        assert client.retry_policy == RetryPolicy(max_retries=1, initial_delay=1.0, jitter=0.0)

    def test_invalid_max_retries(self):
        with pytest.raises(AllscreenshotsConfigError):
            AllscreenshotsClient("k", base_url=BASE_URL, max_retries=-1)

    def test_malformed_environment_setting(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ALLSCREENSHOTS_MAX_RETRIES", "lots")
        with pytest.raises(AllscreenshotsConfigError) as exc_info:
            AllscreenshotsClient("k", base_url=BASE_URL, max_retries=1, timeout=5.0)
        assert "ALLSCREENSHOTS_MAX_RETRIES" in str(exc_info.value)

    def test_verbose_adds_single_handler(self):
        logger = logging.getLogger("allscreenshots")
        before = list(logger.handlers)
        try:
            AllscreenshotsClient("k", base_url=BASE_URL, verbose=True)
            AllscreenshotsClient("k", base_url=BASE_URL, verbose=True)
            added = [h for h in logger.handlers if h not in before]
            assert len(added) <= 1
            assert logger.level == logging.DEBUG
        finally:
            for handler in [h for h in logger.handlers if h not in before]:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        client = AllscreenshotsClient("k", base_url=BASE_URL)
        async with client:
            pass
        assert client.http_client.is_closed

    @pytest.mark.asyncio
    async def test_caller_client_left_open(self):
        http_client = httpx.AsyncClient()
        async with AllscreenshotsClient("k", base_url=BASE_URL, http_client=http_client):
            pass
        assert not http_client.is_closed
        await http_client.aclose()


class TestScreenshots:
    @pytest.mark.asyncio
    async def test_screenshot_returns_bytes(self):
        client, recorder = _client(200, content=b"\x89PNG")

        image = await client.screenshot(ScreenshotRequest.simple("https://example.com"))

        assert image == b"\x89PNG"
        assert recorder.last.method == "POST"
        assert recorder.last.url == f"{BASE_URL}/v1/screenshots"
        assert recorder.last.headers["X-API-Key"] == "test-key"
        assert json.loads(recorder.last.content) == {"url": "https://example.com"}

    @pytest.mark.asyncio
    async def test_screenshot_async(self):
        client, recorder = _client(202, json={**JOB, "statusUrl": "/jobs/job_1"})

        created = await client.screenshot_async(ScreenshotRequest.simple("https://example.com"))

        assert created.status is JobStatus.QUEUED
        assert created.status_url == "/jobs/job_1"
        assert recorder.last.url.path == "/v1/screenshots/async"

    @pytest.mark.asyncio
    async def test_jobs(self):
        client, recorder = _client(200, json=[JOB])
        jobs = await client.list_jobs()
        assert [job.id for job in jobs] == ["job_1"]
        assert recorder.last.url.path == "/v1/screenshots/jobs"

        client, recorder = _client(200, json=JOB)
        await client.get_job("job/1")
        assert recorder.last.url.raw_path == b"/v1/screenshots/jobs/job%2F1"

        await client.cancel_job("job_1")
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/v1/screenshots/jobs/job_1/cancel"
        assert recorder.last.content == b""

    @pytest.mark.asyncio
    async def test_job_result(self):
        client, recorder = _client(200, content=b"img")
        assert await client.get_job_result("job_1") == b"img"
        assert recorder.last.url.path == "/v1/screenshots/jobs/job_1/result"


class TestBulk:
    @pytest.mark.asyncio
    async def test_create_bulk_job(self):
        client, recorder = _client(200, json={**BULK_SUMMARY, "jobs": []})

        response = await client.create_bulk_job(BulkRequest.for_urls("https://a.com"))

        assert response.total_jobs == 2
        assert json.loads(recorder.last.content) == {"urls": [{"url": "https://a.com"}]}

    @pytest.mark.asyncio
    async def test_bulk_endpoints(self):
        client, recorder = _client(200, json=[BULK_SUMMARY])
        assert (await client.list_bulk_jobs())[0].id == "bulk_1"
        assert recorder.last.url.path == "/v1/screenshots/bulk"

        client, recorder = _client(200, json=BULK_SUMMARY)
        assert (await client.get_bulk_job("bulk_1")).progress == 0
        assert recorder.last.url.path == "/v1/screenshots/bulk/bulk_1"
        await client.cancel_bulk_job("bulk_1")
        assert recorder.last.url.path == "/v1/screenshots/bulk/bulk_1/cancel"


class TestCompose:
    @pytest.mark.asyncio
    async def test_compose(self):
        client, recorder = _client(200, json={"url": "https://cdn/x.png", "width": 10})
        request = ComposeRequest.from_captures([CaptureItem(url="https://a.com")])

        response = await client.compose(request)

        assert response.width == 10
        assert "async" not in json.loads(recorder.last.content)

    @pytest.mark.asyncio
    async def test_compose_async_sets_flag(self):
        client, recorder = _client(202, json={"jobId": "c1", "status": "QUEUED"})
        request = ComposeRequest.from_captures([CaptureItem(url="https://a.com")])

        job = await client.compose_async(request)

        assert job.job_id == "c1"
        assert recorder.last.url.path == "/v1/screenshots/compose"
        assert json.loads(recorder.last.content)["async"] is True
        assert request.is_async is None

    @pytest.mark.asyncio
    async def test_preview_layout_query(self):
        preview = {"layout": "GRID", "canvasWidth": 800, "canvasHeight": 600, "placements": []}
        client, recorder = _client(200, json=preview)

        await client.preview_layout(LayoutType.GRID, 3, canvas_width=800, aspect_ratios="1.5,1,1")

        assert recorder.last.url.path == "/v1/screenshots/compose/preview"
        assert dict(recorder.last.url.params) == {
            "layout": "GRID",
            "image_count": "3",
            "canvas_width": "800",
            "aspect_ratios": "1.5,1,1",
        }

    @pytest.mark.asyncio
    async def test_compose_jobs(self):
        client, recorder = _client(200, json=[{"jobId": "c1", "status": "COMPLETED"}])
        assert (await client.list_compose_jobs())[0].job_id == "c1"
        assert recorder.last.url.path == "/v1/screenshots/compose/jobs"

        client, recorder = _client(200, json={"jobId": "c1", "status": "COMPLETED"})
        await client.get_compose_job("c1")
        assert recorder.last.url.path == "/v1/screenshots/compose/jobs/c1"


class TestSchedules:
    @pytest.mark.asyncio
    async def test_create_and_update(self):
        client, recorder = _client(200, json=SCHEDULE)

        await client.create_schedule(CreateScheduleRequest(name="Home", url="https://a.com", schedule="0 * * * *"))
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/v1/schedules"

        await client.update_schedule("s 1", UpdateScheduleRequest(name="Renamed"))
        assert recorder.last.method == "PUT"
        assert recorder.last.url.raw_path == b"/v1/schedules/s%201"
        assert json.loads(recorder.last.content) == {"name": "Renamed"}

    @pytest.mark.asyncio
    async def test_list_and_get(self):
        client, recorder = _client(200, json={"schedules": [SCHEDULE], "total": 1})
        assert (await client.list_schedules()).total == 1

        client, recorder = _client(200, json=SCHEDULE)
        assert (await client.get_schedule("s1")).name == "Home"
        assert recorder.last.method == "GET"

    @pytest.mark.asyncio
    async def test_delete_returns_none(self):
        client, recorder = _client(204)
        assert await client.delete_schedule("s1") is None
        assert recorder.last.method == "DELETE"
        assert recorder.last.url.path == "/v1/schedules/s1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["pause", "resume", "trigger"])
    async def test_actions(self, action):
        client, recorder = _client(200, json=SCHEDULE)
        await getattr(client, f"{action}_schedule")("s1")
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == f"/v1/schedules/s1/{action}"

    @pytest.mark.asyncio
    async def test_history(self):
        history = {"scheduleId": "s1", "totalExecutions": 0, "executions": []}
        client, recorder = _client(200, json=history)

        await client.get_schedule_history("s1")
        assert recorder.last.url.query == b""

        await client.get_schedule_history("s1", limit=10)
        assert recorder.last.url.path == "/v1/schedules/s1/history"
        assert recorder.last.url.params["limit"] == "10"


class TestUsage:
    @pytest.mark.asyncio
    async def test_usage(self):
        usage = {
            "tier": "FREE",
            "currentPeriod": {
                "periodStart": "a",
                "periodEnd": "b",
                "screenshotsCount": 1,
                "bandwidthBytes": 2,
                "bandwidthFormatted": "2 B",
            },
        }
        client, recorder = _client(200, json=usage)
        assert (await client.get_usage()).tier == "FREE"
        assert recorder.last.url.path == "/v1/usage"

    @pytest.mark.asyncio
    async def test_quota_retries_transient_failure(self):
        quota = {
            "tier": "PRO",
            "screenshots": {"limit": 1, "used": 0, "remaining": 1, "percentUsed": 0},
            "bandwidth": {
                "limitBytes": 1,
                "limitFormatted": "1 B",
                "usedBytes": 0,
                "usedFormatted": "0 B",
                "remainingBytes": 1,
                "remainingFormatted": "1 B",
                "percentUsed": 0,
            },
        }
        responses = [httpx.Response(503), httpx.Response(200, json=quota)]
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda _: responses.pop(0)))
        client = AllscreenshotsClient("k", base_url=BASE_URL, http_client=http_client)

        with patch("allscreenshots.shared.requests._handle_retry", AsyncMock()) as mock_retry:
            result = await client.get_quota()

        assert result.tier == "PRO"
        assert mock_retry.await_count == 1

    @pytest.mark.asyncio
    async def test_exhausted_retries_surface(self):
        client, recorder = _client(503, max_retries=1)
        with patch("allscreenshots.shared.requests._handle_retry", AsyncMock()):
            with pytest.raises(AllscreenshotsRetriesExhaustedError) as exc_info:
                await client.get_usage()
        assert exc_info.value.attempts == 2
        assert len(recorder.requests) == 2
