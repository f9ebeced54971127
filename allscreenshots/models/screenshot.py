"""Screenshot capture requests and job responses.

A :class:`ScreenshotRequest` is validated whenever it is created, so a value
that reaches the client is always acceptable to the service's documented
bounds. The fluent :class:`ScreenshotRequestBuilder` reports problems as
:class:`~allscreenshots.shared.exceptions.AllscreenshotsValidationError`.

Example:
    request = (
        ScreenshotRequest.builder()
        .url("https://github.com")
        .device("Desktop HD")
        .full_page(True)
        .format(ImageFormat.PNG)
        .build()
    )
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError, field_validator

from allscreenshots.models.base import ApiModel, RequestModel
from allscreenshots.models.common import (
    BlockLevel,
    ImageFormat,
    JobStatus,
    ResponseType,
    ViewportConfig,
    WaitUntil,
)
from allscreenshots.shared.exceptions import AllscreenshotsValidationError

QUALITY_RANGE = (1, 100)
DELAY_RANGE_MS = (0, 30_000)
TIMEOUT_RANGE_MS = (1_000, 60_000)


class ScreenshotRequest(RequestModel):
    """Parameters for a single capture. Only ``url`` is required."""

    url: str
    viewport: ViewportConfig | None = None
    device: str | None = None
    format: ImageFormat | None = None
    full_page: bool | None = None
    quality: int | None = None
    delay: int | None = None
    wait_for: str | None = None
    wait_until: WaitUntil | None = None
    timeout: int | None = None
    dark_mode: bool | None = None
    custom_css: str | None = None
    hide_selectors: list[str] | None = None
    selector: str | None = None
    block_ads: bool | None = None
    block_cookie_banners: bool | None = None
    block_level: BlockLevel | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None
    response_type: ResponseType | None = None

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        if not v:
            raise ValueError("URL is required")
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator("quality")
    @classmethod
    def check_quality(cls, v: int | None) -> int | None:
        low, high = QUALITY_RANGE
        if v is not None and not low <= v <= high:
            raise ValueError(f"Quality must be between {low} and {high}")
        return v

    @field_validator("delay")
    @classmethod
    def check_delay(cls, v: int | None) -> int | None:
        low, high = DELAY_RANGE_MS
        if v is not None and not low <= v <= high:
            raise ValueError(f"Delay must be between {low} and {high} milliseconds")
        return v

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v: int | None) -> int | None:
        low, high = TIMEOUT_RANGE_MS
        if v is not None and not low <= v <= high:
            raise ValueError(f"Timeout must be between {low} and {high} milliseconds")
        return v

    @classmethod
    def builder(cls) -> ScreenshotRequestBuilder:
        return ScreenshotRequestBuilder()

    @classmethod
    def simple(cls, url: str) -> ScreenshotRequest:
        """Request for ``url`` with every option left to the service default."""
        return cls.builder().url(url).build()


def _validation_message(error: ValidationError) -> str:
    """Pick the message of the first failure, without pydantic's decoration."""
    first = error.errors()[0]
    ctx_error = first.get("ctx", {}).get("error")
    if isinstance(ctx_error, ValueError):
        return str(ctx_error)
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


class ScreenshotRequestBuilder:
    """Fluent construction of a :class:`ScreenshotRequest`.

    Every setter returns the builder. Nothing is checked until :meth:`build`.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {"url": ""}

    def _set(self, name: str, value: Any) -> ScreenshotRequestBuilder:
        self._fields[name] = value
        return self

    def url(self, url: str) -> ScreenshotRequestBuilder:
        return self._set("url", url)

    def viewport(self, viewport: ViewportConfig) -> ScreenshotRequestBuilder:
        return self._set("viewport", viewport)

    def device(self, device: str) -> ScreenshotRequestBuilder:
        """Device preset name, e.g. ``"Desktop HD"``, ``"iPhone 14"`` or ``"iPad"``."""
        return self._set("device", device)

    def format(self, format: ImageFormat) -> ScreenshotRequestBuilder:  # noqa: A002
        return self._set("format", format)

    def full_page(self, full_page: bool) -> ScreenshotRequestBuilder:
        return self._set("full_page", full_page)

    def quality(self, quality: int) -> ScreenshotRequestBuilder:
        return self._set("quality", quality)

    def delay(self, delay: int) -> ScreenshotRequestBuilder:
        """Wait ``delay`` milliseconds after load before capturing."""
        return self._set("delay", delay)

    def wait_for(self, selector: str) -> ScreenshotRequestBuilder:
        return self._set("wait_for", selector)

    def wait_until(self, condition: WaitUntil) -> ScreenshotRequestBuilder:
        return self._set("wait_until", condition)

    def timeout(self, timeout: int) -> ScreenshotRequestBuilder:
        """Service-side capture timeout in milliseconds."""
        return self._set("timeout", timeout)

    def dark_mode(self, dark_mode: bool) -> ScreenshotRequestBuilder:
        return self._set("dark_mode", dark_mode)

    def custom_css(self, css: str) -> ScreenshotRequestBuilder:
        return self._set("custom_css", css)

    def hide_selectors(self, selectors: list[str]) -> ScreenshotRequestBuilder:
        return self._set("hide_selectors", list(selectors))

    def selector(self, selector: str) -> ScreenshotRequestBuilder:
        """Capture only the element matching ``selector``."""
        return self._set("selector", selector)

    def block_ads(self, block: bool) -> ScreenshotRequestBuilder:
        return self._set("block_ads", block)

    def block_cookie_banners(self, block: bool) -> ScreenshotRequestBuilder:
        return self._set("block_cookie_banners", block)

    def block_level(self, level: BlockLevel) -> ScreenshotRequestBuilder:
        return self._set("block_level", level)

    def webhook_url(self, url: str) -> ScreenshotRequestBuilder:
        return self._set("webhook_url", url)

    def webhook_secret(self, secret: str) -> ScreenshotRequestBuilder:
        return self._set("webhook_secret", secret)

    def response_type(self, response_type: ResponseType) -> ScreenshotRequestBuilder:
        return self._set("response_type", response_type)

    def build(self) -> ScreenshotRequest:
        """Validate the collected fields and produce the request.

        Raises:
            AllscreenshotsValidationError: The URL is missing or not http(s), or
                quality, delay or timeout is out of range.
        """
        try:
            return ScreenshotRequest.model_validate(self._fields)
        except ValidationError as e:
            raise AllscreenshotsValidationError(_validation_message(e)) from e


class AsyncJobCreatedResponse(ApiModel):
    """Acknowledgement of an asynchronous capture."""

    id: str
    status: JobStatus
    status_url: str | None = None
    created_at: str | None = None


class JobResponse(ApiModel):
    """State of an asynchronous capture job."""

    id: str
    status: JobStatus
    url: str | None = None
    result_url: str | None = None
    error_code: str | None = None
    error_message: str | None = None
    created_at: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    expires_at: str | None = None
    metadata: Any | None = None
