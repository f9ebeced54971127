"""Bulk capture: many URLs submitted as one job."""

from __future__ import annotations

from allscreenshots.models.base import ApiModel, RequestModel
from allscreenshots.models.common import BlockLevel, ImageFormat, ViewportConfig, WaitUntil


class BulkUrlOptions(RequestModel):
    """Per-URL overrides of the bulk defaults."""

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
    block_ads: bool | None = None
    block_cookie_banners: bool | None = None
    block_level: BlockLevel | None = None


class BulkDefaults(BulkUrlOptions):
    """Options applied to every URL of a bulk job unless overridden."""


class BulkUrlRequest(RequestModel):
    url: str
    options: BulkUrlOptions | None = None


class BulkRequest(RequestModel):
    urls: list[BulkUrlRequest]
    defaults: BulkDefaults | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None

    @classmethod
    def for_urls(cls, *urls: str, defaults: BulkDefaults | None = None) -> BulkRequest:
        """Bulk request for plain URLs sharing the same ``defaults``."""
        return cls(urls=[BulkUrlRequest(url=url) for url in urls], defaults=defaults)


class BulkJobInfo(ApiModel):
    id: str
    url: str
    status: str


class BulkJobSummary(ApiModel):
    """Progress counters of a bulk job, without per-URL detail."""

    id: str
    status: str
    total_jobs: int
    completed_jobs: int
    failed_jobs: int
    progress: int
    created_at: str | None = None
    completed_at: str | None = None


class BulkResponse(BulkJobSummary):
    """Returned when a bulk job is created."""

    jobs: list[BulkJobInfo] | None = None


class BulkJobDetailInfo(ApiModel):
    id: str
    url: str
    status: str
    result_url: str | None = None
    storage_url: str | None = None
    format: str | None = None
    width: int | None = None
    height: int | None = None
    file_size: int | None = None
    render_time_ms: int | None = None
    error_code: str | None = None
    error_message: str | None = None
    created_at: str | None = None
    completed_at: str | None = None


class BulkStatusResponse(BulkJobSummary):
    jobs: list[BulkJobDetailInfo] | None = None
