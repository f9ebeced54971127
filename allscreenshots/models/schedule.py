from __future__ import annotations

from typing import Any

from allscreenshots.models.base import ApiModel, RequestModel
from allscreenshots.models.common import BlockLevel, ImageFormat, ViewportConfig, WaitUntil


class ScheduleScreenshotOptions(RequestModel):
    """Capture options used by every run of a schedule."""

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
    block_ads: bool | None = None
    block_cookie_banners: bool | None = None
    block_level: BlockLevel | None = None


class CreateScheduleRequest(RequestModel):
    """A recurring capture of ``url``.

    ``schedule`` is a cron expression, evaluated in ``timezone`` (UTC when unset).
    """

    name: str
    url: str
    schedule: str
    timezone: str | None = None
    options: ScheduleScreenshotOptions | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None
    retention_days: int | None = None
    starts_at: str | None = None
    ends_at: str | None = None


class UpdateScheduleRequest(RequestModel):
    """Partial update; only the fields that are set are sent."""

    name: str | None = None
    url: str | None = None
    schedule: str | None = None
    timezone: str | None = None
    options: ScheduleScreenshotOptions | None = None
    webhook_url: str | None = None
    webhook_secret: str | None = None
    retention_days: int | None = None
    starts_at: str | None = None
    ends_at: str | None = None


class ScheduleResponse(ApiModel):
    id: str
    name: str
    url: str
    schedule: str
    schedule_description: str | None = None
    timezone: str | None = None
    status: str
    options: Any | None = None
    webhook_url: str | None = None
    retention_days: int | None = None
    starts_at: str | None = None
    ends_at: str | None = None
    last_executed_at: str | None = None
    next_execution_at: str | None = None
    execution_count: int | None = None
    success_count: int | None = None
    failure_count: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ScheduleListResponse(ApiModel):
    schedules: list[ScheduleResponse]
    total: int


class ScheduleExecutionResponse(ApiModel):
    id: str
    executed_at: str
    status: str
    result_url: str | None = None
    storage_url: str | None = None
    file_size: int | None = None
    render_time_ms: int | None = None
    error_code: str | None = None
    error_message: str | None = None
    expires_at: str | None = None


class ScheduleHistoryResponse(ApiModel):
    schedule_id: str
    total_executions: int
    executions: list[ScheduleExecutionResponse]
