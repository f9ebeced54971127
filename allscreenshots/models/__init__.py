"""Request and response shapes of the Allscreenshots API."""

from __future__ import annotations

from .bulk import (
    BulkDefaults,
    BulkJobDetailInfo,
    BulkJobInfo,
    BulkJobSummary,
    BulkRequest,
    BulkResponse,
    BulkStatusResponse,
    BulkUrlOptions,
    BulkUrlRequest,
)
from .common import BlockLevel, ImageFormat, JobStatus, ResponseType, ViewportConfig, WaitUntil
from .compose import (
    Alignment,
    BorderConfig,
    CaptureDefaults,
    CaptureItem,
    ComposeJobStatusResponse,
    ComposeJobSummaryResponse,
    ComposeMetadata,
    ComposeOutputConfig,
    ComposeRequest,
    ComposeResponse,
    LabelConfig,
    LayoutPreviewResponse,
    LayoutType,
    PlacementPreview,
    ShadowConfig,
    VariantConfig,
)
from .schedule import (
    CreateScheduleRequest,
    ScheduleExecutionResponse,
    ScheduleHistoryResponse,
    ScheduleListResponse,
    ScheduleResponse,
    ScheduleScreenshotOptions,
    UpdateScheduleRequest,
)
from .screenshot import (
    AsyncJobCreatedResponse,
    JobResponse,
    ScreenshotRequest,
    ScreenshotRequestBuilder,
)
from .usage import (
    BandwidthQuotaResponse,
    PeriodUsageResponse,
    QuotaDetailResponse,
    QuotaResponse,
    QuotaStatusResponse,
    TotalsResponse,
    UsageResponse,
)

__all__ = [
    "Alignment",
    "AsyncJobCreatedResponse",
    "BandwidthQuotaResponse",
    "BlockLevel",
    "BorderConfig",
    "BulkDefaults",
    "BulkJobDetailInfo",
    "BulkJobInfo",
    "BulkJobSummary",
    "BulkRequest",
    "BulkResponse",
    "BulkStatusResponse",
    "BulkUrlOptions",
    "BulkUrlRequest",
    "CaptureDefaults",
    "CaptureItem",
    "ComposeJobStatusResponse",
    "ComposeJobSummaryResponse",
    "ComposeMetadata",
    "ComposeOutputConfig",
    "ComposeRequest",
    "ComposeResponse",
    "CreateScheduleRequest",
    "ImageFormat",
    "JobResponse",
    "JobStatus",
    "LabelConfig",
    "LayoutPreviewResponse",
    "LayoutType",
    "PeriodUsageResponse",
    "PlacementPreview",
    "QuotaDetailResponse",
    "QuotaResponse",
    "QuotaStatusResponse",
    "ResponseType",
    "ScheduleExecutionResponse",
    "ScheduleHistoryResponse",
    "ScheduleListResponse",
    "ScheduleResponse",
    "ScheduleScreenshotOptions",
    "ScreenshotRequest",
    "ScreenshotRequestBuilder",
    "ShadowConfig",
    "TotalsResponse",
    "UpdateScheduleRequest",
    "UsageResponse",
    "VariantConfig",
    "ViewportConfig",
    "WaitUntil",
]
