"""allscreenshots-python.

Async client for the Allscreenshots screenshot API.
"""

from __future__ import annotations

from .client import AllscreenshotsClient
from .models import (
    BlockLevel,
    BulkRequest,
    BulkUrlRequest,
    CaptureItem,
    ComposeOutputConfig,
    ComposeRequest,
    CreateScheduleRequest,
    ImageFormat,
    JobStatus,
    LayoutType,
    ScreenshotRequest,
    UpdateScheduleRequest,
    ViewportConfig,
    WaitUntil,
)
from .shared.exceptions import (
    AllscreenshotsApiError,
    AllscreenshotsAuthenticationError,
    AllscreenshotsConfigError,
    AllscreenshotsEnvVarError,
    AllscreenshotsError,
    AllscreenshotsRateLimitError,
    AllscreenshotsResponseError,
    AllscreenshotsRetriesExhaustedError,
    AllscreenshotsTimeoutError,
    AllscreenshotsTransportError,
    AllscreenshotsValidationError,
    ErrorCode,
)
from .shared.retry import RetryPolicy
from .version import __version__

__all__ = [
    "AllscreenshotsApiError",
    "AllscreenshotsAuthenticationError",
    "AllscreenshotsClient",
    "AllscreenshotsConfigError",
    "AllscreenshotsEnvVarError",
    "AllscreenshotsError",
    "AllscreenshotsRateLimitError",
    "AllscreenshotsResponseError",
    "AllscreenshotsRetriesExhaustedError",
    "AllscreenshotsTimeoutError",
    "AllscreenshotsTransportError",
    "AllscreenshotsValidationError",
    "BlockLevel",
    "BulkRequest",
    "BulkUrlRequest",
    "CaptureItem",
    "ComposeOutputConfig",
    "ComposeRequest",
    "CreateScheduleRequest",
    "ErrorCode",
    "ImageFormat",
    "JobStatus",
    "LayoutType",
    "RetryPolicy",
    "ScreenshotRequest",
    "UpdateScheduleRequest",
    "ViewportConfig",
    "WaitUntil",
    "__version__",
]
