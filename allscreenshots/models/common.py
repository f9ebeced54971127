"""Types shared by several endpoints."""

from __future__ import annotations

from enum import Enum

from allscreenshots.models.base import RequestModel


class ViewportConfig(RequestModel):
    """Browser viewport used for a capture.

    Attributes:
        width: Width in pixels (100-4096)
        height: Height in pixels (100-4096)
        device_scale_factor: Device pixel ratio (1-3)
    """

    width: int | None = None
    height: int | None = None
    device_scale_factor: int | None = None

    @classmethod
    def of(cls, width: int, height: int, device_scale_factor: int | None = None) -> ViewportConfig:
        return cls(width=width, height=height, device_scale_factor=device_scale_factor)


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    JPG = "jpg"
    WEBP = "webp"
    PDF = "pdf"


class WaitUntil(str, Enum):
    """Page load condition to wait for before capturing."""

    LOAD = "load"
    DOM_CONTENT_LOADED = "domcontentloaded"
    NETWORK_IDLE = "networkidle"
    COMMIT = "commit"


class BlockLevel(str, Enum):
    """How aggressively ads and trackers are blocked."""

    NONE = "none"
    LIGHT = "light"
    NORMAL = "normal"
    PRO = "pro"
    PRO_PLUS = "pro_plus"
    ULTIMATE = "ultimate"


class ResponseType(str, Enum):
    """Whether a synchronous capture returns image bytes or a JSON envelope."""

    BINARY = "BINARY"
    JSON = "JSON"


class JobStatus(str, Enum):
    """Lifecycle of an asynchronous job."""

    QUEUED = "QUEUED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """True once the job will not change state again."""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED)

    @property
    def is_success(self) -> bool:
        return self is JobStatus.COMPLETED
