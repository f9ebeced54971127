"""Compose: several captures laid out into one image.

A compose request either lists independent ``captures`` or renders one
``url`` under several ``variants`` (devices, themes). Setting ``is_async``
(``"async"`` on the wire) turns the call into a job.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from allscreenshots.models.base import ApiModel, RequestModel
from allscreenshots.models.common import BlockLevel, ImageFormat, ViewportConfig, WaitUntil


class LayoutType(str, Enum):
    GRID = "GRID"
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    MASONRY = "MASONRY"
    MONDRIAN = "MONDRIAN"
    PARTITIONING = "PARTITIONING"
    AUTO = "AUTO"


class Alignment(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class CaptureItem(RequestModel):
    """One independent capture in a compose request."""

    url: str
    id: str | None = None
    label: str | None = None
    viewport: ViewportConfig | None = None
    device: str | None = None
    full_page: bool | None = None
    dark_mode: bool | None = None
    delay: int | None = None


class VariantConfig(RequestModel):
    """One rendering of the shared URL in variants mode."""

    id: str | None = None
    label: str | None = None
    viewport: ViewportConfig | None = None
    device: str | None = None
    full_page: bool | None = None
    dark_mode: bool | None = None
    delay: int | None = None
    custom_css: str | None = None


class CaptureDefaults(RequestModel):
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


class LabelConfig(RequestModel):
    enabled: bool | None = None
    font_size: int | None = None
    color: str | None = None
    position: str | None = None


class BorderConfig(RequestModel):
    enabled: bool | None = None
    width: int | None = None
    color: str | None = None
    radius: int | None = None


class ShadowConfig(RequestModel):
    enabled: bool | None = None
    blur: int | None = None
    color: str | None = None
    offset_x: int | None = None
    offset_y: int | None = None


class ComposeOutputConfig(RequestModel):
    """How the captures are arranged and encoded."""

    layout: LayoutType | None = None
    format: ImageFormat | None = None
    quality: int | None = None
    columns: int | None = None
    spacing: int | None = None
    padding: int | None = None
    background: str | None = None
    alignment: Alignment | None = None
    max_width: int | None = None
    max_height: int | None = None
    thumbnail_width: int | None = None
    labels: LabelConfig | None = None
    border: BorderConfig | None = None
    shadow: ShadowConfig | None = None


class ComposeRequest(RequestModel):
    captures: list[CaptureItem] | None = None
    url: str | None = None
    variants: list[VariantConfig] | None = None
    defaults: CaptureDefaults | None = None
    output: ComposeOutputConfig | None = None
    is_async: bool | None = Field(default=None, alias="async")
    webhook_url: str | None = None
    webhook_secret: str | None = None
    captures_mode: bool | None = None
    variants_mode: bool | None = None

    @classmethod
    def from_captures(
        cls, captures: list[CaptureItem], output: ComposeOutputConfig | None = None
    ) -> ComposeRequest:
        return cls(captures=captures, output=output)

    @classmethod
    def from_variants(
        cls, url: str, variants: list[VariantConfig], output: ComposeOutputConfig | None = None
    ) -> ComposeRequest:
        return cls(url=url, variants=variants, output=output)


class ComposeMetadata(ApiModel):
    capture_count: int | None = None
    layout_type: str | None = None


class ComposeResponse(ApiModel):
    """A finished composition."""

    url: str | None = None
    storage_url: str | None = None
    expires_at: str | None = None
    width: int | None = None
    height: int | None = None
    format: str | None = None
    file_size: int | None = None
    render_time_ms: int | None = None
    layout: str | None = None
    metadata: ComposeMetadata | None = None


class ComposeJobStatusResponse(ApiModel):
    job_id: str
    status: str
    progress: int | None = None
    total_captures: int | None = None
    completed_captures: int | None = None
    result: ComposeResponse | None = None
    error_code: str | None = None
    error_message: str | None = None
    created_at: str | None = None
    completed_at: str | None = None


class ComposeJobSummaryResponse(ApiModel):
    job_id: str
    status: str
    total_captures: int | None = None
    completed_captures: int | None = None
    failed_captures: int | None = None
    progress: int | None = None
    layout_type: str | None = None
    created_at: str | None = None
    completed_at: str | None = None


class PlacementPreview(ApiModel):
    index: int
    x: int
    y: int
    width: int
    height: int
    label: str | None = None


class LayoutPreviewResponse(ApiModel):
    """Where each image would be placed, computed without capturing anything."""

    layout: str
    resolved_layout: str | None = None
    canvas_width: int
    canvas_height: int
    placements: list[PlacementPreview]
    metadata: Any | None = None
