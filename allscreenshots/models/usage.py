"""Account usage and quota."""

from __future__ import annotations

from allscreenshots.models.base import ApiModel


class PeriodUsageResponse(ApiModel):
    period_start: str
    period_end: str
    screenshots_count: int
    bandwidth_bytes: int
    bandwidth_formatted: str


class TotalsResponse(ApiModel):
    screenshots_count: int
    bandwidth_bytes: int
    bandwidth_formatted: str


class QuotaResponse(ApiModel):
    monthly_limit: int
    monthly_bandwidth_bytes: int | None = None
    monthly_bandwidth_formatted: str | None = None


class UsageResponse(ApiModel):
    tier: str
    current_period: PeriodUsageResponse
    quota: QuotaResponse | None = None
    history: list[PeriodUsageResponse] | None = None
    totals: TotalsResponse | None = None


class QuotaDetailResponse(ApiModel):
    limit: int
    used: int
    remaining: int
    percent_used: int


class BandwidthQuotaResponse(ApiModel):
    limit_bytes: int
    limit_formatted: str
    used_bytes: int
    used_formatted: str
    remaining_bytes: int
    remaining_formatted: str
    percent_used: int


class QuotaStatusResponse(ApiModel):
    """Remaining allowance for the current billing period."""

    tier: str
    screenshots: QuotaDetailResponse
    bandwidth: BandwidthQuotaResponse
    period_ends: str | None = None
