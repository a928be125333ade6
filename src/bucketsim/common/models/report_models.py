# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Per-window error reports and run level summaries."""

from __future__ import annotations

from pydantic import Field

from bucketsim.common.enums import ErrorStatus, RunMode
from bucketsim.common.models.base_models import FrozenBucketSimModel


def percentile_label(quantile: float) -> str:
    """Label a quantile level as a percentile with at most 5 decimals (`P99.9`, `P50`)."""
    percent = f"{quantile * 100:.5f}".rstrip("0").rstrip(".")
    return f"P{percent}"


def compute_error_percent(actual: float, estimated: float) -> float | None:
    """Relative error of the larger value against the smaller one, in percent.

    Returns None when either value is exactly zero, where the ratio is undefined.
    """
    if actual == 0 or estimated == 0:
        return None
    return abs(1 - max(actual, estimated) / min(actual, estimated)) * 100


# =============================================================================
# Reports
# =============================================================================


class QuantileErrorReport(FrozenBucketSimModel):
    """True versus bucket estimated quantile for one window and one level."""

    quantile: float = Field(gt=0.0, lt=1.0, description="Quantile level")
    actual: float = Field(description="Nearest-rank quantile of the raw values")
    estimated: float = Field(description="histogram_quantile estimate from the buckets")
    error_percent: float | None = Field(
        default=None,
        description="Relative error in percent, None when the ratio is degenerate",
    )
    error_status: ErrorStatus = Field(default=ErrorStatus.OK)

    @classmethod
    def create(cls, quantile: float, actual: float, estimated: float) -> QuantileErrorReport:
        error_percent = compute_error_percent(actual, estimated)
        return cls(
            quantile=quantile,
            actual=actual,
            estimated=estimated,
            error_percent=error_percent,
            error_status=ErrorStatus.OK
            if error_percent is not None
            else ErrorStatus.DEGENERATE_RATIO,
        )

    @property
    def label(self) -> str:
        return percentile_label(self.quantile)

    @property
    def is_degenerate(self) -> bool:
        return self.error_status == ErrorStatus.DEGENERATE_RATIO


class WindowResult(FrozenBucketSimModel):
    """One evaluated chunk (chunked mode) or lookback window (rate mode)."""

    index: int = Field(ge=1, description="1-based position of the window in the run")
    label: str = Field(description="Human readable window description")
    count: int = Field(ge=0, description="Number of raw values evaluated")
    first_values: tuple[float, ...] = Field(
        default=(),
        description="Leading raw values of the window, used to locate it in the input",
    )
    start_time: float | None = Field(
        default=None, description="Range start in epoch seconds (rate mode)"
    )
    end_time: float | None = Field(
        default=None, description="Range end in epoch seconds (rate mode)"
    )
    lap_sec: float = Field(default=0.0, description="Seconds spent since the previous window")
    reports: tuple[QuantileErrorReport, ...] = Field(default=())

    def report_for(self, quantile: float) -> QuantileErrorReport | None:
        for report in self.reports:
            if report.quantile == quantile:
                return report
        return None


# =============================================================================
# Summaries
# =============================================================================


class StatRange(FrozenBucketSimModel):
    """Minimum, maximum and average of a set of values."""

    min: float
    max: float
    avg: float


class QuantileSummary(FrozenBucketSimModel):
    """Aggregated reports of one quantile level across all windows."""

    quantile: float
    label: str
    report_count: int = Field(description="Number of windows that produced a report")
    degenerate_count: int = Field(
        default=0, description="Reports whose relative error was undefined"
    )
    error: StatRange | None = Field(
        default=None,
        description="Relative error in percent, None when every report was degenerate",
    )
    actual: StatRange
    estimated: StatRange


class AggregateSummary(FrozenBucketSimModel):
    """Per quantile level summaries in first-seen order."""

    quantiles: tuple[QuantileSummary, ...] = Field(default=())

    def get(self, quantile: float) -> QuantileSummary | None:
        for summary in self.quantiles:
            if summary.quantile == quantile:
                return summary
        return None


class RunSummary(FrozenBucketSimModel):
    """Everything an exporter needs to describe a finished run."""

    mode: RunMode
    buckets: tuple[float, ...]
    quantiles: tuple[float, ...]
    data_points: int = Field(ge=0, description="Number of raw values read")
    windows: int = Field(ge=0, description="Number of evaluated chunks or windows")
    skipped_windows: int = Field(
        default=0, ge=0, description="Chunks or windows skipped for lack of data"
    )
    chunk_size: int | None = None
    sample_interval: float | None = None
    lookback: float | None = None
    elapsed_sec: float = Field(ge=0.0)
    aggregate: AggregateSummary
