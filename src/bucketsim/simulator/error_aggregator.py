# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import numpy as np

from bucketsim.common.models import (
    AggregateSummary,
    QuantileErrorReport,
    QuantileSummary,
    StatRange,
    WindowResult,
    percentile_label,
)


def _stat_range(values: list[float]) -> StatRange:
    array = np.asarray(values, dtype=np.float64)
    return StatRange(
        min=float(np.min(array)),
        max=float(np.max(array)),
        avg=float(np.mean(array)),
    )


class ErrorAggregator:
    """Run level log of quantile error reports, reduced to min/max/average per level.

    Reports are kept per quantile level in the order the levels were first
    seen. Degenerate reports count towards the actual and estimated
    statistics but not towards the error statistics.
    """

    def __init__(self) -> None:
        self._reports: dict[float, list[QuantileErrorReport]] = {}

    def record(self, report: QuantileErrorReport) -> None:
        self._reports.setdefault(report.quantile, []).append(report)

    def record_window(self, window: WindowResult) -> None:
        for report in window.reports:
            self.record(report)

    def reports(self, quantile: float) -> list[QuantileErrorReport]:
        return list(self._reports.get(quantile, []))

    @property
    def quantiles(self) -> list[float]:
        return list(self._reports)

    def __len__(self) -> int:
        return sum(len(reports) for reports in self._reports.values())

    def summarize(self) -> AggregateSummary:
        """Reduce the log to per level statistics. Does not modify the log."""
        summaries = []
        for quantile, reports in self._reports.items():
            errors = [r.error_percent for r in reports if r.error_percent is not None]
            summaries.append(
                QuantileSummary(
                    quantile=quantile,
                    label=percentile_label(quantile),
                    report_count=len(reports),
                    degenerate_count=len(reports) - len(errors),
                    error=_stat_range(errors) if errors else None,
                    actual=_stat_range([r.actual for r in reports]),
                    estimated=_stat_range([r.estimated for r in reports]),
                )
            )
        return AggregateSummary(quantiles=tuple(summaries))
