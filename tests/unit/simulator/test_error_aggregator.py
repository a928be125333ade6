# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from bucketsim.common.models import QuantileErrorReport, WindowResult
from bucketsim.simulator import ErrorAggregator


@pytest.fixture
def aggregator() -> ErrorAggregator:
    aggregator = ErrorAggregator()
    aggregator.record(QuantileErrorReport.create(0.5, actual=1.0, estimated=1.1))
    aggregator.record(QuantileErrorReport.create(0.5, actual=2.0, estimated=2.6))
    aggregator.record(QuantileErrorReport.create(0.99, actual=4.0, estimated=5.0))
    return aggregator


class TestErrorAggregator:
    def test_summarize_per_quantile(self, aggregator: ErrorAggregator) -> None:
        summary = aggregator.summarize().get(0.5)

        assert summary.label == "P50"
        assert summary.report_count == 2
        assert summary.degenerate_count == 0
        assert summary.error.min == pytest.approx(10.0)
        assert summary.error.max == pytest.approx(30.0)
        assert summary.error.avg == pytest.approx(20.0)
        assert summary.actual.min == 1.0
        assert summary.actual.max == 2.0
        assert summary.estimated.avg == pytest.approx(1.85)

    def test_quantiles_keep_first_seen_order(self, aggregator: ErrorAggregator) -> None:
        aggregator.record(QuantileErrorReport.create(0.25, actual=1.0, estimated=1.0))

        assert aggregator.quantiles == [0.5, 0.99, 0.25]
        assert [s.quantile for s in aggregator.summarize().quantiles] == [0.5, 0.99, 0.25]

    def test_summarize_is_idempotent(self, aggregator: ErrorAggregator) -> None:
        assert aggregator.summarize() == aggregator.summarize()
        assert len(aggregator) == 3

    def test_degenerate_reports_excluded_from_error(self) -> None:
        aggregator = ErrorAggregator()
        aggregator.record(QuantileErrorReport.create(0.5, actual=0.0, estimated=0.1))
        aggregator.record(QuantileErrorReport.create(0.5, actual=1.0, estimated=1.5))

        summary = aggregator.summarize().get(0.5)

        assert summary.report_count == 2
        assert summary.degenerate_count == 1
        assert summary.error.min == pytest.approx(50.0)
        assert summary.error.max == pytest.approx(50.0)
        assert summary.actual.min == 0.0

    def test_only_degenerate_reports(self) -> None:
        aggregator = ErrorAggregator()
        aggregator.record(QuantileErrorReport.create(0.5, actual=0.1, estimated=0.0))

        summary = aggregator.summarize().get(0.5)

        assert summary.error is None
        assert summary.degenerate_count == 1

    def test_record_window(self) -> None:
        aggregator = ErrorAggregator()
        window = WindowResult(
            index=1,
            label="chunk 1",
            count=10,
            reports=(
                QuantileErrorReport.create(0.5, actual=1.0, estimated=1.0),
                QuantileErrorReport.create(0.9, actual=2.0, estimated=2.5),
            ),
        )

        aggregator.record_window(window)

        assert aggregator.quantiles == [0.5, 0.9]
        assert aggregator.reports(0.9)[0].error_percent == pytest.approx(25.0)
        assert aggregator.reports(0.75) == []

    def test_empty(self) -> None:
        assert ErrorAggregator().summarize().quantiles == ()
        assert ErrorAggregator().summarize().get(0.5) is None
