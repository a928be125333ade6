# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from bucketsim.common.enums import InterpolationBranch
from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.common.models import BucketSet
from bucketsim.histogram import (
    CumulativeHistogram,
    bucket_quantile,
    explain_bucket_quantile,
    format_trace,
    histogram_quantile,
)

BOUNDARIES = (0.25, 0.5, 1.0, 2.5)


class TestBucketQuantile:
    """Tests for the histogram_quantile reproduction."""

    def test_nine_values_median(self, latency_buckets: BucketSet, nine_values) -> None:
        """Rank 4.5 of 9 lands in (0.1, 0.25] holding 5 values, 1.5 of them below the rank."""
        histogram = CumulativeHistogram(latency_buckets)
        for value in nine_values:
            histogram.add_datum(value)

        assert histogram_quantile(0.5, histogram.snapshot()) == pytest.approx(0.145)

    def test_interpolates_linearly_inside_bucket(self) -> None:
        # rank 5 of 10: 4 below 0.5, 2 in (0.5, 1]
        result = bucket_quantile(0.5, BOUNDARIES, [2, 4, 6, 8], 10)

        assert result == pytest.approx(0.5 + 0.5 * (1 / 2))

    def test_first_bucket_interpolates_from_zero(self) -> None:
        result = bucket_quantile(0.5, BOUNDARIES, [10, 10, 10, 10], 10)

        assert result == pytest.approx(0.125)

    def test_rank_in_inf_bucket_saturates(self) -> None:
        trace = explain_bucket_quantile(0.99, BOUNDARIES, [0, 0, 0, 1], 10)

        assert trace.result == 2.5
        assert trace.branch == InterpolationBranch.SATURATED
        assert trace.bucket_index is None

    def test_empty_bucket_returns_bucket_start(self) -> None:
        # Zero total: rank 0 is reached by the first bucket, which holds nothing.
        trace = explain_bucket_quantile(0.5, BOUNDARIES, [0, 0, 0, 0], 0)

        assert trace.result == 0.0
        assert trace.branch == InterpolationBranch.EMPTY_BUCKET

    def test_rank_on_bucket_top_stays_in_that_bucket(self) -> None:
        trace = explain_bucket_quantile(0.5, BOUNDARIES, [0, 5, 5, 10], 10)

        assert trace.bucket_index == 1
        assert trace.result == pytest.approx(0.5)

    def test_non_positive_first_bucket(self) -> None:
        trace = explain_bucket_quantile(0.5, (0.0, 1.0), [10, 10], 10)

        assert trace.result == 0.0
        assert trace.branch == InterpolationBranch.NON_POSITIVE_FIRST_BUCKET

    def test_estimate_never_exceeds_last_boundary(self, latency_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(latency_buckets)
        for value in (20.0, 30.0, 0.3, 45.0):
            histogram.add_datum(value)
        snapshot = histogram.snapshot()

        for q in (0.25, 0.5, 0.75, 0.99, 0.999):
            assert histogram_quantile(q, snapshot) <= latency_buckets[-1]

    def test_population_below_smallest_boundary(self, small_buckets: BucketSet) -> None:
        """Values below the first boundary interpolate from 0, giving boundaries[0] * q."""
        histogram = CumulativeHistogram(small_buckets)
        for value in (0.01, 0.02, 0.03, 0.04):
            histogram.add_datum(value)

        assert histogram_quantile(0.5, histogram.snapshot()) == pytest.approx(0.125)

    def test_works_on_float_rates(self) -> None:
        result = bucket_quantile(0.5, BOUNDARIES, [0.01, 0.02, 0.03, 0.04], 0.04)

        assert result == pytest.approx(0.5)

    def test_trace_records_interpolation(self) -> None:
        trace = explain_bucket_quantile(0.5, BOUNDARIES, [2, 4, 6, 8], 10)

        assert trace.branch == InterpolationBranch.INTERPOLATED
        assert trace.bucket_index == 2
        assert trace.bucket_start == 0.5
        assert trace.bucket_end == 1.0
        assert trace.rank == 5.0
        assert trace.local_rank == 1.0
        assert trace.count_in_bucket == 2
        assert "0.5 + (1.0 - 0.5)" in format_trace(trace)

    @pytest.mark.parametrize("q", [0.0, 1.0, -0.1, 2.0])
    def test_invalid_quantile(self, q: float) -> None:
        with pytest.raises(ValueError):
            bucket_quantile(q, BOUNDARIES, [1, 2, 3, 4], 4)

    def test_too_few_boundaries(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            bucket_quantile(0.5, (1.0,), [1], 1)

    def test_misaligned_counts(self) -> None:
        with pytest.raises(ValueError):
            bucket_quantile(0.5, BOUNDARIES, [1, 2], 2)
