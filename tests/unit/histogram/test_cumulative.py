# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from pydantic import ValidationError

from bucketsim.common.models import BucketSet, HistogramCounts
from bucketsim.histogram import CumulativeHistogram


class TestCumulativeHistogram:
    """Tests for CumulativeHistogram accumulation."""

    def test_empty_histogram(self, small_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(small_buckets)

        assert len(histogram) == 4
        assert histogram.counts == [0, 0, 0, 0]
        assert histogram.inf_count == 0
        assert histogram.sum == 0.0

    @pytest.mark.parametrize(
        "value,expected_counts",
        [
            pytest.param(0.1, [1, 1, 1, 1], id="below-first-bucket"),
            pytest.param(0.25, [1, 1, 1, 1], id="equal-to-first-boundary"),
            pytest.param(0.3, [0, 1, 1, 1], id="second-bucket"),
            pytest.param(1.0, [0, 0, 1, 1], id="equal-to-middle-boundary"),
            pytest.param(2.5, [0, 0, 0, 1], id="equal-to-last-boundary"),
            pytest.param(3.0, [0, 0, 0, 0], id="above-last-boundary"),
            pytest.param(-1.0, [1, 1, 1, 1], id="negative"),
        ],
    )  # fmt: skip
    def test_add_datum_increments_every_bucket_at_or_above_value(
        self, small_buckets: BucketSet, value: float, expected_counts: list[int]
    ) -> None:
        """A value is counted by every bucket whose upper bound is not below it."""
        histogram = CumulativeHistogram(small_buckets)

        histogram.add_datum(value)

        assert histogram.counts == expected_counts
        assert histogram.inf_count == 1
        assert histogram.sum == value

    def test_inf_count_equals_number_of_values(self, latency_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(latency_buckets)
        values = [0.001 * i for i in range(1, 2001)]

        for value in values:
            histogram.add_datum(value)

        assert histogram.inf_count == len(values)
        assert histogram.sum == pytest.approx(sum(values))

    def test_counts_are_monotonic(self, latency_buckets: BucketSet, nine_values) -> None:
        histogram = CumulativeHistogram(latency_buckets)
        for value in [*nine_values, 20.0, 0.001, 7.5]:
            histogram.add_datum(value)

        counts = histogram.counts
        assert all(a <= b for a, b in zip(counts, counts[1:]))
        assert counts[-1] <= histogram.inf_count

    def test_nine_values_counts(self, latency_buckets: BucketSet, nine_values) -> None:
        histogram = CumulativeHistogram(latency_buckets)
        for value in nine_values:
            histogram.add_datum(value)

        assert histogram.counts == [0, 0, 0, 1, 3, 8, 9, 9, 9, 9, 9]
        assert histogram.count(4) == 3
        assert histogram.count(-1) == 9

    def test_count_out_of_range(self, small_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(small_buckets)

        with pytest.raises(IndexError):
            histogram.count(4)

    def test_reset(self, small_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(small_buckets)
        histogram.add_datum(0.3)

        histogram.reset()

        assert histogram.counts == [0, 0, 0, 0]
        assert histogram.inf_count == 0
        assert histogram.sum == 0.0


class TestSnapshot:
    """Tests for CumulativeHistogram.snapshot."""

    def test_snapshot_is_a_copy(self, small_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(small_buckets)
        histogram.add_datum(0.3)

        snapshot = histogram.snapshot()
        histogram.add_datum(0.1)

        assert isinstance(snapshot, HistogramCounts)
        assert snapshot.counts == (0, 1, 1, 1)
        assert snapshot.inf_count == 1
        assert snapshot.sum == pytest.approx(0.3)
        assert snapshot.boundaries == (0.25, 0.5, 1.0, 2.5)

    def test_snapshot_is_immutable(self, small_buckets: BucketSet) -> None:
        snapshot = CumulativeHistogram(small_buckets).snapshot()

        with pytest.raises(ValidationError):
            snapshot.inf_count = 5

    def test_to_bucket_dict(self, small_buckets: BucketSet) -> None:
        histogram = CumulativeHistogram(small_buckets)
        for value in (0.1, 0.7, 3.0):
            histogram.add_datum(value)

        assert histogram.snapshot().to_bucket_dict() == {
            "0.25": 1,
            "0.5": 1,
            "1": 2,
            "2.5": 2,
            "+Inf": 3,
        }
