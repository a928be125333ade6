# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Prometheus-style cumulative histogram accumulator."""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate

from bucketsim.common.models import BucketSet, HistogramCounts


class CumulativeHistogram:
    """Accumulates raw values into cumulative `le` buckets plus `+Inf` and a sum.

    Each value is stored once in the first bucket whose upper bound is not
    below it; cumulative counts are derived on read, so `count(i)` is the
    number of values `<= buckets[i]` exactly as if every bucket had been
    incremented.

    Args:
        buckets: Shared, read-only bucket boundaries.
    """

    def __init__(self, buckets: BucketSet) -> None:
        self.buckets = buckets
        self._boundaries = buckets.boundaries
        self.reset()

    def reset(self) -> None:
        """Drop all observations, keeping the bucket boundaries."""
        # One slot per finite bucket plus a trailing slot for values above the last bound.
        self._bucket_counts = [0] * (len(self._boundaries) + 1)
        self._inf_count = 0
        self._sum = 0.0

    def add_datum(self, value: float) -> None:
        """Observe one value: every bucket with `value <= le`, `+Inf` and the sum."""
        self._bucket_counts[bisect_left(self._boundaries, value)] += 1
        self._inf_count += 1
        self._sum += value

    def count(self, index: int) -> int:
        """Cumulative count of the bucket at `index`."""
        if not -len(self._boundaries) <= index < len(self._boundaries):
            raise IndexError(f"bucket index {index} out of range")
        return sum(self._bucket_counts[: index % len(self._boundaries) + 1])

    @property
    def counts(self) -> list[int]:
        """Cumulative count of every finite bucket, aligned with the boundaries."""
        return list(accumulate(self._bucket_counts[:-1]))

    @property
    def inf_count(self) -> int:
        return self._inf_count

    @property
    def sum(self) -> float:
        return self._sum

    def __len__(self) -> int:
        return len(self._boundaries)

    def snapshot(self) -> HistogramCounts:
        """Return an immutable copy of the current counts."""
        return HistogramCounts(
            boundaries=self._boundaries,
            counts=tuple(self.counts),
            inf_count=self._inf_count,
            sum=self._sum,
        )
