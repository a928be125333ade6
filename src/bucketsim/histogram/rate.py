# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Reproduction of the PromQL `rate()` function over histogram snapshots.

The increase between the first and the last snapshot of a range is scaled up
to cover the gaps between the samples and the range boundaries, then divided
by the range duration:

- a gap shorter than 1.1x the average sample spacing is extrapolated in full,
- a longer gap is extrapolated by half the average spacing only.

Counter resets are not detected; a decreasing counter yields a negative rate.
"""

from __future__ import annotations

from collections.abc import Sequence

from bucketsim.common.constants import EXTRAPOLATION_THRESHOLD_FACTOR
from bucketsim.common.exceptions import InsufficientSnapshotsError
from bucketsim.common.models import (
    HistogramCounts,
    HistogramSnapshot,
    RateExtrapolation,
)


def extrapolated_interval(
    first_time: float,
    last_time: float,
    num_samples: int,
    range_start: float,
    range_end: float,
) -> float:
    """Return the sampled interval extended towards both range boundaries.

    Raises:
        InsufficientSnapshotsError: If fewer than 2 samples or no time elapsed between them.
    """
    if num_samples < 2:
        raise InsufficientSnapshotsError(
            f"at least 2 snapshots are required to compute a rate, got {num_samples}"
        )
    sampled_interval = last_time - first_time
    if sampled_interval <= 0:
        raise InsufficientSnapshotsError(
            f"snapshots must span a positive interval, got {sampled_interval}s"
        )

    duration_to_start = first_time - range_start
    duration_to_end = range_end - last_time
    average_gap = sampled_interval / (num_samples - 1)
    threshold = average_gap * EXTRAPOLATION_THRESHOLD_FACTOR

    interval = sampled_interval
    if duration_to_start < threshold:
        interval += duration_to_start
    else:
        interval += average_gap / 2
    if duration_to_end < threshold:
        interval += duration_to_end
    else:
        interval += average_gap / 2
    return interval


def extrapolate_rates(
    snapshots: Sequence[HistogramSnapshot],
    range_start: float,
    range_end: float,
) -> RateExtrapolation:
    """Compute the per-second rate of every bucket, `+Inf` and the sum.

    Args:
        snapshots: Snapshots of one histogram, ordered by timestamp.
        range_start: Start of the range selector in epoch seconds.
        range_end: End of the range selector in epoch seconds.

    Returns:
        The intervals used and a HistogramCounts holding the rates.

    Raises:
        InsufficientSnapshotsError: If fewer than 2 snapshots or a zero sampled interval.
        ValueError: If the range is empty, the snapshots are out of order or
            do not share the same buckets.
    """
    if range_end <= range_start:
        raise ValueError(
            f"range end ({range_end}) must be after range start ({range_start})"
        )
    if len(snapshots) < 2:
        raise InsufficientSnapshotsError(
            f"at least 2 snapshots are required to compute a rate, got {len(snapshots)}"
        )

    first, last = snapshots[0], snapshots[-1]
    for previous, current in zip(snapshots, snapshots[1:]):
        if current.timestamp < previous.timestamp:
            raise ValueError("snapshots must be ordered by timestamp")
        if current.counts.boundaries != first.counts.boundaries:
            raise ValueError("all snapshots must share the same bucket boundaries")

    sampled_interval = last.timestamp - first.timestamp
    interval = extrapolated_interval(
        first.timestamp, last.timestamp, len(snapshots), range_start, range_end
    )
    range_duration = range_end - range_start

    def _rate(first_value: float, last_value: float) -> float:
        return (last_value - first_value) * (interval / sampled_interval) / range_duration

    rates = HistogramCounts(
        boundaries=first.counts.boundaries,
        counts=tuple(
            _rate(first_count, last_count)
            for first_count, last_count in zip(first.counts.counts, last.counts.counts)
        ),
        inf_count=_rate(first.counts.inf_count, last.counts.inf_count),
        sum=_rate(first.counts.sum, last.counts.sum),
    )
    return RateExtrapolation(
        sampled_interval=sampled_interval,
        extrapolated_interval=interval,
        range_start=range_start,
        range_end=range_end,
        rates=rates,
    )
