# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Value models exchanged between the histogram engines.

All models here are immutable. A `HistogramCounts` is the only input shape of
the bucket quantile engine, whether it holds raw cumulative counts (chunked
mode) or extrapolated per-second rates (rate mode).
"""

from __future__ import annotations

import math

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from bucketsim.common.constants import INF_LABEL
from bucketsim.common.enums import InterpolationBranch
from bucketsim.common.models.base_models import FrozenBucketSimModel


def format_boundary(boundary: float) -> str:
    """Format a boundary the way it appears in an `le` label (`1`, `0.25`, `2.5`)."""
    boundary = float(boundary)
    if boundary.is_integer():
        return str(int(boundary))
    return repr(boundary)


# =============================================================================
# Bucket Boundaries
# =============================================================================


class BucketSet(FrozenBucketSimModel):
    """Strictly ascending, positive, finite histogram upper bounds (`le` labels).

    The position of a boundary in the set is the identity of its bucket. The
    implicit `+Inf` bucket is not part of the set.
    """

    boundaries: tuple[float, ...] = Field(
        min_length=1,
        description="Ascending upper bounds of the finite buckets, in seconds",
    )

    @field_validator("boundaries")
    @classmethod
    def validate_boundaries(cls, boundaries: tuple[float, ...]) -> tuple[float, ...]:
        for boundary in boundaries:
            if not math.isfinite(boundary):
                raise ValueError(f"bucket boundaries must be finite, got {boundary}")
            if boundary <= 0:
                raise ValueError(f"bucket boundaries must be positive, got {boundary}")
        for lower, upper in zip(boundaries, boundaries[1:]):
            if upper <= lower:
                raise ValueError(
                    "bucket boundaries must be strictly ascending without duplicates, "
                    f"got {format_boundary(lower)} followed by {format_boundary(upper)}"
                )
        return boundaries

    @classmethod
    def from_values(cls, values) -> BucketSet:
        return cls(boundaries=tuple(float(v) for v in values))

    def __len__(self) -> int:
        return len(self.boundaries)

    def __getitem__(self, index: int) -> float:
        return self.boundaries[index]

    @property
    def labels(self) -> list[str]:
        """`le` label of every finite bucket, in order."""
        return [format_boundary(b) for b in self.boundaries]


# =============================================================================
# Counts, Snapshots and Rates
# =============================================================================


class HistogramCounts(FrozenBucketSimModel):
    """Immutable cumulative bucket values with the `+Inf` count and the sum.

    Values are plain counts when taken from a `CumulativeHistogram` and
    per-second rates when produced by rate extrapolation.
    """

    boundaries: tuple[float, ...] = Field(
        description="Upper bounds of the finite buckets, shared with the originating BucketSet",
    )
    counts: tuple[float, ...] = Field(
        description="Cumulative value of each finite bucket, aligned with boundaries",
    )
    inf_count: float = Field(description="Value of the +Inf bucket (the total count)")
    sum: float = Field(description="Sum of all observed values")

    @model_validator(mode="after")
    def validate_alignment(self) -> Self:
        if len(self.counts) != len(self.boundaries):
            raise ValueError(
                f"expected {len(self.boundaries)} bucket counts, got {len(self.counts)}"
            )
        return self

    def to_bucket_dict(self) -> dict[str, float]:
        """Return the counts keyed by `le` label in Prometheus form, `+Inf` last."""
        buckets = {
            format_boundary(boundary): count
            for boundary, count in zip(self.boundaries, self.counts)
        }
        buckets[INF_LABEL] = self.inf_count
        return buckets


class HistogramSnapshot(FrozenBucketSimModel):
    """The cumulative histogram as scraped at the end of one sampling interval."""

    timestamp: float = Field(description="Snapshot time in epoch seconds")
    counts: HistogramCounts = Field(description="Cumulative counts at snapshot time")
    values: tuple[float, ...] = Field(
        default=(),
        description="Raw values observed during the sampling interval ending at this snapshot",
    )


class RateExtrapolation(FrozenBucketSimModel):
    """Result of `rate()` over a window of snapshots."""

    sampled_interval: float = Field(
        description="Seconds between the first and the last snapshot"
    )
    extrapolated_interval: float = Field(
        description="Sampled interval extended towards the range boundaries"
    )
    range_start: float = Field(description="Start of the range selector in epoch seconds")
    range_end: float = Field(description="End of the range selector in epoch seconds")
    rates: HistogramCounts = Field(description="Per-second rate of every bucket, +Inf and sum")


class InterpolationTrace(FrozenBucketSimModel):
    """How a single bucket quantile estimate was derived."""

    quantile: float
    rank: float = Field(description="Target rank, total * quantile")
    total: float
    bucket_index: int | None = Field(
        default=None,
        description="Index of the bucket the rank fell into, None when saturated",
    )
    bucket_start: float | None = None
    bucket_end: float | None = None
    local_rank: float | None = None
    count_in_bucket: float | None = None
    branch: InterpolationBranch
    result: float
