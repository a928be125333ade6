# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Reproduction of the PromQL `histogram_quantile` function.

Estimates a quantile from cumulative bucket values alone by locating the
bucket holding the target rank and interpolating linearly inside it. The
numbers match the query engine, including its known inaccuracies:

- a rank above the last finite bucket saturates at the last boundary,
- the first bucket interpolates from 0 regardless of the data,
- values are assumed uniformly spread inside a bucket.
"""

from __future__ import annotations

from collections.abc import Sequence

from bucketsim.common.enums import InterpolationBranch
from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.common.models import HistogramCounts, InterpolationTrace


def explain_bucket_quantile(
    q: float,
    boundaries: Sequence[float],
    cumulative_counts: Sequence[float],
    total: float,
) -> InterpolationTrace:
    """Estimate a quantile and record every intermediate value of the computation.

    Args:
        q: Quantile level, strictly between 0 and 1.
        boundaries: Ascending finite bucket upper bounds.
        cumulative_counts: Cumulative value of each finite bucket (counts or rates).
        total: Value of the `+Inf` bucket.

    Returns:
        The trace, whose `result` is the estimate.

    Raises:
        ValueError: If `q` is outside (0, 1) or the counts do not match the boundaries.
        InvalidConfigurationError: If fewer than 2 boundaries are given.
    """
    if not 0.0 < q < 1.0:
        raise ValueError(f"quantile must be strictly between 0 and 1, got {q}")
    if len(boundaries) < 2:
        raise InvalidConfigurationError(
            f"at least 2 buckets are required to estimate a quantile, got {len(boundaries)}"
        )
    if len(cumulative_counts) != len(boundaries):
        raise ValueError(
            f"expected {len(boundaries)} bucket counts, got {len(cumulative_counts)}"
        )

    rank = total * q

    bucket = next(
        (i for i, count in enumerate(cumulative_counts) if count >= rank), None
    )

    if bucket is None:
        return InterpolationTrace(
            quantile=q,
            rank=rank,
            total=total,
            branch=InterpolationBranch.SATURATED,
            result=boundaries[-1],
        )

    if bucket == 0 and boundaries[0] <= 0:
        return InterpolationTrace(
            quantile=q,
            rank=rank,
            total=total,
            bucket_index=0,
            bucket_end=boundaries[0],
            branch=InterpolationBranch.NON_POSITIVE_FIRST_BUCKET,
            result=boundaries[0],
        )

    bucket_start = 0.0
    bucket_end = boundaries[bucket]
    count_in_bucket = cumulative_counts[bucket]
    local_rank = rank
    if bucket > 0:
        bucket_start = boundaries[bucket - 1]
        count_in_bucket -= cumulative_counts[bucket - 1]
        local_rank -= cumulative_counts[bucket - 1]

    if count_in_bucket == 0:
        branch = InterpolationBranch.EMPTY_BUCKET
        result = bucket_start
    else:
        branch = InterpolationBranch.INTERPOLATED
        result = bucket_start + (bucket_end - bucket_start) * (local_rank / count_in_bucket)

    return InterpolationTrace(
        quantile=q,
        rank=rank,
        total=total,
        bucket_index=bucket,
        bucket_start=bucket_start,
        bucket_end=bucket_end,
        local_rank=local_rank,
        count_in_bucket=count_in_bucket,
        branch=branch,
        result=result,
    )


def bucket_quantile(
    q: float,
    boundaries: Sequence[float],
    cumulative_counts: Sequence[float],
    total: float,
) -> float:
    """Estimate the `q` quantile from cumulative bucket values.

    See `explain_bucket_quantile` for the arguments and raised errors.
    """
    return explain_bucket_quantile(q, boundaries, cumulative_counts, total).result


def histogram_quantile(q: float, counts: HistogramCounts) -> float:
    """Estimate the `q` quantile of a histogram snapshot or rate vector."""
    return bucket_quantile(q, counts.boundaries, counts.counts, counts.inf_count)


def format_trace(trace: InterpolationTrace) -> str:
    """Render a trace as the arithmetic that produced the estimate."""
    if trace.branch == InterpolationBranch.INTERPOLATED:
        return (
            f"{trace.bucket_start} + ({trace.bucket_end} - {trace.bucket_start}) * "
            f"({trace.local_rank} / {trace.count_in_bucket}) = {trace.result} "
            f"[bucket={trace.bucket_index}, rank={trace.rank}]"
        )
    return (
        f"{trace.branch} bucket={trace.bucket_index} rank={trace.rank} "
        f"total={trace.total} -> {trace.result}"
    )
