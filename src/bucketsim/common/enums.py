# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class CaseInsensitiveStrEnum(str, Enum):
    """
    CaseInsensitiveStrEnum is a custom enumeration class that extends `str` and `Enum` to provide case-insensitive
    lookup functionality for its members.
    """

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.{self.name}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.value.lower() == other.lower()
        if isinstance(other, Enum):
            return self.value.lower() == other.value.lower()
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self.value.lower())

    @classmethod
    def _missing_(cls, value):
        """Return the member matching `value` case-insensitively, or None."""
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class RunMode(CaseInsensitiveStrEnum):
    """How the input stream is partitioned into independently evaluated windows."""

    CHUNKED = "chunked"
    """Fixed-size chunks of raw values; quantiles estimated directly from bucket counts."""

    RATE = "rate"
    """Fixed-duration sampling intervals in a sliding lookback window; quantiles
    estimated from extrapolated per-second bucket rates."""


class ErrorStatus(CaseInsensitiveStrEnum):
    """Whether the relative error of a report is defined."""

    OK = "ok"
    DEGENERATE_RATIO = "degenerate_ratio"
    """Either the actual or the estimated quantile is exactly zero."""


class InterpolationBranch(CaseInsensitiveStrEnum):
    """Which branch of the histogram_quantile algorithm produced an estimate."""

    INTERPOLATED = "interpolated"
    SATURATED = "saturated"
    """The rank fell into the +Inf bucket; the last finite boundary is returned."""

    NON_POSITIVE_FIRST_BUCKET = "non_positive_first_bucket"
    EMPTY_BUCKET = "empty_bucket"
    """The selected bucket holds no observations; its lower bound is returned."""


class BucketLayout(CaseInsensitiveStrEnum):
    """Boundary sequence shapes produced by the bucket generators."""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOG_LINEAR = "log-linear"
