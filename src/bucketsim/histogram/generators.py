# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Bucket boundary layouts commonly used by histogram client libraries."""

from __future__ import annotations

import numpy as np

from bucketsim.common.config import load_bucket_set
from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.common.models import BucketSet

# Boundaries are rounded to this many significant digits to drop float noise (0.30000000000000004).
_SIGNIFICANT_DIGITS = 12


def _clean(values: np.ndarray) -> BucketSet:
    return load_bucket_set(float(f"{value:.{_SIGNIFICANT_DIGITS}g}") for value in values)


def linear_buckets(start: float, width: float, count: int) -> BucketSet:
    """`count` boundaries starting at `start`, each `width` apart."""
    if count < 1:
        raise InvalidConfigurationError(f"count must be at least 1, got {count}")
    if start <= 0 or width <= 0:
        raise InvalidConfigurationError(
            f"start and width must be positive, got start={start} width={width}"
        )
    return _clean(start + width * np.arange(count, dtype=np.float64))


def exponential_buckets(start: float, factor: float, count: int) -> BucketSet:
    """`count` boundaries starting at `start`, each `factor` times the previous one."""
    if count < 1:
        raise InvalidConfigurationError(f"count must be at least 1, got {count}")
    if start <= 0:
        raise InvalidConfigurationError(f"start must be positive, got {start}")
    if factor <= 1:
        raise InvalidConfigurationError(f"factor must be greater than 1, got {factor}")
    return _clean(start * np.power(factor, np.arange(count, dtype=np.float64)))


def log_linear_buckets(
    base: float, low_power: int, high_power: int, per_magnitude: int
) -> BucketSet:
    """Linearly spaced boundaries inside every magnitude from `base**low_power` to `base**high_power`.

    Each magnitude `[base**p, base**(p+1))` is split into `per_magnitude` equal
    steps, and `base**high_power` closes the range. For example base 10, powers
    -1 to 0 and 9 steps gives `0.1, 0.2, ..., 0.9, 1`.
    """
    if base <= 1:
        raise InvalidConfigurationError(f"base must be greater than 1, got {base}")
    if high_power <= low_power:
        raise InvalidConfigurationError(
            f"high_power ({high_power}) must be greater than low_power ({low_power})"
        )
    if per_magnitude < 1:
        raise InvalidConfigurationError(
            f"per_magnitude must be at least 1, got {per_magnitude}"
        )
    magnitudes = [
        np.linspace(
            float(base) ** power,
            float(base) ** (power + 1),
            per_magnitude,
            endpoint=False,
        )
        for power in range(low_power, high_power)
    ]
    magnitudes.append(np.array([float(base) ** high_power]))
    return _clean(np.concatenate(magnitudes))
