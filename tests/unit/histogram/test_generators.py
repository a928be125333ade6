# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.histogram import (
    exponential_buckets,
    linear_buckets,
    log_linear_buckets,
)


class TestLinearBuckets:
    def test_float_noise_is_rounded(self) -> None:
        buckets = linear_buckets(0.1, 0.1, 5)

        assert buckets.boundaries == (0.1, 0.2, 0.3, 0.4, 0.5)

    def test_single_bucket(self) -> None:
        assert linear_buckets(1, 1, 1).boundaries == (1.0,)

    @pytest.mark.parametrize(
        "start, width, count",
        [
            pytest.param(0.1, 0.1, 0, id="zero-count"),
            pytest.param(0.0, 0.1, 5, id="zero-start"),
            pytest.param(0.1, -0.1, 5, id="negative-width"),
        ],
    )  # fmt: skip
    def test_invalid_arguments(self, start: float, width: float, count: int) -> None:
        with pytest.raises(InvalidConfigurationError):
            linear_buckets(start, width, count)


class TestExponentialBuckets:
    def test_doubling(self) -> None:
        buckets = exponential_buckets(0.005, 2, 4)

        assert buckets.boundaries == (0.005, 0.01, 0.02, 0.04)

    @pytest.mark.parametrize(
        "start, factor, count",
        [
            pytest.param(0.005, 2, 0, id="zero-count"),
            pytest.param(-1.0, 2, 4, id="negative-start"),
            pytest.param(0.005, 1, 4, id="factor-one"),
        ],
    )  # fmt: skip
    def test_invalid_arguments(self, start: float, factor: float, count: int) -> None:
        with pytest.raises(InvalidConfigurationError):
            exponential_buckets(start, factor, count)


class TestLogLinearBuckets:
    def test_one_magnitude(self) -> None:
        buckets = log_linear_buckets(10, -1, 0, 9)

        assert buckets.boundaries == (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)

    def test_powers_only(self) -> None:
        assert log_linear_buckets(10, -2, 1, 1).boundaries == (0.01, 0.1, 1.0, 10.0)

    def test_boundaries_are_ascending(self) -> None:
        boundaries = log_linear_buckets(10, -3, 2, 4).boundaries

        assert list(boundaries) == sorted(set(boundaries))
        assert boundaries[0] == 0.001
        assert boundaries[-1] == 100.0

    @pytest.mark.parametrize(
        "base, low_power, high_power, per_magnitude",
        [
            pytest.param(1, -1, 0, 9, id="base-one"),
            pytest.param(10, 0, 0, 9, id="empty-range"),
            pytest.param(10, -1, 0, 0, id="zero-steps"),
        ],
    )  # fmt: skip
    def test_invalid_arguments(
        self, base: float, low_power: int, high_power: int, per_magnitude: int
    ) -> None:
        with pytest.raises(InvalidConfigurationError):
            log_linear_buckets(base, low_power, high_power, per_magnitude)
