# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared test configuration and fixtures for all test types.

ONLY ADD FIXTURES HERE THAT ARE USED IN ALL TEST TYPES.
"""

import logging

import pytest

from bucketsim.common.models import BucketSet

# Boundaries commonly used for request latency histograms, in seconds.
DEFAULT_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10)

# Nine request latencies in seconds. Nearest-rank P50 is 0.130 and the bucket
# estimate interpolates to 0.145 inside the (0.1, 0.25] bucket.
NINE_VALUES = (0.336, 0.042, 0.073, 0.067, 0.130, 0.157, 0.174, 0.153, 0.138)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Keep handlers installed by CLI tests from leaking into other tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def latency_buckets() -> BucketSet:
    return BucketSet.from_values(DEFAULT_LATENCY_BUCKETS)


@pytest.fixture
def small_buckets() -> BucketSet:
    return BucketSet.from_values([0.25, 0.5, 1, 2.5])


@pytest.fixture
def nine_values() -> tuple[float, ...]:
    return NINE_VALUES
