# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Callable
from time import perf_counter_ns

from bucketsim.common.constants import NANOS_PER_SECOND


class Stopwatch:
    """Monotonic run timer passed explicitly to whatever needs lap times.

    Args:
        clock_ns: Nanosecond clock, `time.perf_counter_ns` unless overridden in tests.
    """

    def __init__(self, clock_ns: Callable[[], int] = perf_counter_ns) -> None:
        self._clock_ns = clock_ns
        self._start_ns = clock_ns()
        self._lap_ns = self._start_ns

    def lap(self) -> float:
        """Return the seconds since the previous lap (or the start) and begin a new lap."""
        now_ns = self._clock_ns()
        lap_ns = now_ns - self._lap_ns
        self._lap_ns = now_ns
        return lap_ns / NANOS_PER_SECOND

    @property
    def elapsed_sec(self) -> float:
        """Seconds since the stopwatch was created."""
        return (self._clock_ns() - self._start_ns) / NANOS_PER_SECOND
