# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""True quantiles of a raw population, used as ground truth for the estimates."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from bucketsim.common.constants import FIRST_VALUES_PREVIEW
from bucketsim.common.exceptions import EmptyPopulationError


def _validate_quantile(q: float) -> None:
    if not 0.0 < q < 1.0:
        raise ValueError(f"quantile must be strictly between 0 and 1, got {q}")


def exact_quantile(q: float, sorted_values: Sequence[float]) -> float:
    """Nearest-rank quantile of an ascending sequence, never interpolated.

    The element at position `floor(q * n)` (1-based) is returned, clamped to
    the first element when that position is 0.

    Args:
        q: Quantile level, strictly between 0 and 1.
        sorted_values: Population sorted ascending.

    Returns:
        The population value at the nearest rank.

    Raises:
        ValueError: If `q` is outside (0, 1).
        EmptyPopulationError: If the population is empty.
    """
    _validate_quantile(q)
    if not sorted_values:
        raise EmptyPopulationError("cannot compute a quantile of an empty population")
    index = math.floor(q * len(sorted_values))
    return sorted_values[max(0, index - 1)]


class RawSampleBuffer:
    """Raw values of one chunk or window, sorted lazily on the first quantile request.

    The first `preview_size` values are kept in arrival order so a chunk can be
    located in the input after its buffer has been sorted.
    """

    def __init__(
        self, values: Iterable[float] = (), preview_size: int = FIRST_VALUES_PREVIEW
    ) -> None:
        self._values: list[float] = []
        self._head: list[float] = []
        self._preview_size = preview_size
        self._sorted = True
        self.extend(values)

    def append(self, value: float) -> None:
        if len(self._head) < self._preview_size:
            self._head.append(value)
        self._values.append(value)
        self._sorted = False

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.append(value)

    def clear(self) -> None:
        self._values.clear()
        self._head.clear()
        self._sorted = True

    def __len__(self) -> int:
        return len(self._values)

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    @property
    def first_values(self) -> tuple[float, ...]:
        """The leading values in arrival order."""
        return tuple(self._head)

    def quantile(self, q: float) -> float:
        """Exact nearest-rank quantile of the buffered values."""
        if not self._sorted:
            self._values.sort()
            self._sorted = True
        return exact_quantile(q, self._values)
