# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class BucketSimError(Exception):
    """Base class for all exceptions raised by bucketsim."""


class InvalidConfigurationError(BucketSimError):
    """Raised before any input is read when the run configuration is invalid.

    Covers empty, unsorted or duplicated bucket lists, too few buckets for
    estimation, non-positive chunk sizes and out-of-range quantile levels.
    """


class MalformedInputError(BucketSimError):
    """Raised when an input line cannot be parsed. Aborts the whole run."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        if line is not None:
            message = f"{message} (got {line!r})"
        super().__init__(message)


class EmptyPopulationError(BucketSimError):
    """Raised when a quantile is requested for a population with no samples."""


class InsufficientSnapshotsError(BucketSimError):
    """Raised when a rate cannot be extrapolated from the given snapshots.

    Rates need at least two snapshots spanning a positive sampled interval.
    """
