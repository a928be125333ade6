# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest

from bucketsim.common.exceptions import (
    BucketSimError,
    EmptyPopulationError,
    InsufficientSnapshotsError,
    InvalidConfigurationError,
    MalformedInputError,
)


class TestExceptions:
    @pytest.mark.parametrize(
        "error_class",
        [
            InvalidConfigurationError,
            MalformedInputError,
            EmptyPopulationError,
            InsufficientSnapshotsError,
        ],
    )  # fmt: skip
    def test_subclasses_share_root(self, error_class: type[BucketSimError]) -> None:
        assert issubclass(error_class, BucketSimError)

    def test_str_is_the_message(self) -> None:
        assert str(InvalidConfigurationError("buckets must be sorted")) == "buckets must be sorted"

    @pytest.mark.parametrize(
        "line_number, line, expected",
        [
            (None, None, "bad value"),
            (3, None, "line 3: bad value"),
            (None, "x y", "bad value (got 'x y')"),
            (3, "x y", "line 3: bad value (got 'x y')"),
        ],
    )  # fmt: skip
    def test_malformed_input_message(self, line_number: int | None, line: str | None, expected: str) -> None:
        error = MalformedInputError("bad value", line_number=line_number, line=line)

        assert str(error) == expected
        assert error.line_number == line_number
        assert error.line == line
