# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Line oriented parsing of latency samples.

Two line shapes are accepted, both with latencies in milliseconds::

    123.4
    2018-09-01T00:00:00.935Z 123.4

Values are converted to seconds. Blank lines are skipped; any other line that
does not parse aborts the run with a `MalformedInputError` that carries the
1-based line number and the offending text.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import NamedTuple

from bucketsim.common.constants import MILLIS_PER_SECOND
from bucketsim.common.exceptions import MalformedInputError


class TimestampedValue(NamedTuple):
    """A latency observed at a point in time."""

    timestamp: float
    """Epoch seconds."""
    value: float
    """Latency in seconds."""
    line_number: int | None = None


# Fractional seconds of any length; fromisoformat on 3.10 accepts only 3 or 6 digits.
_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")


def parse_value(field: str, line_number: int | None = None, line: str | None = None) -> float:
    """Parse a finite millisecond value and return it in seconds."""
    if "_" in field:
        raise MalformedInputError(
            f"{field!r} is not a number", line_number=line_number, line=line
        )
    try:
        value = float(field)
    except ValueError:
        raise MalformedInputError(
            f"{field!r} is not a number", line_number=line_number, line=line
        ) from None
    if not math.isfinite(value):
        raise MalformedInputError(
            f"{field!r} is not a finite number", line_number=line_number, line=line
        )
    return value / MILLIS_PER_SECOND


def parse_timestamp(field: str, line_number: int | None = None, line: str | None = None) -> float:
    """Parse an ISO-8601 timestamp into epoch seconds. Naive timestamps are UTC."""
    text = field[:-1] + "+00:00" if field.endswith(("Z", "z")) else field
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise MalformedInputError(
            f"{field!r} is not an ISO-8601 timestamp", line_number=line_number, line=line
        ) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def parse_value_line(line: str, line_number: int | None = None) -> float | None:
    """Parse a `<value>` line. Returns None for a blank line."""
    fields = line.split()
    if not fields:
        return None
    if len(fields) != 1:
        raise MalformedInputError(
            f"expected 1 field, got {len(fields)}", line_number=line_number, line=line
        )
    return parse_value(fields[0], line_number, line)


def parse_timestamped_line(line: str, line_number: int | None = None) -> TimestampedValue | None:
    """Parse a `<timestamp> <value>` line. Returns None for a blank line."""
    fields = line.split()
    if not fields:
        return None
    if len(fields) != 2:
        raise MalformedInputError(
            f"expected 2 fields, got {len(fields)}", line_number=line_number, line=line
        )
    return TimestampedValue(
        timestamp=parse_timestamp(fields[0], line_number, line),
        value=parse_value(fields[1], line_number, line),
        line_number=line_number,
    )


def parse_any_line(line: str, line_number: int | None = None) -> float | None:
    """Parse either line shape, returning only the value. Returns None for a blank line."""
    fields = line.split()
    if not fields:
        return None
    if len(fields) > 2:
        raise MalformedInputError(
            f"expected 1 or 2 fields, got {len(fields)}", line_number=line_number, line=line
        )
    return parse_value(fields[-1], line_number, line)


def _iter_parsed(lines: Iterable[str], parse_line) -> Iterator:
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        parsed = parse_line(line, line_number)
        if parsed is not None:
            yield parsed


def iter_values(lines: Iterable[str]) -> Iterator[float]:
    """Yield the values of `<value>` lines, in seconds."""
    return _iter_parsed(lines, parse_value_line)


def iter_timestamped_values(lines: Iterable[str]) -> Iterator[TimestampedValue]:
    """Yield the samples of `<timestamp> <value>` lines."""
    return _iter_parsed(lines, parse_timestamped_line)


def iter_any_values(lines: Iterable[str]) -> Iterator[float]:
    """Yield the value of every line, whichever shape it has."""
    return _iter_parsed(lines, parse_any_line)
