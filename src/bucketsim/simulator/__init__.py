# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from bucketsim.simulator.error_aggregator import ErrorAggregator
from bucketsim.simulator.input_parser import (
    TimestampedValue,
    iter_any_values,
    iter_timestamped_values,
    iter_values,
    parse_any_line,
    parse_timestamp,
    parse_timestamped_line,
    parse_value,
    parse_value_line,
)
from bucketsim.simulator.stream_processor import (
    ChunkedStreamProcessor,
    RateWindowStreamProcessor,
    StreamProcessor,
    WindowListener,
    create_stream_processor,
    format_epoch,
)

__all__ = [
    "ChunkedStreamProcessor",
    "ErrorAggregator",
    "RateWindowStreamProcessor",
    "StreamProcessor",
    "TimestampedValue",
    "WindowListener",
    "create_stream_processor",
    "format_epoch",
    "iter_any_values",
    "iter_timestamped_values",
    "iter_values",
    "parse_any_line",
    "parse_timestamp",
    "parse_timestamped_line",
    "parse_value",
    "parse_value_line",
]
