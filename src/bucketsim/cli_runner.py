# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Implementations of the CLI commands, imported lazily by `bucketsim.cli`."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console

from bucketsim.cli_utils import open_input
from bucketsim.common.bucketsim_logger import BucketSimLogger
from bucketsim.common.config import SimulatorConfig
from bucketsim.common.constants import INF_LABEL
from bucketsim.common.enums import BucketLayout, RunMode
from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.common.models import BucketSet, RunSummary, format_boundary
from bucketsim.common.stopwatch import Stopwatch
from bucketsim.exporters import ConsoleReportExporter, JsonSummaryExporter
from bucketsim.histogram import (
    CumulativeHistogram,
    exponential_buckets,
    linear_buckets,
    log_linear_buckets,
)
from bucketsim.simulator import (
    create_stream_processor,
    iter_any_values,
    iter_timestamped_values,
    iter_values,
)

_logger = BucketSimLogger(__name__)


def run_simulation(
    config: SimulatorConfig, quiet: bool = False, console: Console | None = None
) -> RunSummary:
    """Stream the configured input through the simulator and report the results.

    Args:
        config: Validated run configuration.
        quiet: Suppress the per-window diagnostics.
        console: Console for the report, standard error when omitted.

    Returns:
        The summary of the run.
    """
    stopwatch = Stopwatch()
    exporter = ConsoleReportExporter(console=console, quiet=quiet)
    processor = create_stream_processor(
        config, stopwatch=stopwatch, listener=exporter.print_window
    )
    exporter.print_header(config)

    parse = iter_values if config.mode == RunMode.CHUNKED else iter_timestamped_values
    with open_input(config.input_file) as lines:
        _logger.info(
            lambda: f"Reading {config.mode} samples from "
            f"{config.input_file or 'standard input'}"
        )
        summary = processor.process(parse(lines))

    exporter.print_summary(summary)
    if config.output_file is not None:
        JsonSummaryExporter(config.output_file).export(summary)
    return summary


def run_bucket_dump(
    buckets: BucketSet, input_file: Path | None = None, out: TextIO | None = None
) -> CumulativeHistogram:
    """Accumulate every input value and print the cumulative count of each bucket.

    Writes `<le>\\t<count>` per boundary followed by `+Inf\\t<count>`.
    """
    out = out or sys.stdout
    histogram = CumulativeHistogram(buckets)
    with open_input(input_file) as lines:
        for value in iter_any_values(lines):
            histogram.add_datum(value)

    for boundary, count in zip(buckets.boundaries, histogram.counts):
        out.write(f"{format_boundary(boundary)}\t{count}\n")
    out.write(f"{INF_LABEL}\t{histogram.inf_count}\n")
    out.flush()
    return histogram


def run_generate_buckets(
    layout: BucketLayout,
    *,
    start: float | None = None,
    width: float | None = None,
    factor: float | None = None,
    count: int | None = None,
    base: float = 10.0,
    low_power: int | None = None,
    high_power: int | None = None,
    per_magnitude: int | None = None,
) -> BucketSet:
    """Generate a bucket layout from the options relevant to it."""

    def _require(**options) -> None:
        missing = [f"--{name.replace('_', '-')}" for name, v in options.items() if v is None]
        if missing:
            raise InvalidConfigurationError(
                f"{layout} buckets require {', '.join(missing)}"
            )

    if layout == BucketLayout.LINEAR:
        _require(start=start, width=width, count=count)
        return linear_buckets(start, width, count)
    if layout == BucketLayout.EXPONENTIAL:
        _require(start=start, factor=factor, count=count)
        return exponential_buckets(start, factor, count)
    _require(low_power=low_power, high_power=high_power, per_magnitude=per_magnitude)
    return log_linear_buckets(base, low_power, high_power, per_magnitude)
