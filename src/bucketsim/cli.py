# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for bucketsim."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from bucketsim.cli_utils import exit_on_error
from bucketsim.common.enums import BucketLayout, RunMode

app = App(
    name="bucketsim",
    help="Measure how faithfully Prometheus histogram buckets reproduce true latency quantiles",
)

InputFile = Annotated[Path | None, Parameter(name=["--input", "-i"])]


def _setup_logging(log_level: str | None) -> None:
    from bucketsim.common.logging import setup_rich_logging

    setup_rich_logging(log_level)


@app.command(name="estimate")
def estimate(
    buckets: list[float],
    *,
    input_file: InputFile = None,
    chunk_size: int | None = None,
    quantiles: list[float] | None = None,
    debug_value: float | None = None,
    output_file: Path | None = None,
    quiet: bool = False,
    log_level: str | None = None,
) -> None:
    """Compare true and bucket estimated quantiles over fixed-size chunks of values.

    Input is one latency in milliseconds per line.

    Args:
        buckets: Bucket upper bounds in seconds, ascending.
        input_file: Input file, standard input when omitted.
        chunk_size: Number of values per chunk (default: 100000).
        quantiles: Quantile level to compare, repeat for several (default: 0.999 to 0.25).
        debug_value: Log how every estimate that rounds to this value was interpolated.
        output_file: Also write the run summary as JSON to this file.
        quiet: Only print the final summary.
        log_level: Log level (default: INFO).
    """
    with exit_on_error(title="Error Running Estimate"):
        from bucketsim.cli_runner import run_simulation
        from bucketsim.common.config import load_simulator_config

        _setup_logging(log_level)
        config = load_simulator_config(
            mode=RunMode.CHUNKED,
            buckets=buckets,
            quantiles=tuple(quantiles) if quantiles else None,
            chunk_size=chunk_size,
            debug_value=debug_value,
            input_file=input_file,
            output_file=output_file,
        )
        run_simulation(config, quiet=quiet)


@app.command(name="estimate-rate")
def estimate_rate(
    buckets: list[float],
    *,
    input_file: InputFile = None,
    sample_interval: float | None = None,
    lookback: float | None = None,
    quantiles: list[float] | None = None,
    debug_value: float | None = None,
    output_file: Path | None = None,
    quiet: bool = False,
    log_level: str | None = None,
) -> None:
    """Compare true quantiles with histogram_quantile over rate() of periodic snapshots.

    Input is one `<ISO-8601 timestamp> <latency in milliseconds>` pair per
    line, sorted by time.

    Args:
        buckets: Bucket upper bounds in seconds, ascending.
        input_file: Input file, standard input when omitted.
        sample_interval: Seconds between histogram snapshots (default: 15).
        lookback: rate() range in seconds (default: 300).
        quantiles: Quantile level to compare, repeat for several (default: 0.999 to 0.25).
        debug_value: Log how every estimate that rounds to this value was interpolated.
        output_file: Also write the run summary as JSON to this file.
        quiet: Only print the final summary.
        log_level: Log level (default: INFO).
    """
    with exit_on_error(title="Error Running Rate Estimate"):
        from bucketsim.cli_runner import run_simulation
        from bucketsim.common.config import load_simulator_config

        _setup_logging(log_level)
        config = load_simulator_config(
            mode=RunMode.RATE,
            buckets=buckets,
            quantiles=tuple(quantiles) if quantiles else None,
            sample_interval=sample_interval,
            lookback=lookback,
            debug_value=debug_value,
            input_file=input_file,
            output_file=output_file,
        )
        run_simulation(config, quiet=quiet)


@app.command(name="buckets")
def dump_buckets(
    buckets: list[float],
    *,
    input_file: InputFile = None,
) -> None:
    """Print the cumulative count of every bucket for the input values.

    Accepts both `<value>` and `<timestamp> <value>` lines, values in milliseconds.

    Args:
        buckets: Bucket upper bounds in seconds, ascending.
        input_file: Input file, standard input when omitted.
    """
    with exit_on_error(title="Error Counting Buckets"):
        from bucketsim.cli_runner import run_bucket_dump
        from bucketsim.common.config import load_bucket_set

        _setup_logging(None)
        run_bucket_dump(load_bucket_set(buckets), input_file)


@app.command(name="generate-buckets")
def generate_buckets(
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
) -> None:
    """Print a bucket list usable as the BUCKETS argument of the other commands.

    Args:
        layout: linear (--start --width --count), exponential (--start --factor --count)
            or log-linear (--low-power --high-power --per-magnitude [--base]).
        start: First boundary.
        width: Distance between linear boundaries.
        factor: Ratio between exponential boundaries.
        count: Number of boundaries.
        base: Magnitude base of log-linear boundaries.
        low_power: Power of the first log-linear magnitude.
        high_power: Power of the last log-linear boundary.
        per_magnitude: Number of linear steps inside every magnitude.
    """
    with exit_on_error(title="Error Generating Buckets"):
        from bucketsim.cli_runner import run_generate_buckets

        bucket_set = run_generate_buckets(
            layout,
            start=start,
            width=width,
            factor=factor,
            count=count,
            base=base,
            low_power=low_power,
            high_power=high_power,
            per_magnitude=per_magnitude,
        )
        print(" ".join(bucket_set.labels))
