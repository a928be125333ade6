# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Streaming evaluation of bucket quantile fidelity.

Samples are consumed one at a time and partitioned into windows, so memory
stays bounded by the chunk size or the lookback no matter how large the input
is. Every window compares the nearest-rank quantile of its raw values with
the `histogram_quantile` estimate computed from bucket counts only:

- `ChunkedStreamProcessor` evaluates consecutive fixed-size chunks, each with
  a fresh histogram.
- `RateWindowStreamProcessor` scrapes one run-long histogram at a fixed
  interval and evaluates `histogram_quantile(rate(...[lookback]))` over a
  sliding window of snapshots, as a dashboard would.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from bucketsim.common.config import SimulatorConfig
from bucketsim.common.constants import DEBUG_VALUE_DECIMALS
from bucketsim.common.enums import RunMode
from bucketsim.common.exceptions import (
    EmptyPopulationError,
    InsufficientSnapshotsError,
    MalformedInputError,
)
from bucketsim.common.mixins import LoggerMixin
from bucketsim.common.models import (
    HistogramCounts,
    HistogramSnapshot,
    InterpolationTrace,
    QuantileErrorReport,
    RunSummary,
    WindowResult,
)
from bucketsim.common.stopwatch import Stopwatch
from bucketsim.histogram import (
    CumulativeHistogram,
    RawSampleBuffer,
    explain_bucket_quantile,
    extrapolate_rates,
    format_trace,
)
from bucketsim.simulator.error_aggregator import ErrorAggregator
from bucketsim.simulator.input_parser import TimestampedValue

WindowListener = Callable[[WindowResult], None]


def format_epoch(timestamp: float) -> str:
    """Format epoch seconds as an ISO-8601 UTC timestamp with millisecond precision."""
    return (
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class StreamProcessor(LoggerMixin, ABC):
    """Base class of the windowed processors.

    Every evaluated window is recorded in the `ErrorAggregator` and handed to
    the optional listener. The stopwatch supplies per-window lap times and the
    total elapsed time of the run.

    Args:
        config: Validated run configuration.
        stopwatch: Run timer, a new one when omitted.
        listener: Called with every evaluated window.
        aggregator: Receives every report, a new one when omitted.
    """

    mode: RunMode

    def __init__(
        self,
        config: SimulatorConfig,
        stopwatch: Stopwatch | None = None,
        listener: WindowListener | None = None,
        aggregator: ErrorAggregator | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.buckets = config.buckets
        self.quantiles = config.quantiles
        self.stopwatch = stopwatch or Stopwatch()
        self.listener = listener
        self.aggregator = aggregator or ErrorAggregator()
        self.data_points = 0
        self.windows = 0
        self.skipped_windows = 0
        self._finished = False

    @abstractmethod
    def ingest(self, sample) -> None:
        """Consume one sample."""

    @abstractmethod
    def _flush(self) -> None:
        """Evaluate whatever is still pending at the end of the stream."""

    def finish(self) -> None:
        """Signal the end of the stream. Calling it again has no effect."""
        if self._finished:
            return
        self._finished = True
        self._flush()

    def process(self, samples: Iterable) -> RunSummary:
        """Consume every sample, finish the stream and return the run summary."""
        for sample in samples:
            self.ingest(sample)
        self.finish()
        return self.summary()

    def summary(self) -> RunSummary:
        return RunSummary(
            mode=self.mode,
            buckets=self.buckets.boundaries,
            quantiles=self.quantiles,
            data_points=self.data_points,
            windows=self.windows,
            skipped_windows=self.skipped_windows,
            elapsed_sec=self.stopwatch.elapsed_sec,
            aggregate=self.aggregator.summarize(),
            **self._summary_parameters(),
        )

    def _summary_parameters(self) -> dict:
        return {}

    def _evaluate(
        self,
        counts: HistogramCounts,
        raw: RawSampleBuffer,
        label: str,
        start_time: float | None = None,
        end_time: float | None = None,
    ) -> WindowResult:
        """Compare exact and estimated quantiles for one window.

        Raises:
            EmptyPopulationError: If the window holds no raw values.
        """
        reports = []
        for quantile in self.quantiles:
            actual = raw.quantile(quantile)
            trace = explain_bucket_quantile(
                quantile, counts.boundaries, counts.counts, counts.inf_count
            )
            self._check_debug_value(trace, counts, raw)
            reports.append(QuantileErrorReport.create(quantile, actual, trace.result))

        self.windows += 1
        window = WindowResult(
            index=self.windows,
            label=label,
            count=len(raw),
            first_values=raw.first_values,
            start_time=start_time,
            end_time=end_time,
            lap_sec=self.stopwatch.lap(),
            reports=tuple(reports),
        )
        self.aggregator.record_window(window)
        self.debug(
            lambda: f"Evaluated {label}: {len(raw):,} values in {window.lap_sec:.3f}s"
        )
        if self.listener is not None:
            self.listener(window)
        return window

    def _check_debug_value(
        self, trace: InterpolationTrace, counts: HistogramCounts, raw: RawSampleBuffer
    ) -> None:
        debug_value = self.config.debug_value
        if debug_value is None or round(trace.result, DEBUG_VALUE_DECIMALS) != debug_value:
            return
        self.warning(f"Estimate matched debug value {debug_value}: {format_trace(trace)}")
        self.warning(lambda: f"Bucket values: {counts.to_bucket_dict()}")
        self.trace(lambda: f"Raw values ({len(raw):,}): {list(raw.values)}")


class ChunkedStreamProcessor(StreamProcessor):
    """Evaluates consecutive chunks of `chunk_size` values, each in a fresh histogram.

    The terminal partial chunk is evaluated at the end of the stream. When the
    input ends on a chunk boundary there is no terminal chunk.
    """

    mode = RunMode.CHUNKED

    def __init__(self, config: SimulatorConfig, **kwargs) -> None:
        super().__init__(config, **kwargs)
        self.chunk_size = config.chunk_size
        self.histogram = CumulativeHistogram(self.buckets)
        self.raw = RawSampleBuffer()

    def ingest(self, sample: float) -> None:
        self.histogram.add_datum(sample)
        self.raw.append(sample)
        self.data_points += 1
        if len(self.raw) >= self.chunk_size:
            self._process_chunk()

    def _process_chunk(self) -> None:
        chunk_number = self.windows + self.skipped_windows + 1
        try:
            self._evaluate(self.histogram.snapshot(), self.raw, label=f"chunk {chunk_number}")
        finally:
            self.histogram.reset()
            self.raw = RawSampleBuffer()

    def _flush(self) -> None:
        if not self.raw:
            self.debug("No values left for a terminal chunk")
            return
        self._process_chunk()

    def _summary_parameters(self) -> dict:
        return {"chunk_size": self.chunk_size}


class RateWindowStreamProcessor(StreamProcessor):
    """Evaluates `histogram_quantile(q, rate(...[lookback]))` over a sliding window.

    One cumulative histogram lives for the whole run. At the end of every
    sampling interval a snapshot of it, together with the raw values of that
    interval, is appended to the window. Once the window holds more than
    `lookback / sample_interval` snapshots the oldest one is evicted and the
    retained window is evaluated with the range ending at the newest snapshot.

    Timestamps must be non-decreasing across sampling intervals.
    """

    mode = RunMode.RATE

    def __init__(self, config: SimulatorConfig, **kwargs) -> None:
        super().__init__(config, **kwargs)
        self.sample_interval = config.sample_interval
        self.lookback = config.lookback
        self.capacity = config.window_capacity
        self.histogram = CumulativeHistogram(self.buckets)
        self.window: deque[HistogramSnapshot] = deque()
        self.snapshots_taken = 0
        self._interval_start: float | None = None
        self._interval_end: float | None = None
        self._interval_values: list[float] = []
        self._window_changed = False

    def ingest(self, sample: TimestampedValue) -> None:
        timestamp = sample.timestamp
        if self._interval_start is None:
            self._interval_start = timestamp
            self._interval_end = timestamp + self.sample_interval
        elif timestamp < self._interval_start:
            raise MalformedInputError(
                f"timestamp {format_epoch(timestamp)} is before the current sampling "
                f"interval starting at {format_epoch(self._interval_start)}, "
                "input must be sorted by time",
                line_number=sample.line_number,
            )

        while timestamp > self._interval_end:
            self._close_interval()

        self._interval_values.append(sample.value)
        self.histogram.add_datum(sample.value)
        self.data_points += 1

    def _close_interval(self) -> None:
        """Scrape the histogram at the end of the current interval and slide the window."""
        snapshot = HistogramSnapshot(
            timestamp=self._interval_end,
            counts=self.histogram.snapshot(),
            values=tuple(self._interval_values),
        )
        self.trace(
            lambda: f"Sampling interval {format_epoch(self._interval_start)} - "
            f"{format_epoch(self._interval_end)}: {len(self._interval_values):,} values, "
            f"{self.data_points:,} total"
        )
        self._interval_values = []
        self.window.append(snapshot)
        self.snapshots_taken += 1
        self._window_changed = True

        if len(self.window) > self.capacity:
            self.window.popleft()
            self._evaluate_window()

        self._interval_start += self.sample_interval
        self._interval_end += self.sample_interval

    def _evaluate_window(self) -> WindowResult | None:
        self._window_changed = False
        range_end = self.window[-1].timestamp
        range_start = range_end - self.lookback
        label = f"{format_epoch(range_start)} - {format_epoch(range_end)}"
        try:
            extrapolation = extrapolate_rates(list(self.window), range_start, range_end)
        except InsufficientSnapshotsError as e:
            self.skipped_windows += 1
            self.debug(lambda: f"Skipping window {label}: {e}")
            return None

        raw = RawSampleBuffer(
            value for snapshot in self.window for value in snapshot.values
        )
        try:
            return self._evaluate(
                extrapolation.rates,
                raw,
                label=label,
                start_time=range_start,
                end_time=range_end,
            )
        except EmptyPopulationError:
            self.skipped_windows += 1
            self.debug(lambda: f"Skipping window {label}: no values observed")
            return None

    def _flush(self) -> None:
        if self._interval_values:
            self._close_interval()
        if self._window_changed:
            self._evaluate_window()

    def _summary_parameters(self) -> dict:
        return {"sample_interval": self.sample_interval, "lookback": self.lookback}


_PROCESSORS: dict[RunMode, type[StreamProcessor]] = {
    RunMode.CHUNKED: ChunkedStreamProcessor,
    RunMode.RATE: RateWindowStreamProcessor,
}


def create_stream_processor(config: SimulatorConfig, **kwargs) -> StreamProcessor:
    """Create the processor matching `config.mode`."""
    return _PROCESSORS[config.mode](config, **kwargs)
