# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import math

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from bucketsim.common.config import SimulatorConfig
from bucketsim.common.enums import RunMode
from bucketsim.common.mixins import LoggerMixin
from bucketsim.common.models import (
    QuantileSummary,
    RunSummary,
    StatRange,
    WindowResult,
    format_boundary,
)

__all__ = ["ConsoleReportExporter", "format_bucket_layout"]

_NA = "[dim]N/A[/dim]"


def _magnitude(boundary: float) -> int:
    magnitude = math.floor(math.log10(boundary))
    # log10 can land just below an exact power of ten.
    if 10.0 ** (magnitude + 1) <= boundary:
        magnitude += 1
    return magnitude


def format_bucket_layout(boundaries: tuple[float, ...]) -> list[str]:
    """Group boundaries by base 10 magnitude, one line per magnitude.

    Exact powers of ten are bracketed so the decades stand out::

        [0.001] 0.0025 0.005
        [0.01] 0.025 0.05
        [0.1] 0.25 0.5
        [1]
    """
    lines: list[list[str]] = []
    previous = None
    for boundary in boundaries:
        magnitude = _magnitude(boundary)
        label = format_boundary(boundary)
        if boundary == 10.0**magnitude:
            label = f"[{label}]"
        if magnitude != previous:
            lines.append([])
            previous = magnitude
        lines[-1].append(label)
    return [" ".join(line) for line in lines]


class ConsoleReportExporter(LoggerMixin):
    """Renders the run header, per-window diagnostics and the final summary with Rich.

    Args:
        console: Target console, standard error when omitted so stdout stays clean.
        quiet: Suppress the per-window diagnostics.
    """

    def __init__(self, console: Console | None = None, quiet: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.console = console or Console(stderr=True)
        self.quiet = quiet

    def print_header(self, config: SimulatorConfig) -> None:
        labels = ", ".join(config.buckets.labels)
        self.console.print(f"[bold]BUCKETS ({len(config.buckets)}):[/bold] {labels}")
        if config.mode == RunMode.CHUNKED:
            self.console.print(f"[bold]CHUNK SIZE:[/bold] {config.chunk_size:,}")
        else:
            self.console.print(
                f"[bold]SAMPLE INTERVAL:[/bold] {config.sample_interval:g}s  "
                f"[bold]LOOKBACK:[/bold] {config.lookback:g}s "
                f"({config.window_capacity} snapshots)"
            )

    def print_window(self, window: WindowResult) -> None:
        """Print the diagnostics of one evaluated window. Usable as a processor listener."""
        if self.quiet:
            return
        self.console.print(self.get_window_renderable(window))

    def get_window_renderable(self, window: WindowResult) -> RenderableType:
        lines = [
            Text.from_markup(
                f"[bold cyan]{window.label}[/bold cyan] "
                f"({window.count:,} values, {window.lap_sec:,.3f}s)"
            )
        ]
        if window.first_values:
            first_values = ", ".join(f"{value:g}" for value in window.first_values)
            lines.append(Text(f"  first values: {first_values}", style="dim"))
        for report in window.reports:
            error = (
                "N/A (degenerate ratio)"
                if report.error_percent is None
                else f"{report.error_percent:,.2f}%"
            )
            lines.append(
                Text(
                    f"  {report.label} actual: {report.actual:g}, "
                    f"estimated: {round(report.estimated, 4):g}, error: {error}"
                )
            )
        return Group(*lines)

    def print_summary(self, summary: RunSummary) -> None:
        self.console.print("\n")
        self.console.print(self.get_summary_renderable(summary))
        self.console.file.flush()

    def get_summary_renderable(self, summary: RunSummary) -> RenderableType:
        layout = format_bucket_layout(summary.buckets)
        renderables: list[RenderableType] = [
            Text(f"BUCKETS ({len(summary.buckets)})", style="bold"),
            *(Text(f"  {line}") for line in layout),
            Text(""),
        ]
        if summary.aggregate.quantiles:
            renderables.append(self.get_summary_table(summary))
        else:
            renderables.append(Text("No windows were evaluated", style="yellow"))
        renderables.append(Text(self._footer(summary)))
        return Group(*renderables)

    def get_summary_table(self, summary: RunSummary) -> Table:
        table = Table(title="Bucket Quantile Error Summary")
        table.add_column("%ILE", justify="right", style="cyan")
        for header in ("MIN%", "MAX%", "AVG%"):
            table.add_column(header, justify="right", style="green")
        for group in ("actual", "estimated"):
            for stat in ("MIN", "MAX", "AVG"):
                table.add_column(f"{stat}\n{group}", justify="right", style="green")
        for quantile_summary in summary.aggregate.quantiles:
            table.add_row(*self._format_row(quantile_summary))
        return table

    def _format_row(self, quantile_summary: QuantileSummary) -> list[str]:
        row = [quantile_summary.label]
        row.extend(self._format_stats(quantile_summary.error, "{:,.2f}"))
        row.extend(self._format_stats(quantile_summary.actual, "{:,.4f}"))
        row.extend(self._format_stats(quantile_summary.estimated, "{:,.4f}"))
        return row

    @staticmethod
    def _format_stats(stats: StatRange | None, fmt: str) -> list[str]:
        if stats is None:
            return [_NA] * 3
        return [fmt.format(stats.min), fmt.format(stats.max), fmt.format(stats.avg)]

    @staticmethod
    def _footer(summary: RunSummary) -> str:
        parts = [f"data points: {summary.data_points:,}"]
        if summary.mode == RunMode.CHUNKED:
            parts.append(f"chunk size: {summary.chunk_size:,}")
            parts.append(f"chunks: {summary.windows:,}")
        else:
            parts.append(f"windows: {summary.windows:,}")
        if summary.skipped_windows:
            parts.append(f"skipped: {summary.skipped_windows:,}")
        degenerate = sum(q.degenerate_count for q in summary.aggregate.quantiles)
        if degenerate:
            parts.append(f"degenerate ratios: {degenerate:,}")
        parts.append(f"total elapsed (s): {summary.elapsed_sec:,.3f}")
        return ", ".join(parts)
