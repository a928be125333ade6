# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console logging for the bucketsim command line tools.

Log lines are rendered to stderr so they never mix with machine readable
output written to stdout (for example the `buckets` dump)::

    12:26:52.092 INFO     Processed chunk 3 (100,000 values) (ChunkedStreamProcessor:118)

Usage::

    from bucketsim.common.logging import setup_rich_logging

    setup_rich_logging("DEBUG")
"""

import logging
from datetime import datetime

from rich.console import Console, ConsoleRenderable, Group
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from bucketsim.common.bucketsim_logger import BucketSimLogger
from bucketsim.common.environment import Environment

_logger = BucketSimLogger(__name__)


class LogHighlighter(RegexHighlighter):
    """Highlights numbers, quantile labels, quoted strings and key=value pairs."""

    base_style = "repr."
    highlights = [
        r"(?P<tag_name>\bP\d+(?:\.\d+)?\b)",
        r"(?P<number>(?<![.\w])-?\d[\d,]*\.?\d*(?:e[+-]?\d+)?(?:%|s|ms)?\b)",
        r"(?P<str>\"[^\"]*\"|'[^']*')",
        r"\b(?P<attrib_name>\w+)=(?P<attrib_value>[^\s,=\[\](){}]+)?",
    ]


class CustomRichHandler(RichHandler):
    """Rich logging handler with a compact single line layout.

    Example::

        HH:MM:SS.mmm LEVEL    message content (logger_name:lineno)

    The timestamp is millisecond precision, the level is colored, the message
    is highlighted with `LogHighlighter`, and the logger name and line number
    are appended in dim italic. Messages longer than
    `BUCKETSIM_LOGGING_MAX_CONSOLE_MESSAGE_LENGTH` are truncated.
    """

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.highlighter = LogHighlighter()

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        """Render a log record as `timestamp level message (logger:line)`.

        Args:
            record: The log record containing message, level, logger name, etc.
            traceback: Optional Rich Traceback to append after the log message.
            message_renderable: Pre-rendered message (unused; re-rendered from record).

        Returns:
            A Text, or a Group of the Text and the traceback.
        """
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        body = Text(message)
        self.highlighter.highlight(body)

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            body,
            Text(f" ({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record, attaching a Rich traceback when exception info is present."""
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable)


def setup_rich_logging(level: str | int | None = None, console: Console | None = None) -> None:
    """Install a `CustomRichHandler` on the root logger.

    Existing handlers are removed so repeated CLI invocations in the same
    process (e.g. tests) do not print duplicate lines.

    Args:
        level: Log level name or number. Defaults to `BUCKETSIM_LOGGING_LEVEL`.
        console: Console to log to. Defaults to a new stderr console.
    """
    if level is None:
        level = Environment.LOGGING.LEVEL
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    _logger.debug(lambda: f"Logging initialized with level: {level}")
