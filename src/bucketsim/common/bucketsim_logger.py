# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Thin wrapper around the standard library logger with lazy message support.

Messages may be passed either as strings or as zero-argument callables. A
callable is only evaluated when its level is enabled, which keeps expensive
f-strings out of the per-sample hot path::

    _logger = BucketSimLogger(__name__)
    _logger.debug(lambda: f"Histogram counts: {histogram.counts}")
"""

from __future__ import annotations

import logging
from collections.abc import Callable

_TRACE = logging.DEBUG - 5
_DEBUG = logging.DEBUG

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[..., str]


class BucketSimLogger:
    """Logger that accepts lazily evaluated messages and adds a TRACE level."""

    def __init__(self, logger_name: str | None = None) -> None:
        self.logger_name = logger_name or self.__class__.__name__
        self._logger = logging.getLogger(self.logger_name)

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.isEnabledFor(_TRACE)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(_DEBUG)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def log(self, level: int, message: MessageT, *args, **kwargs) -> None:
        """Log `message` at `level`, evaluating it only if the level is enabled."""
        if not self._logger.isEnabledFor(level):
            return
        if callable(message):
            message = message()
        # stacklevel=3 attributes the record to the caller of debug()/info()/...
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, message, *args, **kwargs)

    def trace(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_TRACE, message, *args, **kwargs)

    def debug(self, message: MessageT, *args, **kwargs) -> None:
        self.log(_DEBUG, message, *args, **kwargs)

    def info(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: MessageT, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: MessageT, *args, **kwargs) -> None:
        self.log(logging.CRITICAL, message, *args, **kwargs)
