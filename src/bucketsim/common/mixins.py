# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging

from bucketsim.common.bucketsim_logger import _TRACE, BucketSimLogger, MessageT

# One extra frame compared to calling BucketSimLogger directly.
_MIXIN_STACKLEVEL = 4


class LoggerMixin:
    """Mixin that gives a class `self.debug(...)`, `self.info(...)`, etc.

    The logger is named after the concrete class unless `logger_name` is given.
    """

    def __init__(self, logger_name: str | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._logger = BucketSimLogger(logger_name or self.__class__.__name__)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.is_debug_enabled

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.is_trace_enabled

    def trace(self, message: MessageT) -> None:
        self._logger.log(_TRACE, message, stacklevel=_MIXIN_STACKLEVEL)

    def debug(self, message: MessageT) -> None:
        self._logger.log(logging.DEBUG, message, stacklevel=_MIXIN_STACKLEVEL)

    def info(self, message: MessageT) -> None:
        self._logger.log(logging.INFO, message, stacklevel=_MIXIN_STACKLEVEL)

    def warning(self, message: MessageT) -> None:
        self._logger.log(logging.WARNING, message, stacklevel=_MIXIN_STACKLEVEL)

    def error(self, message: MessageT) -> None:
        self._logger.log(logging.ERROR, message, stacklevel=_MIXIN_STACKLEVEL)
