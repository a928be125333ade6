# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Helpers shared by the CLI commands. Keep imports light, this module loads with the CLI."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from bucketsim.common.exceptions import BucketSimError


@contextlib.contextmanager
def exit_on_error(title: str = "Error", console: Console | None = None) -> Iterator[None]:
    """Render any exception raised inside the block as a Rich panel and exit with status 1.

    Args:
        title: Title of the error panel.
        console: Console to print to, standard error when omitted.
    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except Exception as e:
        console = console or Console(stderr=True)
        message = str(e) or e.__class__.__name__
        if not isinstance(e, BucketSimError):
            message = f"{e.__class__.__name__}: {message}"
        console.print()
        console.print(
            Panel(
                Text(message),
                title=title,
                title_align="left",
                border_style="bold red",
                expand=False,
            )
        )
        console.file.flush()
        raise SystemExit(1) from e


@contextlib.contextmanager
def open_input(input_file: Path | None) -> Iterator[TextIO]:
    """Yield the input file opened as UTF-8 text, or standard input when no file is given."""
    if input_file is None:
        yield sys.stdin
        return
    with open(input_file, encoding="utf-8") as f:
        yield f
