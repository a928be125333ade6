# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from io import StringIO

import pytest
from rich.console import Console

from bucketsim.common.config import load_simulator_config
from bucketsim.common.models import BucketSet, RunSummary, WindowResult
from bucketsim.simulator import ChunkedStreamProcessor


@pytest.fixture
def console_output() -> StringIO:
    return StringIO()


@pytest.fixture
def console(console_output: StringIO) -> Console:
    return Console(file=console_output, width=200)


@pytest.fixture
def nine_value_run(
    latency_buckets: BucketSet, nine_values
) -> tuple[RunSummary, list[WindowResult]]:
    """Summary and windows of the nine values evaluated as a single P50 chunk."""
    windows: list[WindowResult] = []
    config = load_simulator_config(buckets=latency_buckets, quantiles=(0.5,), chunk_size=9)
    summary = ChunkedStreamProcessor(config, listener=windows.append).process(nine_values)
    return summary, windows
