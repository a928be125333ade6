# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

MILLIS_PER_SECOND = 1000.0

DEFAULT_QUANTILES: tuple[float, ...] = (0.999, 0.99, 0.98, 0.95, 0.75, 0.50, 0.25)
"""Quantile levels evaluated when none are configured, highest first."""

DEFAULT_CHUNK_SIZE = 100_000
DEFAULT_SAMPLE_INTERVAL_SEC = 15.0
DEFAULT_LOOKBACK_SEC = 300.0

EXTRAPOLATION_THRESHOLD_FACTOR = 1.1
"""Gaps to the range edges shorter than avg_gap * factor are extrapolated in full."""

FIRST_VALUES_PREVIEW = 10
"""Number of leading raw values kept per chunk so the data can be located later."""

DEBUG_VALUE_DECIMALS = 4

INF_LABEL = "+Inf"

NANOS_PER_SECOND = 1_000_000_000
