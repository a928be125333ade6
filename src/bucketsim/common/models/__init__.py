# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from bucketsim.common.models.base_models import (
    BucketSimBaseModel,
    FrozenBucketSimModel,
)
from bucketsim.common.models.histogram_models import (
    BucketSet,
    HistogramCounts,
    HistogramSnapshot,
    InterpolationTrace,
    RateExtrapolation,
    format_boundary,
)
from bucketsim.common.models.report_models import (
    AggregateSummary,
    QuantileErrorReport,
    QuantileSummary,
    RunSummary,
    StatRange,
    WindowResult,
    compute_error_percent,
    percentile_label,
)

__all__ = [
    "AggregateSummary",
    "BucketSet",
    "BucketSimBaseModel",
    "FrozenBucketSimModel",
    "HistogramCounts",
    "HistogramSnapshot",
    "InterpolationTrace",
    "QuantileErrorReport",
    "QuantileSummary",
    "RateExtrapolation",
    "RunSummary",
    "StatRange",
    "WindowResult",
    "compute_error_percent",
    "format_boundary",
    "percentile_label",
]
