# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from bucketsim.histogram.bucket_quantile import (
    bucket_quantile,
    explain_bucket_quantile,
    format_trace,
    histogram_quantile,
)
from bucketsim.histogram.cumulative import CumulativeHistogram
from bucketsim.histogram.exact_quantile import RawSampleBuffer, exact_quantile
from bucketsim.histogram.generators import (
    exponential_buckets,
    linear_buckets,
    log_linear_buckets,
)
from bucketsim.histogram.rate import extrapolate_rates, extrapolated_interval

__all__ = [
    "CumulativeHistogram",
    "RawSampleBuffer",
    "bucket_quantile",
    "exact_quantile",
    "explain_bucket_quantile",
    "exponential_buckets",
    "extrapolate_rates",
    "extrapolated_interval",
    "format_trace",
    "histogram_quantile",
    "linear_buckets",
    "log_linear_buckets",
]
