# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from bucketsim.exporters.console_exporter import (
    ConsoleReportExporter,
    format_bucket_layout,
)
from bucketsim.exporters.json_exporter import JsonSummaryExporter

__all__ = ["ConsoleReportExporter", "JsonSummaryExporter", "format_bucket_layout"]
