# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""bucketsim: offline fidelity simulator for Prometheus histogram quantiles."""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("bucketsim")
except _metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
