# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

import orjson

from bucketsim.common.mixins import LoggerMixin
from bucketsim.common.models import RunSummary

__all__ = ["JsonSummaryExporter"]


class JsonSummaryExporter(LoggerMixin):
    """Writes a RunSummary to a JSON file."""

    def __init__(self, file_path: Path, **kwargs) -> None:
        super().__init__(**kwargs)
        self.file_path = Path(file_path)

    def generate_content(self, summary: RunSummary) -> bytes:
        return orjson.dumps(summary.model_dump(mode="json"), option=orjson.OPT_INDENT_2)

    def export(self, summary: RunSummary) -> Path:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.write_bytes(self.generate_content(summary))
        self.info(f"Run summary written to {self.file_path}")
        return self.file_path
