# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class BucketSimBaseModel(BaseModel):
    """Base model for all bucketsim data models.

    Models are validated on assignment and reject unknown fields so typos in
    programmatic configuration fail loudly.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class FrozenBucketSimModel(BucketSimBaseModel):
    """Immutable variant for values that are shared once produced (snapshots, reports)."""

    model_config = ConfigDict(extra="forbid", frozen=True)
