# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration of a single simulator run.

A `SimulatorConfig` is fully validated before any input is read, so every
configuration problem surfaces as an `InvalidConfigurationError` up front.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator, model_validator
from typing_extensions import Self

from bucketsim.common.constants import DEFAULT_QUANTILES
from bucketsim.common.enums import RunMode
from bucketsim.common.environment import Environment
from bucketsim.common.exceptions import InvalidConfigurationError
from bucketsim.common.models.base_models import BucketSimBaseModel
from bucketsim.common.models.histogram_models import BucketSet


class SimulatorConfig(BucketSimBaseModel):
    """Parameters of one estimate run, in either chunked or rate mode."""

    mode: Annotated[
        RunMode,
        Field(description="How the input is partitioned into evaluated windows"),
    ] = RunMode.CHUNKED

    buckets: Annotated[
        BucketSet,
        Field(description="Histogram bucket upper bounds in seconds"),
    ]

    quantiles: Annotated[
        tuple[float, ...],
        Field(
            min_length=1,
            description="Quantile levels to compare, each strictly between 0 and 1",
        ),
    ] = DEFAULT_QUANTILES

    chunk_size: int = Field(
        default_factory=lambda: Environment.SIMULATOR.CHUNK_SIZE,
        ge=1,
        description="Number of raw values per chunk in chunked mode",
    )
    sample_interval: float = Field(
        default_factory=lambda: Environment.SIMULATOR.SAMPLE_INTERVAL,
        gt=0.0,
        description="Seconds between snapshots in rate mode",
    )
    lookback: float = Field(
        default_factory=lambda: Environment.SIMULATOR.LOOKBACK,
        gt=0.0,
        description="rate() range duration in seconds in rate mode",
    )
    debug_value: float | None = Field(
        default_factory=lambda: Environment.SIMULATOR.DEBUG_VALUE,
        description="Log the interpolation trace of estimates rounding to this value",
    )

    input_file: Annotated[
        Path | None,
        Field(description="Input file, standard input when unset"),
    ] = None

    output_file: Annotated[
        Path | None,
        Field(description="Write the run summary as JSON to this file"),
    ] = None

    @field_validator("quantiles")
    @classmethod
    def validate_quantiles(cls, quantiles: tuple[float, ...]) -> tuple[float, ...]:
        for quantile in quantiles:
            if not 0.0 < quantile < 1.0:
                raise ValueError(
                    f"quantile levels must be strictly between 0 and 1, got {quantile}"
                )
        if len(set(quantiles)) != len(quantiles):
            raise ValueError(f"quantile levels must be unique, got {list(quantiles)}")
        return quantiles

    @model_validator(mode="after")
    def validate_run_parameters(self) -> Self:
        if len(self.buckets) < 2:
            raise ValueError(
                f"at least 2 bucket boundaries are required to estimate quantiles, "
                f"got {len(self.buckets)}"
            )
        if self.mode == RunMode.RATE and self.lookback < 2 * self.sample_interval:
            raise ValueError(
                f"lookback ({self.lookback}s) must cover at least two sample "
                f"intervals ({self.sample_interval}s each)"
            )
        return self

    @property
    def window_capacity(self) -> int:
        """Number of snapshots retained in the rate mode sliding window."""
        # Tolerance keeps 0.3 / 0.1 from flooring to 2.
        return math.floor(self.lookback / self.sample_interval + 1e-9)


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line per problem."""
    lines = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"].removeprefix("Value error, ")
        lines.append(f"{location}: {message}" if location else message)
    return "\n".join(lines)


def load_bucket_set(values: Any) -> BucketSet:
    """Validate a bucket list, raising InvalidConfigurationError on failure."""
    try:
        return BucketSet.from_values(values)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f"Invalid bucket boundaries:\n{format_validation_error(e)}"
        ) from e
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"Invalid bucket boundaries: {e}") from e


def load_simulator_config(**kwargs: Any) -> SimulatorConfig:
    """Build a SimulatorConfig, raising InvalidConfigurationError on failure.

    `buckets` may be given as a BucketSet or as any iterable of numbers.
    Options passed as None fall back to their environment defaults.
    """
    options = {key: value for key, value in kwargs.items() if value is not None}
    buckets = options.get("buckets")
    if buckets is not None and not isinstance(buckets, BucketSet):
        options["buckets"] = load_bucket_set(buckets)
    try:
        return SimulatorConfig(**options)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f"Invalid simulator configuration:\n{format_validation_error(e)}"
        ) from e
