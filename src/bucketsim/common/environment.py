# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment-driven defaults for bucketsim.

Every setting can be overridden with an environment variable built from the
group prefix and the field name, e.g. ``BUCKETSIM_SIMULATOR_CHUNK_SIZE=500000``
or ``BUCKETSIM_SIMULATOR_DEBUG_VALUE=0.1453``. Command line options always take
precedence over these defaults.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from bucketsim.common.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LOOKBACK_SEC,
    DEFAULT_SAMPLE_INTERVAL_SEC,
)


class _SimulatorSettings(BaseSettings):
    """Defaults for simulator runs."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="BUCKETSIM_SIMULATOR_",
    )

    CHUNK_SIZE: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        ge=1,
        description="Number of raw values per chunk in chunked mode",
    )
    SAMPLE_INTERVAL: float = Field(
        default=DEFAULT_SAMPLE_INTERVAL_SEC,
        gt=0.0,
        description="Seconds between histogram snapshots in rate mode (the scrape interval)",
    )
    LOOKBACK: float = Field(
        default=DEFAULT_LOOKBACK_SEC,
        gt=0.0,
        description="Range selector duration in seconds used by rate() in rate mode",
    )
    DEBUG_VALUE: float | None = Field(
        default=None,
        description="Log the interpolation trace of every estimate that rounds to this value",
    )

    @model_validator(mode="after")
    def validate_lookback(self) -> Self:
        """The lookback must hold at least two snapshots for a rate to exist."""
        if self.LOOKBACK < 2 * self.SAMPLE_INTERVAL:
            raise ValueError(
                f"BUCKETSIM_SIMULATOR_LOOKBACK ({self.LOOKBACK}) must be at least twice "
                f"BUCKETSIM_SIMULATOR_SAMPLE_INTERVAL ({self.SAMPLE_INTERVAL})"
            )
        return self


class _LoggingSettings(BaseSettings):
    """Console logging settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="BUCKETSIM_LOGGING_",
    )

    LEVEL: str = Field(default="INFO", description="Default log level")
    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=2000,
        ge=80,
        description="Console log messages are truncated to this many characters",
    )


class _Environment(BaseSettings):
    """Root of all environment settings groups."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="BUCKETSIM_",
    )

    SIMULATOR: _SimulatorSettings = Field(default_factory=_SimulatorSettings)
    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)


Environment = _Environment()

__all__ = ["Environment"]
