# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from pydantic import ValidationError

from bucketsim.common.environment import (
    Environment,
    _LoggingSettings,
    _SimulatorSettings,
)


class TestSimulatorSettings:
    def test_defaults(self) -> None:
        settings = _SimulatorSettings()

        assert settings.CHUNK_SIZE == 100_000
        assert settings.SAMPLE_INTERVAL == 15.0
        assert settings.LOOKBACK == 300.0
        assert settings.DEBUG_VALUE is None

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUCKETSIM_SIMULATOR_CHUNK_SIZE", "500")
        monkeypatch.setenv("BUCKETSIM_SIMULATOR_DEBUG_VALUE", "0.1453")

        settings = _SimulatorSettings()

        assert settings.CHUNK_SIZE == 500
        assert settings.DEBUG_VALUE == 0.1453

    def test_lookback_must_hold_two_intervals(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUCKETSIM_SIMULATOR_SAMPLE_INTERVAL", "60")
        monkeypatch.setenv("BUCKETSIM_SIMULATOR_LOOKBACK", "90")

        with pytest.raises(ValidationError, match="at least twice"):
            _SimulatorSettings()

    def test_rejects_zero_chunk_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUCKETSIM_SIMULATOR_CHUNK_SIZE", "0")

        with pytest.raises(ValidationError):
            _SimulatorSettings()


class TestLoggingSettings:
    def test_reads_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUCKETSIM_LOGGING_LEVEL", "DEBUG")

        assert _LoggingSettings().LEVEL == "DEBUG"


def test_environment_groups() -> None:
    assert isinstance(Environment.SIMULATOR, _SimulatorSettings)
    assert isinstance(Environment.LOGGING, _LoggingSettings)
