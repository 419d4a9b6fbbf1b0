"""Tests for simulation settings."""

import os
from unittest.mock import patch

import pytest

from collector.core.settings import (
    DEFAULT_MAX_TRIALS,
    DEFAULT_TRIALS,
    DEFAULT_WORKER_COUNT,
    SimulationSettings,
    get_settings,
)


class TestGetSettings:
    """Tests for get_settings function."""

    def test_default_values(self):
        """Settings use defaults when environment variables are not set."""
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()

        assert settings.worker_count == DEFAULT_WORKER_COUNT == 10
        assert settings.min_trials == 1
        assert settings.max_trials == DEFAULT_MAX_TRIALS == 100_000
        assert settings.default_trials == DEFAULT_TRIALS
        assert settings.executor == "thread"
        assert settings.log_level == "INFO"

    def test_override_all(self):
        """All environment variables can be overridden together."""
        env = {
            "SIM_WORKER_COUNT": "4",
            "SIM_MIN_TRIALS": "10",
            "SIM_MAX_TRIALS": "500",
            "SIM_DEFAULT_TRIALS": "100",
            "SIM_EXECUTOR": "Serial",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        assert settings.worker_count == 4
        assert settings.min_trials == 10
        assert settings.max_trials == 500
        assert settings.default_trials == 100
        assert settings.executor == "serial"
        assert settings.log_level == "DEBUG"

    def test_blank_value_uses_default(self):
        with patch.dict(os.environ, {"SIM_WORKER_COUNT": "  "}, clear=True):
            assert get_settings().worker_count == DEFAULT_WORKER_COUNT

    def test_non_integer_rejected(self):
        with patch.dict(os.environ, {"SIM_WORKER_COUNT": "ten"}, clear=True):
            with pytest.raises(ValueError, match="SIM_WORKER_COUNT"):
                get_settings()

    def test_settings_are_cached(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings() is get_settings()

    def test_settings_are_frozen(self):
        settings = SimulationSettings()
        with pytest.raises(AttributeError):
            settings.worker_count = 2


class TestSettingsValidation:
    """Tests for rejected setting combinations."""

    def test_zero_workers(self):
        with pytest.raises(ValueError):
            SimulationSettings(worker_count=0)

    def test_inverted_trial_bounds(self):
        with pytest.raises(ValueError):
            SimulationSettings(min_trials=100, max_trials=10, default_trials=50)

    def test_default_outside_bounds(self):
        with pytest.raises(ValueError):
            SimulationSettings(max_trials=100, default_trials=1000)

    def test_unknown_executor(self):
        with pytest.raises(ValueError, match="SIM_EXECUTOR"):
            SimulationSettings(executor="process")
