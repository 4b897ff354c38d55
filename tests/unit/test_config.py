"""Tests for structured_reasoning.config module."""

from __future__ import annotations

import logging

import pytest

from structured_reasoning.config import Settings, configure_settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        """Test Settings has correct default values."""
        settings = Settings(_env_file=None)
        assert settings.server_name == "structured-reasoning"
        assert settings.server_version == "0.1.0"
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.max_sessions == 1000
        assert settings.default_run_id == "default"
        assert settings.max_thoughts_per_run == 1000
        assert settings.max_input_length == 50000
        assert settings.brainstorm_strict_mutations is False
        assert settings.brainstorm_enforce_phase_order is False
        assert settings.enable_middleware is True

    def test_max_sessions_minimum(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, max_sessions=0)

    def test_max_thoughts_per_run_minimum(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, max_thoughts_per_run=5)

    def test_log_level_literal(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="LOUD")

    def test_env_prefix(self, monkeypatch):
        """Test settings are read from STRUCTURED_REASONING_ variables."""
        monkeypatch.setenv("STRUCTURED_REASONING_MAX_SESSIONS", "7")
        monkeypatch.setenv("STRUCTURED_REASONING_BRAINSTORM_STRICT_MUTATIONS", "true")

        settings = Settings(_env_file=None)

        assert settings.max_sessions == 7
        assert settings.brainstorm_strict_mutations is True

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "reasoning.env"
        env_file.write_text("STRUCTURED_REASONING_DEFAULT_RUN_ID=main\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.default_run_id == "main"

    def test_mixed_strictness_is_logged(self, caplog, monkeypatch):
        # setup_logging turns propagation off for the package logger
        monkeypatch.setattr(logging.getLogger("structured_reasoning"), "propagate", True)
        with caplog.at_level(logging.INFO, logger="structured_reasoning.config"):
            Settings(_env_file=None, brainstorm_enforce_phase_order=True)

        assert "mutation checking stays permissive" in caplog.text


class TestGlobalSettings:
    """Tests for get_settings and configure_settings."""

    def test_configure_replaces_global(self):
        configured = configure_settings(_env_file=None, max_sessions=42)
        try:
            assert get_settings() is configured
            assert get_settings().max_sessions == 42
        finally:
            configure_settings(_env_file=None)
