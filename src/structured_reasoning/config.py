"""Settings for structured-reasoning.

Every field can be set through a ``STRUCTURED_REASONING_<FIELD>`` environment
variable or a ``.env`` file. The brainstorming engine is permissive unless
told otherwise:

    STRUCTURED_REASONING_BRAINSTORM_STRICT_MUTATIONS=true
    STRUCTURED_REASONING_BRAINSTORM_ENFORCE_PHASE_ORDER=true
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Server, limit and brainstorming settings.

    Example:
        >>> Settings(_env_file=None, max_sessions=10).max_sessions
        10
    """

    model_config = SettingsConfigDict(
        env_prefix="STRUCTURED_REASONING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(default="structured-reasoning", description="MCP server name")
    server_version: str = Field(default="0.1.0", description="Version reported to clients")

    log_level: LogLevel = Field(default="INFO", description="Package log level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="stdlib logging format string",
    )
    log_file: Path | None = Field(
        default=None, description="Also write log records to this file"
    )

    # Limits
    max_sessions: int = Field(
        default=1000, ge=1, description="Thought runs plus brainstorming sessions held at once"
    )
    default_run_id: str = Field(
        default="default",
        min_length=1,
        description="Thought run used when a submission names no session",
    )
    max_thoughts_per_run: int = Field(
        default=1000, ge=10, description="Thoughts a single run accepts"
    )
    max_input_length: int = Field(
        default=50000, ge=100, description="Characters allowed in any text field"
    )

    # Brainstorming
    brainstorm_strict_mutations: bool = Field(
        default=False,
        description=(
            "Reject fields the phase does not use and references to missing "
            "ideas instead of ignoring them"
        ),
    )
    brainstorm_enforce_phase_order: bool = Field(
        default=False,
        description="Reject moving a brainstorming session back to an earlier phase",
    )

    # Call middleware
    enable_middleware: bool = Field(default=True, description="Log and count tool calls")
    middleware_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="DEBUG", description="Level of the per-call log lines"
    )
    enable_middleware_metrics: bool = Field(
        default=True, description="Keep per-tool call counters"
    )

    @model_validator(mode="after")
    def note_mixed_strictness(self) -> Settings:
        # Valid, but backwards moves fail while votes for missing ideas pass
        if self.brainstorm_enforce_phase_order and not self.brainstorm_strict_mutations:
            logger.info(
                "Brainstorm phase order is enforced while mutation checking stays "
                "permissive. Set STRUCTURED_REASONING_BRAINSTORM_STRICT_MUTATIONS=true "
                "to reject unknown idea references as well."
            )
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_settings(**overrides: Any) -> Settings:
    """Replace the process-wide settings.

    Keyword arguments go straight to ``Settings``, including ``_env_file``.
    """
    global _settings
    _settings = Settings(**overrides)
    return _settings


__all__ = ["Settings", "configure_settings", "get_settings"]
