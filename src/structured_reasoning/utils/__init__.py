"""Utility modules for structured-reasoning.

Components:
    - validation: Error types and input validation helpers
    - formatting: Plain-text rendering of thoughts and sessions
"""

from structured_reasoning.utils.formatting import format_session, format_thought
from structured_reasoning.utils.validation import (
    MAX_INPUT_LENGTH,
    NotFoundError,
    ReasoningError,
    SessionLimitError,
    ValidationError,
    optional_positive_int,
    optional_text,
    require_positive_int,
    require_text,
    sanitize_text,
    validate_input_length,
)

__all__ = [
    # Formatting
    "format_session",
    "format_thought",
    # Validation
    "MAX_INPUT_LENGTH",
    "NotFoundError",
    "ReasoningError",
    "SessionLimitError",
    "ValidationError",
    "optional_positive_int",
    "optional_text",
    "require_positive_int",
    "require_text",
    "sanitize_text",
    "validate_input_length",
]
