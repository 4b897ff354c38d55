"""Input validation utilities and error types for structured-reasoning."""
from __future__ import annotations

import unicodedata
from typing import Any

MAX_INPUT_LENGTH = 50000  # 50KB default max


class ReasoningError(Exception):
    """Base class for errors recovered at the dispatcher boundary."""

    pass


class ValidationError(ReasoningError, ValueError):
    """Raised when input validation fails."""

    pass


class NotFoundError(ReasoningError, LookupError):
    """Raised when a session or thought run does not exist."""

    def __init__(self, kind: str, identifier: str | None) -> None:
        self.kind = kind
        self.identifier = identifier
        if identifier:
            super().__init__(f"{kind} not found: {identifier}")
        else:
            super().__init__(f"A valid {kind.lower()} ID is required")


class SessionLimitError(ReasoningError):
    """Raised when the session directory is at capacity."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Maximum session limit reached ({limit})")


def validate_input_length(
    text: str,
    max_chars: int = MAX_INPUT_LENGTH,
    field_name: str = "input",
) -> str:
    """Validate input text length.

    Args:
        text: Input text to validate
        max_chars: Maximum allowed characters
        field_name: Name of field for error messages

    Returns:
        The validated text

    Raises:
        ValidationError: If text exceeds max length
    """
    if len(text) > max_chars:
        raise ValidationError(
            f"{field_name} exceeds maximum length of {max_chars} characters "
            f"(got {len(text)})"
        )
    return text


def sanitize_text(text: str) -> str:
    """Remove null bytes and normalize unicode, preserving content otherwise."""
    text = text.replace("\x00", "")
    return unicodedata.normalize("NFC", text)


def require_text(
    value: Any,
    field_name: str,
    *,
    max_chars: int = MAX_INPUT_LENGTH,
    message: str | None = None,
) -> str:
    """Validate a required, non-blank text field.

    Args:
        value: Raw value to check
        field_name: Name of field for error messages
        max_chars: Maximum allowed characters
        message: Optional message used when the value is missing or blank

    Returns:
        The sanitized text

    Raises:
        ValidationError: If the value is not a string, is blank once null bytes
            are removed, or is too long
    """
    if not isinstance(value, str):
        raise ValidationError(message or f"{field_name} is required")
    text = sanitize_text(value)
    if not text.strip():
        raise ValidationError(message or f"{field_name} is required")
    return validate_input_length(text, max_chars, field_name)


def optional_text(value: Any, field_name: str, *, max_chars: int = MAX_INPUT_LENGTH) -> str | None:
    """Return sanitized text, or None when the value is missing or blank."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value).__name__}")
    text = sanitize_text(value)
    if not text.strip():
        return None
    return validate_input_length(text, max_chars, field_name)


def require_positive_int(value: Any, field_name: str, *, message: str | None = None) -> int:
    """Validate that a value is an integer >= 1.

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(message or f"{field_name} must be a positive integer")
    return value


def optional_positive_int(value: Any, field_name: str) -> int | None:
    """Validate an optional positive integer; None passes through."""
    if value is None:
        return None
    return require_positive_int(value, field_name)


__all__ = [
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
