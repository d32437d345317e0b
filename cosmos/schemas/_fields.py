"""Shared coercions for form-style input (blank strings, checkbox values)."""

from typing import Any


def blank_to_none(value: Any) -> Any:
    """Treat an empty or whitespace-only submission as an absent value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def blank_to_zero(value: Any) -> Any:
    """Required numeric attributes default to zero when left blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    return value


def strip_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value
