"""Shared validation helpers."""

from __future__ import annotations

from .errors import InvalidArgumentError


def validate_int(value: object, *, name: str) -> int:
    """Ensure *value* is a real integer and return it."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {type(value).__name__}"
        raise InvalidArgumentError(msg)
    return value


def validate_action_count(count: object) -> int:
    """Ensure *count* is usable as an action counter (non-zero integer)."""
    value = validate_int(count, name="action counter")
    if value == 0:
        msg = "Can't create action with 0 expected execution times"
        raise InvalidArgumentError(msg)
    return value
