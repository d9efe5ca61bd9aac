"""Argument precondition helpers shared by the client and the flattener.

These run before any network activity so that caller programming errors
surface as :class:`PreconditionError` rather than as a retrieval failure.
"""

from __future__ import annotations

from typing import TypeVar

from dependency_discoverer.lib.errors import PreconditionError

__all__ = ["require_present", "require_str"]

T = TypeVar("T")


def require_present(value: T | None, *, name: str) -> T:
    """Return *value* unchanged, rejecting ``None``.

    Args:
        value: Argument to check.
        name: Parameter name used in the error message.

    Raises:
        PreconditionError: If *value* is ``None``.
    """
    if value is None:
        raise PreconditionError(f"{name} is required", argument=name)
    return value


def require_str(value: str | None, *, name: str) -> str:
    """Return *value* trimmed, rejecting ``None``, non-strings and blanks.

    Args:
        value: Argument to check.
        name: Parameter name used in the error message.

    Returns:
        The trimmed string.

    Raises:
        PreconditionError: If *value* is missing, not a string, or blank.
    """
    if value is None:
        raise PreconditionError(f"{name} is required", argument=name)
    if not isinstance(value, str):
        raise PreconditionError(f"{name} must be a string", argument=name)
    stripped = value.strip()
    if not stripped:
        raise PreconditionError(f"{name} must not be empty", argument=name)
    return stripped
