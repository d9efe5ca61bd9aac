"""Domain error kinds raised by the repository client and tree flattener.

Every failure surfaced to callers is one of four kinds. Transport-level
exceptions (PyGithub, ``requests``) never escape the client; they are mapped
to one of these and chained as ``__cause__``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

__all__ = [
    "DiscovererError",
    "ErrorKind",
    "GitConnectionError",
    "PreconditionError",
    "RepositoryNotFoundError",
    "RetrievalError",
]


class ErrorKind(str, Enum):
    """Stable, transport-independent failure categories."""

    PRECONDITION = "precondition"
    CONNECTION = "connection"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    RETRIEVAL = "retrieval"


class DiscovererError(Exception):
    """Base class for every error raised by this package.

    Args:
        message: Human-readable description.
        **context: Extra detail about the failed call (``repo``, ``path``,
            ``action`` ...). Never includes credentials.
    """

    kind: ErrorKind

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.context: Mapping[str, Any] = dict(context)


class PreconditionError(DiscovererError, ValueError):
    """A required argument was missing or empty; raised before any I/O."""

    kind = ErrorKind.PRECONDITION


class GitConnectionError(DiscovererError):
    """The session handshake with the hosting service failed."""

    kind = ErrorKind.CONNECTION


class RepositoryNotFoundError(DiscovererError):
    """The session is valid but the named repository does not resolve."""

    kind = ErrorKind.REPOSITORY_NOT_FOUND


class RetrievalError(DiscovererError):
    """A query against an already-resolved repository failed."""

    kind = ErrorKind.RETRIEVAL
