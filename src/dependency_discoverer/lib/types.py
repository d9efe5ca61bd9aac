"""Value types and the repository client interface.

``RepositoryClient`` is the capability the rest of the package depends on.
:class:`~dependency_discoverer.lib.github.GitHubClient` is the concrete
implementation; tests substitute in-memory fakes that satisfy the same
protocol structurally.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

__all__ = [
    "Credentials",
    "DirectoryEntry",
    "PullRequestRecord",
    "RepositoryClient",
    "RepositoryHandle",
]


@dataclass(frozen=True)
class Credentials:
    """Login plus a password or token. Secrets are kept out of ``repr``."""

    login: str
    password: str = field(default="", repr=False)
    token: str = field(default="", repr=False)


@dataclass(frozen=True)
class RepositoryHandle:
    """A resolved remote repository.

    ``repository`` is the session-bound object returned by the hosting
    client; it is ignored for equality so handles compare by identity of
    the remote repository only.
    """

    owner: str
    name: str
    repository: Any = field(default=None, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        """Return ``owner/name``."""
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a directory listing."""

    path: str
    is_dir: bool = False


@dataclass(frozen=True)
class PullRequestRecord:
    """Snapshot of a pull request, hashable so open and closed sets union."""

    number: int
    title: str
    state: str
    url: str
    head: str
    base: str
    author: str = ""


class RepositoryClient(Protocol):
    """Flat, non-recursive queries against one hosting service."""

    def connect(
        self,
        credentials: Credentials,
        api_url: str,
        repo_name: str,
        *,
        owner: str | None = None,
    ) -> RepositoryHandle: ...

    def list_directory(
        self, handle: RepositoryHandle, path: str
    ) -> Sequence[DirectoryEntry]: ...

    def list_collaborators(self, handle: RepositoryHandle) -> set[str]: ...

    def list_pull_requests(
        self, handle: RepositoryHandle
    ) -> set[PullRequestRecord]: ...

    def watcher_count(self, handle: RepositoryHandle) -> int: ...
