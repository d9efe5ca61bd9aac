"""Core library: repository client, tree flattener, configuration, errors.

Primary modules:
- ``dependency_discoverer.lib.github`` for the PyGithub-backed client.
- ``dependency_discoverer.lib.tree`` for recursive file-path flattening.
- ``dependency_discoverer.lib.errors`` for the domain error kinds.
"""

from dependency_discoverer.lib.errors import (
    DiscovererError,
    ErrorKind,
    GitConnectionError,
    PreconditionError,
    RepositoryNotFoundError,
    RetrievalError,
)
from dependency_discoverer.lib.github import GitHubClient
from dependency_discoverer.lib.tree import TreeFlattener
from dependency_discoverer.lib.types import (
    Credentials,
    DirectoryEntry,
    PullRequestRecord,
    RepositoryClient,
    RepositoryHandle,
)

__all__ = [
    "Credentials",
    "DirectoryEntry",
    "DiscovererError",
    "ErrorKind",
    "GitConnectionError",
    "GitHubClient",
    "PreconditionError",
    "PullRequestRecord",
    "RepositoryClient",
    "RepositoryHandle",
    "RepositoryNotFoundError",
    "RetrievalError",
    "TreeFlattener",
]
