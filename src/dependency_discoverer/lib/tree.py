"""Flatten a remote directory tree into the set of file paths it contains."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dependency_discoverer.lib.types import RepositoryClient, RepositoryHandle
from dependency_discoverer.lib.validation import require_present, require_str

__all__ = ["TreeFlattener"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeFlattener:
    """Depth-first walker over ``client.list_directory``.

    One listing call is made per directory, sequentially, driven by an
    explicit stack of pending directory paths so tree depth is not limited
    by the interpreter recursion limit. The accumulator is local to each
    :meth:`flatten` call, so a single flattener may serve concurrent callers.
    """

    client: RepositoryClient

    def flatten(self, handle: RepositoryHandle, start_path: str) -> set[str]:
        """Return every file path under *start_path*, at any depth.

        Directory paths are never included. Ordering is unspecified.

        Args:
            handle: Repository to walk.
            start_path: Directory to start from.

        Returns:
            A new set owned by the caller. Empty if *start_path* has no
            children.

        Raises:
            PreconditionError: If *handle* or *start_path* is missing.
            RetrievalError: If *start_path* or any directory found beneath
                it cannot be listed. Paths collected before the failure are
                discarded.
        """
        handle = require_present(handle, name="handle")
        start_path = require_str(start_path, name="start_path")
        files: set[str] = set()
        self._walk(handle, start_path, files)
        logger.debug(
            "Flattened %s:%s into %d file(s)", handle.full_name, start_path, len(files)
        )
        return files

    def _walk(self, handle: RepositoryHandle, start_path: str, files: set[str]) -> None:
        pending = [start_path]
        while pending:
            path = pending.pop()
            logger.debug("Listing %s:%s", handle.full_name, path)
            subdirs: list[str] = []
            for entry in self.client.list_directory(handle, path):
                if entry.is_dir:
                    subdirs.append(entry.path)
                else:
                    files.add(entry.path)
            # reversed so the first subdirectory is listed next
            pending.extend(reversed(subdirs))
