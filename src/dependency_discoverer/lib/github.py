"""GitHub integration: session handshake and flat repository queries.

Wraps PyGithub. Every PyGithub or transport exception is mapped to one of the
domain errors in :mod:`dependency_discoverer.lib.errors` before it leaves
this module. Each remote call is attempted exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from github import Auth, Github, GithubException, UnknownObjectException
from github.PullRequest import PullRequest

from dependency_discoverer.lib.errors import (
    DiscovererError,
    GitConnectionError,
    PreconditionError,
    RepositoryNotFoundError,
    RetrievalError,
)
from dependency_discoverer.lib.types import (
    Credentials,
    DirectoryEntry,
    PullRequestRecord,
    RepositoryHandle,
)
from dependency_discoverer.lib.validation import require_present, require_str

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PULL_REQUEST_STATES = ("open", "closed")


def _redact_sensitive(text: str, secrets: Iterable[str]) -> str:
    """Replace every non-empty secret in *text* with ``***``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text


def _github_error_message(action: str, exc: Exception) -> str:
    """Build a clear error message from a PyGithub or transport exception.

    Args:
        action: Human-readable description of what was attempted.
        exc: The caught exception.

    Returns:
        An actionable error string including the HTTP status and detail.
    """
    status = getattr(exc, "status", None)
    message = ""
    if isinstance(exc, GithubException):
        detail = getattr(exc, "data", {})
        if isinstance(detail, dict):
            message = detail.get("message", "")
    else:
        message = str(exc) or type(exc).__name__
    hints: dict[int, str] = {
        401: "check the login and password or token",
        403: "check token permissions or GitHub rate limits",
        404: "resource not found, verify repo name and permissions",
    }
    hint = hints.get(status, "") if status else ""
    parts = [f"GitHub API error: failed to {action}"]
    if status:
        parts.append(f"(HTTP {status})")
    if message:
        parts.append(f"- {message}")
    if hint:
        parts.append(f"[hint: {hint}]")
    return " ".join(parts)


def _mapped_error(
    error_cls: type[DiscovererError],
    action: str,
    exc: Exception,
    *,
    secrets: Iterable[str] = (),
    **context: Any,
) -> DiscovererError:
    msg = _redact_sensitive(_github_error_message(action, exc), secrets)
    logger.error(msg)
    return error_cls(msg, action=action, **context)


def _split_repo_name(repo_name: str, owner: str | None, login: str) -> tuple[str, str]:
    """Resolve ``(owner, name)`` from ``name`` or ``owner/name`` input."""
    if "/" in repo_name:
        repo_owner, _, name = repo_name.partition("/")
        if not repo_owner.strip() or not name.strip() or "/" in name:
            msg = f"repo_name must be 'name' or 'owner/name', got '{repo_name}'"
            raise PreconditionError(msg, argument="repo_name")
        return repo_owner.strip(), name.strip()
    return (owner or "").strip() or login, repo_name


def _pull_request_record(pr: PullRequest) -> PullRequestRecord:
    return PullRequestRecord(
        number=pr.number,
        title=pr.title,
        state=pr.state,
        url=pr.html_url,
        head=pr.head.ref,
        base=pr.base.ref,
        author=pr.user.login if pr.user else "",
    )


@dataclass
class GitHubClient:
    """Repository client bound to a GitHub or GitHub Enterprise API.

    A session is opened by :meth:`connect`; the returned handle is then
    passed to the query methods. ``timeout`` is the per-request deadline in
    seconds, enforced by the underlying HTTP transport.
    """

    timeout: int = 15
    _gh: Github | None = field(default=None, init=False, repr=False)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def connect(
        self,
        credentials: Credentials,
        api_url: str,
        repo_name: str,
        *,
        owner: str | None = None,
    ) -> RepositoryHandle:
        """Authenticate against *api_url* and resolve a repository.

        Args:
            credentials: Login plus password or token.
            api_url: API endpoint, e.g. ``https://api.github.com`` or
                ``https://ghe.example.com/api/v3``.
            repo_name: Repository name, or ``owner/name``.
            owner: Owner of the repository when *repo_name* is bare.
                Defaults to the credential login.

        Returns:
            A handle for the resolved repository.

        Raises:
            PreconditionError: If a required argument is missing or empty.
                No network call has been made.
            GitConnectionError: If the handshake failed (bad credentials,
                unreachable endpoint, hosting-side outage).
            RepositoryNotFoundError: If the session is valid but the
                repository does not resolve.
        """
        credentials = require_present(credentials, name="credentials")
        login = require_str(credentials.login, name="login")
        if not (credentials.token or credentials.password):
            raise PreconditionError(
                "password or token is required", argument="credentials"
            )
        base_url = require_str(api_url, name="api_url").rstrip("/")
        repo_owner, name = _split_repo_name(
            require_str(repo_name, name="repo_name"), owner, login
        )
        full_name = f"{repo_owner}/{name}"
        secrets = (credentials.password, credentials.token)

        auth: Auth.Auth
        if credentials.token:
            auth = Auth.Token(credentials.token)
        else:
            auth = Auth.Login(login, credentials.password)

        self.close()
        try:
            self._gh = Github(
                base_url=base_url, auth=auth, timeout=self.timeout, retry=None
            )
            repository = self._gh.get_repo(full_name)
        except UnknownObjectException as exc:
            raise _mapped_error(
                RepositoryNotFoundError,
                f"resolve repository '{full_name}'",
                exc,
                secrets=secrets,
                repo=full_name,
            ) from exc
        except (GithubException, OSError) as exc:
            raise _mapped_error(
                GitConnectionError,
                f"connect to '{base_url}' as '{login}'",
                exc,
                secrets=secrets,
                repo=full_name,
                api_url=base_url,
            ) from exc

        logger.info("Connected to %s and resolved %s", base_url, full_name)
        return RepositoryHandle(owner=repo_owner, name=name, repository=repository)

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    def list_directory(
        self, handle: RepositoryHandle, path: str
    ) -> list[DirectoryEntry]:
        """Return the immediate children of *path*.

        A path that names a single file is returned as a one-entry listing.

        Raises:
            RetrievalError: If the listing call does not complete.
        """
        handle = require_present(handle, name="handle")
        remote_path = require_str(path, name="path").strip("/")
        try:
            contents = handle.repository.get_contents(remote_path)
        except (GithubException, OSError) as exc:
            raise _mapped_error(
                RetrievalError,
                f"list directory '{path}' in '{handle.full_name}'",
                exc,
                repo=handle.full_name,
                path=path,
            ) from exc
        if not isinstance(contents, list):
            contents = [contents]
        return [
            DirectoryEntry(path=content.path, is_dir=content.type == "dir")
            for content in contents
        ]

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def list_collaborators(self, handle: RepositoryHandle) -> set[str]:
        """Return the login of every collaborator on the repository."""
        handle = require_present(handle, name="handle")
        try:
            return {user.login for user in handle.repository.get_collaborators()}
        except (GithubException, OSError) as exc:
            raise _mapped_error(
                RetrievalError,
                f"list collaborators of '{handle.full_name}'",
                exc,
                repo=handle.full_name,
            ) from exc

    def watcher_count(self, handle: RepositoryHandle) -> int:
        """Return the number of watchers of the repository."""
        handle = require_present(handle, name="handle")
        try:
            return int(handle.repository.watchers_count)
        except (GithubException, OSError) as exc:
            raise _mapped_error(
                RetrievalError,
                f"read watcher count of '{handle.full_name}'",
                exc,
                repo=handle.full_name,
            ) from exc

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    def list_pull_requests(self, handle: RepositoryHandle) -> set[PullRequestRecord]:
        """Return open and closed pull requests as one set."""
        handle = require_present(handle, name="handle")
        records: set[PullRequestRecord] = set()
        for state in PULL_REQUEST_STATES:
            try:
                records.update(
                    _pull_request_record(pr)
                    for pr in handle.repository.get_pulls(state=state)
                )
            except (GithubException, OSError) as exc:
                raise _mapped_error(
                    RetrievalError,
                    f"list {state} PRs of '{handle.full_name}'",
                    exc,
                    repo=handle.full_name,
                    state=state,
                ) from exc
        return records

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying GitHub connection, if one is open."""
        if self._gh is not None:
            self._gh.close()
            self._gh = None

    def __enter__(self) -> GitHubClient:
        """Enter the context manager and return self."""
        return self

    def __exit__(self, *_: Any) -> None:
        """Exit the context manager and close the connection."""
        self.close()
