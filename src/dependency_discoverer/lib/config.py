"""Configuration loading: CLI flags → env vars → dotenv files → defaults."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from dependency_discoverer.lib.github import DEFAULT_API_URL
from dependency_discoverer.lib.types import Credentials

logger = logging.getLogger(__name__)

_REPO_PATTERN = re.compile(r"^[A-Za-z0-9._-]+(/[A-Za-z0-9._-]+)?$")
_ENV_PREFIX = "DEPENDENCY_DISCOVERER_"

try:
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - optional dependency safety
    load_dotenv = None  # type: ignore[assignment]

ConfigValue = str | bool | None


def _validate_api_url(api_url: str) -> None:
    """Validate that *api_url* is an absolute http(s) URL."""
    parsed = urlparse(api_url)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return
    msg = (
        f"Invalid api_url '{api_url}': must be an http(s) URL. "
        "Example: https://api.github.com or https://ghe.example.com/api/v3"
    )
    raise ValueError(msg)


def _validate_repo(repo: str) -> None:
    """Validate repo format: must be empty, a bare name, or owner/repo."""
    if not repo or _REPO_PATTERN.match(repo):
        return
    msg = f"Invalid repo '{repo}': must be 'name' or 'owner/name'."
    raise ValueError(msg)


def _load_env_files() -> None:
    """Load a dotenv file from the current directory, if available."""
    if load_dotenv is None:
        return
    load_dotenv(Path.cwd() / ".env", override=False)


def _env(name: str) -> str | None:
    return os.environ.get(f"{_ENV_PREFIX}{name}")


@dataclass(frozen=True)
class Config:
    """Immutable application configuration.

    ``password`` and ``token`` are never included in ``repr`` and never
    logged.
    """

    api_url: str = DEFAULT_API_URL
    login: str = ""
    password: str = field(default="", repr=False)
    token: str = field(default="", repr=False)
    repo: str = ""
    project_path: str = ""
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate ``api_url`` and ``repo`` on creation."""
        _validate_api_url(self.api_url)
        _validate_repo(self.repo)

    def credentials(self) -> Credentials:
        """Return the login and secrets as :class:`Credentials`."""
        return Credentials(login=self.login, password=self.password, token=self.token)

    @classmethod
    def from_env(cls, overrides: dict[str, ConfigValue] | None = None) -> Config:
        """Build config from environment variables, then apply overrides.

        Priority: overrides (CLI flags) > env vars > ``.env`` > defaults.
        The token falls back to ``GITHUB_TOKEN`` / ``GH_TOKEN``.
        """
        _load_env_files()

        env_values: dict[str, ConfigValue] = {
            "api_url": _env("API_URL"),
            "login": _env("LOGIN"),
            "password": _env("PASSWORD"),
            "token": _env("TOKEN")
            or os.environ.get("GITHUB_TOKEN")
            or os.environ.get("GH_TOKEN"),
            "repo": _env("REPO"),
            "project_path": _env("PROJECT_PATH"),
            "verbose": (_env("VERBOSE") or "").lower() in ("1", "true", "yes"),
        }

        merged = {k: v for k, v in env_values.items() if v}
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})

        config = cls(
            api_url=str(merged.get("api_url", cls.api_url)),
            login=str(merged.get("login", cls.login)),
            password=str(merged.get("password", "")),
            token=str(merged.get("token", "")),
            repo=str(merged.get("repo", cls.repo)),
            project_path=str(merged.get("project_path", cls.project_path)),
            verbose=bool(merged.get("verbose", cls.verbose)),
        )
        logger.debug("Loaded config %r", config)
        return config
