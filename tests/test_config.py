"""Tests for dependency_discoverer.lib.config."""

from __future__ import annotations

from pathlib import Path

import pytest

import dependency_discoverer.lib.config as config_module
from dependency_discoverer.lib.config import Config
from dependency_discoverer.lib.types import Credentials

_ENV_VARS = (
    "DEPENDENCY_DISCOVERER_API_URL",
    "DEPENDENCY_DISCOVERER_LOGIN",
    "DEPENDENCY_DISCOVERER_PASSWORD",
    "DEPENDENCY_DISCOVERER_TOKEN",
    "DEPENDENCY_DISCOVERER_REPO",
    "DEPENDENCY_DISCOVERER_PROJECT_PATH",
    "DEPENDENCY_DISCOVERER_VERBOSE",
    "GITHUB_TOKEN",
    "GH_TOKEN",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the host environment and any local ``.env``."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.api_url == "https://api.github.com"
        assert config.login == ""
        assert config.password == ""
        assert config.token == ""
        assert config.repo == ""
        assert config.project_path == ""
        assert config.verbose is False

    def test_secrets_hidden_from_repr(self) -> None:
        config = Config(login="alice", password="pw-secret", token="ghp_secret")
        text = repr(config)
        assert "alice" in text
        assert "pw-secret" not in text
        assert "ghp_secret" not in text

    def test_credentials(self) -> None:
        config = Config(login="alice", password="pw")
        assert config.credentials() == Credentials(login="alice", password="pw")


class TestConfigValidation:
    @pytest.mark.parametrize("api_url", ["", "api.github.com", "ftp://host/api"])
    def test_invalid_api_url(self, api_url: str) -> None:
        with pytest.raises(ValueError, match="Invalid api_url"):
            Config(api_url=api_url)

    @pytest.mark.parametrize("repo", ["proj", "octo/proj", "my.repo-1"])
    def test_valid_repo(self, repo: str) -> None:
        assert Config(repo=repo).repo == repo

    @pytest.mark.parametrize("repo", ["a/b/c", "bad repo", "/proj"])
    def test_invalid_repo(self, repo: str) -> None:
        with pytest.raises(ValueError, match="Invalid repo"):
            Config(repo=repo)


class TestConfigFromEnv:
    def test_picks_up_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_API_URL", "https://ghe.local/api/v3")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_LOGIN", "alice")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_PASSWORD", "pw")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_REPO", "octo/proj")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_PROJECT_PATH", "services/api")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_VERBOSE", "yes")

        config = Config.from_env()

        assert config.api_url == "https://ghe.local/api/v3"
        assert config.login == "alice"
        assert config.password == "pw"
        assert config.repo == "octo/proj"
        assert config.project_path == "services/api"
        assert config.verbose is True

    def test_overrides_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_REPO", "from-env")
        config = Config.from_env(overrides={"repo": "from-cli", "login": None})
        assert config.repo == "from-cli"

    def test_token_falls_back_to_github_token(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_github")
        assert Config.from_env().token == "ghp_github"

    def test_gh_token_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_TOKEN", "ghp_gh")
        assert Config.from_env().token == "ghp_gh"

    def test_empty_github_token_falls_through_to_gh_token(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "")
        monkeypatch.setenv("GH_TOKEN", "ghp_gh")
        assert Config.from_env().token == "ghp_gh"

    def test_explicit_token_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_github")
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_TOKEN", "ghp_own")
        assert Config.from_env().token == "ghp_own"

    def test_loads_dotenv(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        loaded_paths: list[Path] = []
        env_file = tmp_path / ".env"

        def fake_load_dotenv(path: Path, override: bool = False) -> bool:
            loaded_paths.append(path)
            monkeypatch.setenv("DEPENDENCY_DISCOVERER_LOGIN", "from-dotenv")
            return True

        monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)

        config = Config.from_env()
        assert config.login == "from-dotenv"
        assert env_file in loaded_paths

    def test_secrets_not_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("DEPENDENCY_DISCOVERER_PASSWORD", "pw-secret")
        with caplog.at_level("DEBUG", logger="dependency_discoverer"):
            Config.from_env()
        assert "pw-secret" not in caplog.text
