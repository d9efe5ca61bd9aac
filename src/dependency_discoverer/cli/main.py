"""CLI entry point: parse args, load config, run one repository query."""

from __future__ import annotations

import argparse
import logging
import sys

from dependency_discoverer.lib.config import Config
from dependency_discoverer.lib.errors import DiscovererError
from dependency_discoverer.lib.github import GitHubClient
from dependency_discoverer.lib.tree import TreeFlattener
from dependency_discoverer.lib.types import RepositoryHandle
from dependency_discoverer.lib.validation import require_str

COMMANDS = ("files", "collaborators", "pulls", "watchers")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for CLI mode."""
    parser = argparse.ArgumentParser(
        prog="dependency-discoverer",
        description="Query repository metadata from GitHub.",
    )
    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="What to retrieve from the repository.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Project directory to flatten (for 'files').",
    )
    parser.add_argument(
        "--repo",
        default=None,
        help="Repository name or owner/name (overrides env/config).",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="GitHub API endpoint, e.g. https://ghe.example.com/api/v3.",
    )
    parser.add_argument(
        "--login",
        default=None,
        help="Login used to authenticate (overrides env/config).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable verbose output.",
    )
    return parser


def _run_command(
    client: GitHubClient, handle: RepositoryHandle, command: str, path: str
) -> list[str]:
    if command == "files":
        return sorted(TreeFlattener(client).flatten(handle, path))
    if command == "collaborators":
        return sorted(client.list_collaborators(handle))
    if command == "pulls":
        prs = sorted(client.list_pull_requests(handle), key=lambda pr: pr.number)
        return [f"#{pr.number}\t{pr.state}\t{pr.title}" for pr in prs]
    return [str(client.watcher_count(handle))]


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env(
            overrides={
                "repo": args.repo,
                "api_url": args.api_url,
                "login": args.login,
                "project_path": args.path,
                "verbose": args.verbose,
            }
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.command == "files":
            require_str(config.project_path, name="start_path")
        with GitHubClient() as client:
            handle = client.connect(config.credentials(), config.api_url, config.repo)
            lines = _run_command(client, handle, args.command, config.project_path)
    except DiscovererError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
