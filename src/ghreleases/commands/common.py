"""Helpers shared by the command implementations."""

import asyncio

import httpx
from rich.console import Console

from ghreleases.core.config import ConfigError
from ghreleases.core.github import GitHubClient, GitHubError, parse_repo_spec
from ghreleases.core.releases import ReleaseManager

console = Console()

# Errors reported as a one-line message instead of a traceback
COMMAND_ERRORS = (GitHubError, ConfigError, FileNotFoundError, httpx.HTTPError)


def open_client() -> GitHubClient:
    return GitHubClient.from_config()


def resolve_repo(spec: str) -> tuple[str, str]:
    """Parse REPO or exit with an error."""
    try:
        return parse_repo_spec(spec)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


def run(operation):
    """Run ``operation(manager)`` on a fresh client and return its result.

    Known errors are printed and turned into exit status 1.
    """

    async def _main():
        async with open_client() as client:
            return await operation(ReleaseManager(client))

    try:
        return asyncio.run(_main())
    except COMMAND_ERRORS as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
