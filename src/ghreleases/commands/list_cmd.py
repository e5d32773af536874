"""List command implementation."""

import click
from rich.table import Table

from ghreleases.commands.common import console, resolve_repo, run


@click.command("list")
@click.argument("repo_spec", metavar="REPO")
def list_releases(repo_spec: str):
    """List all releases of REPO, drafts included."""
    owner, repo = resolve_repo(repo_spec)

    releases = run(lambda manager: manager.get_all(owner, repo))

    if not releases:
        console.print(f"No releases found for {owner}/{repo}")
        raise SystemExit(0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tag")
    table.add_column("Name")
    table.add_column("Created")
    table.add_column("Assets")
    table.add_column("Status")

    for release in releases:
        status = []
        if release.draft:
            status.append("[yellow]draft[/yellow]")
        if release.prerelease:
            status.append("[cyan]prerelease[/cyan]")
        table.add_row(
            release.tag_name,
            release.name,
            release.created_at.strftime("%Y-%m-%d") if release.created_at else "",
            str(len(release.assets)),
            ", ".join(status),
        )

    console.print(table)
