"""Upload command implementation."""

from pathlib import Path

import click

from ghreleases.commands.common import console, resolve_repo, run


@click.command()
@click.argument("repo_spec", metavar="REPO")
@click.argument("release_id", type=int)
@click.argument("file", type=click.Path(path_type=Path))
def upload(repo_spec: str, release_id: int, file: Path):
    """Upload FILE as an asset of the release with id RELEASE_ID."""
    owner, repo = resolve_repo(repo_spec)

    asset = run(lambda manager: manager.upload_asset(owner, repo, release_id, file))

    console.print(f"[green]✓[/green] Uploaded [cyan]{asset.name}[/cyan] ({asset.size} bytes)")
