"""Download command implementation."""

from pathlib import Path

import click

from ghreleases.commands.common import console, resolve_repo, run


@click.command()
@click.argument("repo_spec", metavar="REPO")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory to save assets in",
)
@click.option(
    "--match",
    "-m",
    "substrings",
    multiple=True,
    help="Only download the first asset whose name contains this (repeatable)",
)
def download(repo_spec: str, directory: Path, substrings: tuple[str, ...]):
    """Download assets from the latest release of REPO.

    Without --match every asset is downloaded.
    """
    owner, repo = resolve_repo(repo_spec)

    if substrings:
        path = run(
            lambda manager: manager.download_release_asset_by_name_pattern(
                owner, repo, directory, substrings
            )
        )
        if path is None:
            console.print(f"[red]Error:[/red] No asset matches {', '.join(substrings)}")
            raise SystemExit(1)
        console.print(f"[green]✓[/green] Saved {path}")
        return

    paths = run(lambda manager: manager.download_all_latest_release_assets(owner, repo, directory))
    if not paths:
        console.print("[yellow]Nothing downloaded[/yellow]")
        return

    for path in paths:
        console.print(f"[green]✓[/green] Saved {path}")
