"""Create command implementation."""

from pathlib import Path

import click

from ghreleases.commands.common import console, resolve_repo, run


@click.command()
@click.argument("repo_spec", metavar="REPO")
@click.argument("tag")
@click.argument("asset", type=click.Path(path_type=Path))
@click.option("--name", "-n", default=None, help="Release title (defaults to the tag)")
@click.option("--body", "-b", default="", help="Release notes")
@click.option("--draft", is_flag=True, help="Create the release as a draft")
@click.option("--prerelease", is_flag=True, help="Mark the release as a prerelease")
def create(
    repo_spec: str,
    tag: str,
    asset: Path,
    name: str | None,
    body: str,
    draft: bool,
    prerelease: bool,
):
    """Create a release for TAG and upload ASSET to it.

    The tag is created from the default branch head if it does not exist.
    """
    owner, repo = resolve_repo(repo_spec)

    console.print(f"[blue]Creating release[/blue] {tag} in {owner}/{repo}...")
    release = run(
        lambda manager: manager.create(
            owner,
            repo,
            tag,
            name or tag,
            body,
            asset,
            draft=draft,
            prerelease=prerelease,
        )
    )

    console.print(f"\n[green]✓[/green] Created release [bold]{release.name}[/bold]")
    if release.html_url:
        console.print(f"  {release.html_url}")
