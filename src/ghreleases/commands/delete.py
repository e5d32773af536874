"""Delete command implementation."""

import click

from ghreleases.commands.common import console, resolve_repo, run


@click.command()
@click.argument("repo_spec", metavar="REPO")
@click.argument("tag")
@click.option("--keep-tag", is_flag=True, help="Delete the release but keep its tag")
def delete(repo_spec: str, tag: str, keep_tag: bool):
    """Delete the release for TAG, and the tag itself."""
    owner, repo = resolve_repo(repo_spec)

    deleted = run(lambda manager: manager.delete(owner, repo, tag, delete_tag=not keep_tag))

    if not deleted:
        console.print(f"[yellow]No release found for tag {tag}[/yellow]")
        return

    console.print(f"[green]✓[/green] Deleted release [bold]{tag}[/bold]")
