"""Get command implementation."""

import click
from rich.panel import Panel

from ghreleases.commands.common import console, resolve_repo, run


@click.command()
@click.argument("repo_spec", metavar="REPO")
@click.argument("tag")
def get(repo_spec: str, tag: str):
    """Show a release and its assets."""
    owner, repo = resolve_repo(repo_spec)

    release = run(lambda manager: manager.get(owner, repo, tag))

    if release is None:
        console.print(f"[red]Error:[/red] No release found for tag {tag}")
        raise SystemExit(1)

    created = release.created_at.strftime("%Y-%m-%d %H:%M") if release.created_at else "-"
    lines = [
        f"[bold]Id:[/bold] {release.id}",
        f"[bold]Tag:[/bold] {release.tag_name}",
        f"[bold]Created:[/bold] {created}",
        f"[bold]Draft:[/bold] {'Yes' if release.draft else 'No'}",
        f"[bold]Prerelease:[/bold] {'Yes' if release.prerelease else 'No'}",
    ]
    if release.body:
        lines.append(f"\n{release.body}")
    console.print(Panel("\n".join(lines), title=f"[green]{release.name}[/green]"))

    if release.assets:
        console.print("\n[bold]Assets:[/bold]")
        for asset in release.assets:
            console.print(f"  • {asset.name} [dim]({asset.size} bytes)[/dim]")
