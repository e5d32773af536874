"""CLI entry point for ghreleases."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ghreleases import __version__
from ghreleases.commands import create, upload, delete, info, list_cmd, download

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Send library logs through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="ghreleases")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """ghreleases - Manage GitHub releases and their assets.

    The token is read from GH_TOKEN, GITHUB_TOKEN or the GH:TOKEN entry of
    ~/.config/ghreleases/config.yaml.

    Examples:

        ghreleases create octo/tool v1.2.0 dist/tool.tar.gz --name "Tool 1.2.0"

        ghreleases list octo/tool

        ghreleases download octo/tool --match linux --match amd64

        ghreleases delete octo/tool v1.2.0
    """
    setup_logging(verbose)


# Register commands
main.add_command(create.create)
main.add_command(upload.upload)
main.add_command(delete.delete)
main.add_command(info.get)
main.add_command(list_cmd.list_releases)
main.add_command(download.download)


if __name__ == "__main__":
    main()
