"""Release asset downloads."""

import logging
from pathlib import Path

import httpx

from ghreleases.core.github import GitHubError
from ghreleases.models.release import Asset


logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class DownloadError(GitHubError):
    """Error during download."""

    pass


async def download_asset(client: httpx.AsyncClient, asset: Asset, dest: Path) -> Path:
    """Download a release asset into a directory.

    Args:
        client: HTTP client to stream with
        asset: Asset to download
        dest: Destination directory, created if missing

    Returns:
        Path to downloaded file
    """
    dest.mkdir(parents=True, exist_ok=True)
    file_path = dest / asset.name

    async with client.stream(
        "GET",
        asset.download_url,
        headers={"Accept": "application/octet-stream"},
        follow_redirects=True,
        timeout=60.0,
    ) as response:
        if response.status_code != 200:
            raise DownloadError(
                f"Failed to download {asset.download_url}: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            with open(file_path, "wb") as f:
                async for chunk in response.aiter_bytes(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
        except BaseException:
            # Partial file, including on cancellation
            file_path.unlink(missing_ok=True)
            raise

    logger.debug("Saved %s (%d bytes) to %s", asset.name, asset.size, file_path)
    return file_path
