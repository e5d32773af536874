"""Release asset upload to the GitHub upload host.

The upload endpoint lives on ``uploads.github.com`` rather than the API
host, so requests are built by hand instead of going through GitHubClient.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from urllib.parse import quote

import httpx

from ghreleases.core.config import DEFAULT_UPLOAD_URL, TOKEN_KEY, GhReleasesConfig, get_config
from ghreleases.core.github import GitHubError
from ghreleases.models.release import Asset


logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class AssetNotFoundError(FileNotFoundError):
    """Local file to upload does not exist."""

    pass


class UploadError(GitHubError):
    """Upload host returned a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str):
        super().__init__(
            f"Upload failed with status {status_code} - {reason}: {body}",
            status_code=status_code,
        )
        self.reason = reason
        self.body = body


def build_upload_url(
    owner: str, repo: str, release_id: int, filename: str, base_url: str = DEFAULT_UPLOAD_URL
) -> str:
    """Build the asset upload URL with the URL-escaped file name."""
    return (
        f"{base_url.rstrip('/')}/repos/{owner}/{repo}/releases/{release_id}"
        f"/assets?name={quote(filename, safe='')}"
    )


async def _read_chunks(f):
    # Blocking reads run off the event loop
    while True:
        chunk = await asyncio.to_thread(f.read, CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


async def upload_asset(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    release_id: int,
    file_path: Path | str,
    config: GhReleasesConfig | None = None,
) -> Asset:
    """Stream a file to a release as a new asset.

    Raises:
        AssetNotFoundError: file_path does not exist
        UploadError: the upload host answered with a non-success status
    """
    config = config or get_config()
    file_path = Path(file_path)
    upload_url = build_upload_url(owner, repo, release_id, file_path.name, config.upload_url)

    if not file_path.is_file():
        logger.error("File not found at path '%s'", file_path)
        raise AssetNotFoundError(f"Upload file not found: {file_path}")

    logger.info(
        "Starting upload for file '%s' to release %s in %s/%s",
        file_path.name,
        release_id,
        owner,
        repo,
    )

    headers = {
        "Authorization": f"Bearer {config.get_strict(TOKEN_KEY)}",
        "User-Agent": str(uuid.uuid4()),
        "Content-Type": "application/octet-stream",
        "Content-Length": str(file_path.stat().st_size),
    }

    try:
        with open(file_path, "rb") as f:
            response = await client.post(upload_url, content=_read_chunks(f), headers=headers)

        if not response.is_success:
            logger.error(
                "Upload failed with status %s - %s. Response body: %s",
                response.status_code,
                response.reason_phrase,
                response.text,
            )
            raise UploadError(response.status_code, response.reason_phrase, response.text)

        logger.info("Upload successful for '%s'", file_path.name)
        return Asset.from_api_response(response.json())
    except httpx.HTTPError:
        logger.exception("HTTP error while uploading to GitHub. URL: %s", upload_url)
        raise
    except UploadError:
        raise
    except Exception:
        logger.exception("Unexpected error during upload of '%s'", file_path.name)
        raise
