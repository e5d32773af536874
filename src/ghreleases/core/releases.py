"""Release manager combining the GitHub client, tag helper and asset transfer."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import httpx

from ghreleases.core.config import GhReleasesConfig, get_config
from ghreleases.core.downloader import download_asset
from ghreleases.core.github import GitHubClient, GitHubError
from ghreleases.core.tags import TagHelper
from ghreleases.core.uploader import upload_asset
from ghreleases.models.release import Asset, Release


logger = logging.getLogger(__name__)

PER_PAGE = 100

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def select_latest(releases: Iterable[Release]) -> Release | None:
    """Pick the newest non-draft release by creation time."""
    published = [r for r in releases if not r.draft]
    if not published:
        return None
    return max(published, key=lambda r: r.created_at or _EPOCH)


def match_asset(assets: Iterable[Asset], substrings: Iterable[str]) -> Asset | None:
    """Return the first asset whose name contains every substring, ignoring case."""
    needles = [s.lower() for s in substrings]
    for asset in assets:
        name = asset.name.lower()
        if all(needle in name for needle in needles):
            return asset
    return None


class ReleaseManager:
    """Create, look up, delete and transfer assets of GitHub releases."""

    def __init__(
        self,
        client: GitHubClient,
        tags: TagHelper | None = None,
        config: GhReleasesConfig | None = None,
    ):
        self.client = client
        self.tags = tags or TagHelper(client)
        self.config = config or get_config()

    async def create(
        self,
        owner: str,
        repo: str,
        tag: str,
        name: str,
        body: str,
        asset_path: Path | str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> Release:
        """Create a release for tag and upload asset_path as its only asset.

        The tag is created first when it does not exist yet.
        """
        try:
            if not await self.tags.exists(owner, repo, tag):
                await self.tags.create(owner, repo, tag)
                logger.info("Tag '%s' created successfully.", tag)
            else:
                logger.info("Tag '%s' already exists. Skipping tag creation.", tag)

            release = await self.client.create_release(
                owner, repo, tag, name, body, draft=draft, prerelease=prerelease
            )
            logger.info("Release '%s' created successfully.", release.name)

            asset = await self.upload_asset(owner, repo, release.id, asset_path)
            release.assets.append(asset)
            logger.info("Asset '%s' uploaded successfully.", asset.name)
            return release
        except Exception as e:
            logger.exception("An unexpected error occurred while creating release '%s': %s", tag, e)
            raise

    async def upload_asset(
        self, owner: str, repo: str, release_id: int, file_path: Path | str
    ) -> Asset:
        return await upload_asset(
            self.client.client, owner, repo, release_id, file_path, config=self.config
        )

    async def delete(self, owner: str, repo: str, tag: str, delete_tag: bool = True) -> bool:
        """Delete the release for tag, and the tag itself unless told otherwise.

        Returns False when there is no release for the tag.
        """
        try:
            release = await self.get(owner, repo, tag)
            if release is None:
                return False

            await self.client.delete_release(owner, repo, release.id)
            logger.info("Release with tag '%s' deleted successfully.", tag)

            if delete_tag and await self.tags.exists(owner, repo, tag):
                await self.tags.delete(owner, repo, tag)
                logger.info("Tag '%s' deleted successfully.", tag)

            return True
        except Exception as e:
            logger.exception("An error occurred while deleting the release: %s", e)
            raise

    async def get(self, owner: str, repo: str, tag: str) -> Release | None:
        releases = await self.get_all(owner, repo)

        release = next((r for r in releases if r.tag_name == tag), None)
        if release is None:
            logger.warning("No release found for tag '%s' in repository '%s'.", tag, repo)
            return None

        logger.info("Successfully retrieved release '%s' with tag '%s'.", release.name, tag)
        return release

    async def get_all(self, owner: str, repo: str) -> list[Release]:
        """Get every release of a repository, drafts included, in API order."""
        try:
            releases: list[Release] = []
            page = 1
            while True:
                batch = await self.client.list_releases(owner, repo, page=page, per_page=PER_PAGE)
                releases.extend(batch)
                if len(batch) < PER_PAGE:
                    break
                page += 1

            logger.info(
                "Successfully retrieved %d releases for repository '%s'.", len(releases), repo
            )
            return releases
        except Exception as e:
            logger.exception(
                "An error occurred while retrieving releases for repository '%s': %s", repo, e
            )
            raise

    async def get_latest(self, owner: str, repo: str) -> Release | None:
        """Get the most recently created non-draft release."""
        return select_latest(await self.get_all(owner, repo))

    async def download_all_latest_release_assets(
        self, owner: str, repo: str, directory: Path | str
    ) -> list[Path]:
        """Download every asset of the latest release into directory.

        Assets that fail to download are logged and skipped.
        """
        directory = Path(directory)
        release = await self.get_latest(owner, repo)
        if release is None:
            logger.warning("No published releases found for %s/%s.", owner, repo)
            return []
        if not release.assets:
            logger.warning("Release '%s' has no assets.", release.tag_name)
            return []

        saved: list[Path] = []
        for asset in release.assets:
            try:
                path = await download_asset(self.client.client, asset, directory)
            except (GitHubError, httpx.HTTPError, OSError) as e:
                logger.error("Failed to download asset '%s': %s", asset.name, e)
                continue
            logger.info("Downloaded asset '%s' to '%s'.", asset.name, path)
            saved.append(path)

        return saved

    async def download_release_asset_by_name_pattern(
        self, owner: str, repo: str, directory: Path | str, substrings: Iterable[str]
    ) -> Path | None:
        """Download the first latest-release asset whose name contains all substrings."""
        substrings = list(substrings)
        release = await self.get_latest(owner, repo)
        if release is None or not release.assets:
            logger.warning("No release assets available for %s/%s.", owner, repo)
            return None

        asset = match_asset(release.assets, substrings)
        if asset is None:
            logger.warning(
                "No asset in release '%s' matches %s.", release.tag_name, ", ".join(substrings)
            )
            return None

        path = await download_asset(self.client.client, asset, Path(directory))
        logger.info("Downloaded asset '%s' to '%s'.", asset.name, path)
        return path
