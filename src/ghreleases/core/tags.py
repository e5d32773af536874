"""Lightweight tag management through the git refs API."""

import logging
from urllib.parse import quote

from ghreleases.core.github import GitHubClient, NotFoundError


logger = logging.getLogger(__name__)


def _tag_ref(tag: str) -> str:
    """Ref path for a tag, escaped so characters like # stay in the path."""
    return f"tags/{quote(tag, safe='/')}"


class TagHelper:
    """Check, create and delete lightweight tags in a repository."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def exists(self, owner: str, repo: str, tag: str) -> bool:
        try:
            await self.client.get_ref(owner, repo, _tag_ref(tag))
        except NotFoundError:
            return False
        return True

    async def create(self, owner: str, repo: str, tag: str, sha: str | None = None) -> str:
        """Create a tag and return the commit sha it points at.

        Without an explicit sha the tag points at the head of the
        repository's default branch.
        """
        if sha is None:
            sha = await self.default_branch_head(owner, repo)

        await self.client.create_ref(owner, repo, f"refs/tags/{tag}", sha)
        logger.debug("Created tag %s at %s in %s/%s", tag, sha, owner, repo)
        return sha

    async def delete(self, owner: str, repo: str, tag: str) -> None:
        await self.client.delete_ref(owner, repo, _tag_ref(tag))
        logger.debug("Deleted tag %s in %s/%s", tag, owner, repo)

    async def default_branch_head(self, owner: str, repo: str) -> str:
        repository = await self.client.get_repository(owner, repo)
        branch = repository["default_branch"]
        ref = await self.client.get_ref(owner, repo, f"heads/{quote(branch, safe='/')}")
        return ref["object"]["sha"]
