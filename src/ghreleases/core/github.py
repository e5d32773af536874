"""GitHub API client for releases, repositories and git refs."""

import logging
import re

import httpx

from ghreleases.core.config import DEFAULT_API_URL, GhReleasesConfig, get_config
from ghreleases.models.release import Release


logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"


class GitHubError(Exception):
    """Error from GitHub API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitHubError):
    """The requested GitHub resource does not exist."""

    pass


def parse_repo_spec(spec: str) -> tuple[str, str]:
    """Parse a repo spec into (owner, repo).

    Accepts:
    - owner/repo
    - https://github.com/owner/repo
    - github.com/owner/repo
    """
    # Handle full URLs
    url_pattern = r"(?:https?://)?github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"
    match = re.match(url_pattern, spec)
    if match:
        return match.group(1), match.group(2)

    # Handle owner/repo format
    if "/" in spec:
        parts = spec.split("/")
        if len(parts) == 2 and all(parts):
            return parts[0], parts[1]

    raise ValueError(f"Invalid repo spec: {spec}. Use 'owner/repo' or GitHub URL.")


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return response.text


def raise_for_status(response: httpx.Response, what: str) -> None:
    """Map a non-success GitHub response onto GitHubError subclasses."""
    if response.is_success:
        return

    status = response.status_code
    if status == 404:
        raise NotFoundError(f"{what} not found", status_code=status)
    if status == 401:
        raise GitHubError("GitHub authentication failed, check GH:TOKEN", status_code=status)
    if status == 403 and response.headers.get("x-ratelimit-remaining") == "0":
        raise GitHubError("GitHub API rate limit exceeded", status_code=status)
    raise GitHubError(
        f"{what} failed: HTTP {status} - {_error_message(response)}",
        status_code=status,
    )


class GitHubClient:
    """Async client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: GhReleasesConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "GitHubClient":
        """Build a client from the configured token and endpoints."""
        config = config or get_config()
        return cls(
            token=config.token,
            base_url=config.api_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, url: str, what: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s", method, url)
        response = await self.client.request(method, url, **kwargs)
        raise_for_status(response, what)
        return response

    # Releases

    async def list_releases(
        self, owner: str, repo: str, page: int = 1, per_page: int = 100
    ) -> list[Release]:
        """Get one page of releases, drafts included."""
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/releases",
            f"Repository {owner}/{repo}",
            params={"page": page, "per_page": per_page},
        )
        return [Release.from_api_response(data) for data in response.json()]

    async def create_release(
        self,
        owner: str,
        repo: str,
        tag_name: str,
        name: str,
        body: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> Release:
        """Create a release for an existing or implicit tag."""
        payload = {
            "tag_name": tag_name,
            "name": name,
            "body": body,
            "draft": draft,
            "prerelease": prerelease,
        }
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/releases",
            f"Creating release {tag_name} in {owner}/{repo}",
            json=payload,
        )
        return Release.from_api_response(response.json())

    async def delete_release(self, owner: str, repo: str, release_id: int) -> None:
        await self._request(
            "DELETE",
            f"/repos/{owner}/{repo}/releases/{release_id}",
            f"Release {release_id} in {owner}/{repo}",
        )

    # Repositories and git refs

    async def get_repository(self, owner: str, repo: str) -> dict:
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}", f"Repository {owner}/{repo}"
        )
        return response.json()

    async def get_ref(self, owner: str, repo: str, ref: str) -> dict:
        """Get a single git ref, e.g. ``tags/v1.0.0`` or ``heads/main``."""
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}/git/ref/{ref}", f"Ref {ref} in {owner}/{repo}"
        )
        return response.json()

    async def create_ref(self, owner: str, repo: str, ref: str, sha: str) -> dict:
        """Create a fully qualified ref (``refs/tags/v1.0.0``) pointing at sha."""
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            f"Creating ref {ref} in {owner}/{repo}",
            json={"ref": ref, "sha": sha},
        )
        return response.json()

    async def delete_ref(self, owner: str, repo: str, ref: str) -> None:
        await self._request(
            "DELETE", f"/repos/{owner}/{repo}/git/refs/{ref}", f"Ref {ref} in {owner}/{repo}"
        )
