"""Shared fixtures: an in-memory GitHub served through httpx.MockTransport."""

import json
import re
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from ghreleases.core.config import GhReleasesConfig, set_config
from ghreleases.core.github import GitHubClient
from ghreleases.core.releases import ReleaseManager

OWNER = "octo"
REPO = "tool"
TOKEN = "test-token"
HEAD_SHA = "a" * 40


class FakeGitHub:
    """Minimal stand-in for the releases, refs and upload endpoints."""

    def __init__(self):
        self.tags: dict[str, str] = {}
        self.releases: list[dict] = []
        self.downloads: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.upload_status = 201
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_release(
        self,
        tag: str,
        draft: bool = False,
        created_at: datetime | None = None,
        assets: dict[str, bytes] | None = None,
    ) -> dict:
        """Seed a release directly, without going through the API."""
        self._clock += timedelta(hours=1)
        release = {
            "id": self._id(),
            "tag_name": tag,
            "name": f"Release {tag}",
            "body": "",
            "draft": draft,
            "prerelease": False,
            "created_at": (created_at or self._clock).isoformat().replace("+00:00", "Z"),
            "published_at": None,
            "html_url": f"https://github.com/{OWNER}/{REPO}/releases/tag/{tag}",
            "assets": [],
        }
        for name, content in (assets or {}).items():
            self._add_asset(release, name, content)
        self.tags.setdefault(tag, HEAD_SHA)
        self.releases.insert(0, release)
        return release

    def _add_asset(self, release: dict, name: str, content: bytes) -> dict:
        url = f"https://github.com/{OWNER}/{REPO}/releases/download/{release['tag_name']}/{name}"
        asset = {
            "id": self._id(),
            "name": name,
            "browser_download_url": url,
            "size": len(content),
            "content_type": "application/octet-stream",
        }
        release["assets"].append(asset)
        self.downloads[url] = content
        return asset

    def paths(self, method: str | None = None) -> list[str]:
        return [
            r.url.path for r in self.requests if method is None or r.method == method
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path

        if host == "uploads.github.com":
            return self._upload(request)
        if host == "github.com":
            content = self.downloads.get(str(request.url))
            if content is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, content=content)

        prefix = f"/repos/{OWNER}/{REPO}"
        if not path.startswith(prefix):
            return httpx.Response(404, json={"message": "Not Found"})
        path = path[len(prefix):]

        if path == "" and request.method == "GET":
            return httpx.Response(200, json={"full_name": f"{OWNER}/{REPO}", "default_branch": "main"})

        if path == "/git/ref/heads/main":
            return httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": HEAD_SHA}})

        match = re.fullmatch(r"/git/refs?/tags/(.+)", path)
        if match:
            tag = match.group(1)
            if tag not in self.tags:
                return httpx.Response(404, json={"message": "Not Found"})
            if request.method == "DELETE":
                del self.tags[tag]
                return httpx.Response(204)
            return httpx.Response(200, json={"ref": f"refs/tags/{tag}", "object": {"sha": self.tags[tag]}})

        if path == "/git/refs" and request.method == "POST":
            payload = json.loads(request.content)
            tag = payload["ref"].removeprefix("refs/tags/")
            if tag in self.tags:
                return httpx.Response(422, json={"message": "Reference already exists"})
            self.tags[tag] = payload["sha"]
            return httpx.Response(201, json={"ref": payload["ref"], "object": {"sha": payload["sha"]}})

        if path == "/releases" and request.method == "GET":
            page = int(request.url.params.get("page", 1))
            per_page = int(request.url.params.get("per_page", 30))
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.releases[start:start + per_page])

        if path == "/releases" and request.method == "POST":
            payload = json.loads(request.content)
            release = self.add_release(payload["tag_name"], draft=payload["draft"])
            release.update(
                name=payload["name"], body=payload["body"], prerelease=payload["prerelease"]
            )
            return httpx.Response(201, json=release)

        match = re.fullmatch(r"/releases/(\d+)", path)
        if match and request.method == "DELETE":
            release_id = int(match.group(1))
            before = len(self.releases)
            self.releases = [r for r in self.releases if r["id"] != release_id]
            return httpx.Response(204 if len(self.releases) < before else 404)

        return httpx.Response(404, json={"message": "Not Found"})

    def _upload(self, request: httpx.Request) -> httpx.Response:
        if self.upload_status >= 400:
            return httpx.Response(
                self.upload_status, json={"message": "Validation Failed"}
            )
        match = re.fullmatch(rf"/repos/{OWNER}/{REPO}/releases/(\d+)/assets", request.url.path)
        release_id = int(match.group(1))
        release = next(r for r in self.releases if r["id"] == release_id)
        asset = self._add_asset(release, request.url.params["name"], request.content)
        return httpx.Response(201, json=asset)


@pytest.fixture
def config():
    config = GhReleasesConfig()
    config.set("GH:TOKEN", TOKEN)
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def github():
    return FakeGitHub()


@pytest_asyncio.fixture
async def client(github, config):
    async with GitHubClient.from_config(
        config, transport=httpx.MockTransport(github.handler)
    ) as client:
        yield client


@pytest.fixture
def manager(client, config):
    return ReleaseManager(client, config=config)
