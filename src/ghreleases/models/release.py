"""GitHub release data models."""

from dataclasses import dataclass, field
from datetime import datetime


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO 8601 timestamp ("2024-01-02T03:04:05Z")."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class Asset:
    """Represents a GitHub release asset."""

    name: str
    download_url: str
    size: int
    content_type: str
    id: int = 0

    @classmethod
    def from_api_response(cls, data: dict) -> "Asset":
        """Create Asset from GitHub API response."""
        return cls(
            id=data.get("id", 0),
            name=data["name"],
            download_url=data.get("browser_download_url", ""),
            size=data.get("size", 0),
            content_type=data.get("content_type", "application/octet-stream"),
        )


@dataclass
class Release:
    """Represents a GitHub release."""

    id: int
    tag_name: str
    name: str
    body: str
    draft: bool
    prerelease: bool
    created_at: datetime | None
    assets: list[Asset] = field(default_factory=list)
    published_at: datetime | None = None
    html_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from GitHub API response."""
        assets = [Asset.from_api_response(a) for a in data.get("assets", [])]
        return cls(
            id=data["id"],
            tag_name=data["tag_name"],
            name=data.get("name") or data["tag_name"],
            body=data.get("body") or "",
            draft=data.get("draft", False),
            prerelease=data.get("prerelease", False),
            created_at=parse_timestamp(data.get("created_at")),
            assets=assets,
            published_at=parse_timestamp(data.get("published_at")),
            html_url=data.get("html_url", ""),
        )

    @property
    def asset_names(self) -> list[str]:
        return [asset.name for asset in self.assets]
