"""Configuration for ghreleases."""

from pathlib import Path
from dataclasses import dataclass, field
import os

import yaml


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_UPLOAD_URL = "https://uploads.github.com"
TOKEN_KEY = "GH:TOKEN"

# Environment variables checked for the token, first match wins
TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")


class ConfigError(Exception):
    """Required configuration value is missing."""

    pass


def default_config_path() -> Path:
    """Location of the YAML config file."""
    override = os.environ.get("GHRELEASES_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".config" / "ghreleases" / "config.yaml"


@dataclass
class GhReleasesConfig:
    """Configuration for the release manager.

    Values are addressed with ``:`` separated keys (``GH:TOKEN``) that map
    onto nested sections of the YAML file.
    """

    values: dict = field(default_factory=dict)
    api_url: str = DEFAULT_API_URL
    upload_url: str = DEFAULT_UPLOAD_URL
    timeout: float = 30.0

    @classmethod
    def load(cls, path: Path | None = None) -> "GhReleasesConfig":
        """Load config from the YAML file and the environment."""
        path = path or default_config_path()
        values: dict = {}
        if path.exists():
            with open(path) as f:
                try:
                    values = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid config file {path}: {e}") from e
            if not isinstance(values, dict):
                raise ConfigError(f"Invalid config file {path}: expected a mapping")

        config = cls(
            values=values,
            api_url=values.get("api_url", DEFAULT_API_URL),
            upload_url=values.get("upload_url", DEFAULT_UPLOAD_URL),
            timeout=float(values.get("timeout", 30.0)),
        )

        for var in TOKEN_ENV_VARS:
            token = os.environ.get(var)
            if token:
                config.set(TOKEN_KEY, token)
                break

        return config

    def get(self, key: str, default=None):
        """Look up a ``:`` separated key, returning default when absent."""
        node = self.values
        for part in key.split(":"):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_strict(self, key: str) -> str:
        """Look up a key that must be present and non-empty."""
        value = self.get(key)
        if value is None or value == "":
            raise ConfigError(f"Missing required configuration value '{key}'")
        return str(value)

    def set(self, key: str, value) -> None:
        node = self.values
        *parents, last = key.split(":")
        for part in parents:
            node = node.setdefault(part, {})
        node[last] = value

    @property
    def token(self) -> str | None:
        return self.get(TOKEN_KEY)


# Global config instance
_config: GhReleasesConfig | None = None


def get_config() -> GhReleasesConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = GhReleasesConfig.load()
    return _config


def set_config(config: GhReleasesConfig | None) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
