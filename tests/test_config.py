"""Tests for configuration loading."""

import pytest

from ghreleases.core.config import ConfigError, GhReleasesConfig, get_config, set_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GHRELEASES_CONFIG", raising=False)


def test_load_reads_nested_token_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("GH:\n  TOKEN: from-file\ntimeout: 5\n")

    config = GhReleasesConfig.load(path)

    assert config.get_strict("GH:TOKEN") == "from-file"
    assert config.token == "from-file"
    assert config.timeout == 5.0


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("GH:\n  TOKEN: from-file\n")
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")

    assert GhReleasesConfig.load(path).token == "from-env"


def test_missing_file_uses_defaults(tmp_path):
    config = GhReleasesConfig.load(tmp_path / "missing.yaml")

    assert config.token is None
    assert config.api_url == "https://api.github.com"
    assert config.upload_url == "https://uploads.github.com"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("GH:\n  TOKEN: custom\n")
    monkeypatch.setenv("GHRELEASES_CONFIG", str(path))
    set_config(None)

    try:
        assert get_config().token == "custom"
    finally:
        set_config(None)


def test_get_strict_rejects_missing_and_empty():
    config = GhReleasesConfig()
    with pytest.raises(ConfigError, match="GH:TOKEN"):
        config.get_strict("GH:TOKEN")

    config.set("GH:TOKEN", "")
    with pytest.raises(ConfigError):
        config.get_strict("GH:TOKEN")


def test_invalid_file_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError):
        GhReleasesConfig.load(path)


def test_malformed_yaml_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("GH: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid config file"):
        GhReleasesConfig.load(path)
