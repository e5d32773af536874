"""Data models for ghreleases."""

from ghreleases.models.release import Release, Asset

__all__ = ["Release", "Asset"]
