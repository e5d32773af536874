"""ghreleases - manage GitHub releases and their assets."""

__version__ = "0.1.0"
