"""Label-driven semantic-version release tagging."""

__version__ = "0.1.0"
