"""Local tldr page mirror, lookup engine and fuzzy command suggestions."""

__version__ = "0.1.0"
