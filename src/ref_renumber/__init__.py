"""Renumber cross-reference labels in a markdown style guide."""

__version__ = "1.0.0"
