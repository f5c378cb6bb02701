"""Fetch, filter and normalize event feed records for a rotating display."""

__version__ = "0.1.0"
