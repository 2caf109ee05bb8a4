"""CLI command modules."""

from . import search

__all__ = ["search"]
