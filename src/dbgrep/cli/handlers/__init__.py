"""CLI command handlers containing business logic."""

from dbgrep.cli.handlers.search_handler import SearchHandler

__all__ = ["SearchHandler"]
