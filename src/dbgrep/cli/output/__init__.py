"""CLI output helpers."""

from dbgrep.cli.output.formatters import OutputFormatter

__all__ = ["OutputFormatter"]
