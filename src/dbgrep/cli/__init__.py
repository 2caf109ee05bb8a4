"""Command-line interface for dbgrep."""
