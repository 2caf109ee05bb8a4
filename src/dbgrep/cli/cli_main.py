"""CLI entry point for dbgrep."""

from __future__ import annotations

from dbgrep.cli.commands.search import search_cmd

cli = search_cmd


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
