"""Common CLI option decorators."""

from __future__ import annotations

from typing import Optional, Tuple

import click


def split_globs(ctx, param, value: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Click callback: split a comma-separated glob list.

    Entries are stripped and empty entries dropped; None means the option
    was not given.
    """
    if value is None:
        return None
    return tuple(part.strip() for part in value.split(",") if part.strip())


def with_connection_options(f):
    """Add --url and --schema options to command.

    Example:
        @click.command()
        @with_connection_options
        def my_command(url, schema):
            pass
    """
    f = click.option(
        "--schema",
        type=str,
        help="Schema (database) to search (default: from the URL)",
    )(f)
    f = click.option(
        "--url",
        type=str,
        envvar="DBGREP_DATABASE_URL",
        help="SQLAlchemy database URL (env: DBGREP_DATABASE_URL)",
    )(f)
    return f


def with_filter_options(f):
    """Add --include and --exclude glob list options to command."""
    f = click.option(
        "--exclude",
        type=str,
        callback=split_globs,
        help="Comma-separated globs of tables to skip",
    )(f)
    f = click.option(
        "--include",
        type=str,
        callback=split_globs,
        help="Comma-separated globs; only matching tables are searched",
    )(f)
    return f


def with_display_options(f):
    """Add --column-limit, --truncate-length and --no-truncate to command."""
    f = click.option(
        "--no-truncate",
        "no_truncate",
        is_flag=True,
        default=False,
        help="Disable column truncation",
    )(f)
    f = click.option(
        "--truncate-length",
        type=click.IntRange(min=1),
        default=None,
        help="Max column display length (default: 50)",
    )(f)
    f = click.option(
        "--column-limit",
        type=click.IntRange(min=1),
        default=None,
        help="Amount of columns to display (default: 5)",
    )(f)
    return f
