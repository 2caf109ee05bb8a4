"""The search command."""

from __future__ import annotations

import click

from dbgrep import __version__
from dbgrep.cli.decorators import (
    handle_errors,
    with_connection_options,
    with_display_options,
    with_filter_options,
)
from dbgrep.cli.handlers import SearchHandler
from dbgrep.cli.output import OutputFormatter
from dbgrep.utils.config import get_config, load_config
from dbgrep.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)
out = OutputFormatter()


@click.command(name="dbgrep")
@click.version_option(version=__version__)
@click.argument("term")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Max results per table (default: 20)",
)
@with_filter_options
@with_display_options
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show queries without executing",
)
@with_connection_options
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-table query timeout in seconds (default: 30)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Tables searched concurrently (default: 1)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    help="Path to dbgrep.yml",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level",
)
@handle_errors
def search_cmd(
    term,
    limit,
    include,
    exclude,
    column_limit,
    truncate_length,
    no_truncate,
    dry_run,
    url,
    schema,
    timeout,
    workers,
    config_path,
    log_level,
):
    """Search every column of every table for TERM.

    Each table gets one query matching TERM as a substring of any column.
    Matching rows go to stdout, progress and the summary to stderr.

    \b
    Examples:
        # Find an email anywhere in the database
        dbgrep bob@example.com --url mysql+pymysql://user:pw@127.0.0.1/shop

        # Only order tables, skip backups
        dbgrep 10042 --include='order*' --exclude='*_backup'

        # Show the queries without running them
        dbgrep bob --dry-run
    """
    setup_logging(level=log_level)

    config = load_config(config_path) if config_path else get_config()
    handler = SearchHandler(config)

    options = handler.build_options(
        term,
        row_limit=limit,
        include=include,
        exclude=exclude,
        column_limit=column_limit,
        truncate=False if no_truncate else None,
        truncate_length=truncate_length,
        dry_run=dry_run,
        statement_timeout=timeout,
        workers=workers,
    )
    logger.info(f"Searching for: {options.term}")

    _, report = handler.search(options, url=url, schema=schema)

    out.report(report)
    out.summary(report)
