"""Business logic for the search command."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from sqlalchemy.engine import Engine

from dbgrep.connectors import connect_database, resolve_schema_name
from dbgrep.core.report import Report, render_report
from dbgrep.core.search import SearchEngine, SearchRun
from dbgrep.core.table_filter import TableFilter
from dbgrep.core.types import SearchOptions
from dbgrep.utils.config import Config
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)


class SearchHandler:
    """Handler for search operations.

    Keeps the click command thin: builds options, opens the database,
    runs the pipeline and renders the report.

    Example:
        >>> handler = SearchHandler(config)
        >>> options = handler.build_options("bob", dry_run=True)
        >>> run, report = handler.search(options, url="sqlite:///shop.db")
    """

    def __init__(self, config: Config):
        """Initialize handler.

        Args:
            config: Configuration instance
        """
        self.config = config

    def build_options(self, term: str, **overrides: Any) -> SearchOptions:
        """Build and validate SearchOptions from config and CLI overrides.

        Patterns are checked here so a bad glob fails before connecting.
        """
        options = SearchOptions.from_config(self.config, term, **overrides)
        TableFilter(options.include, options.exclude)
        return options

    def connect(self, url: Optional[str] = None) -> Engine:
        """Open the database named by --url or the config."""
        return connect_database(url or self.config.database_url())

    def search(
        self,
        options: SearchOptions,
        url: Optional[str] = None,
        schema: Optional[str] = None,
        engine: Optional[Engine] = None,
    ) -> Tuple[SearchRun, Report]:
        """Run a search and render its report.

        Args:
            options: Validated search options
            url: Database URL (falls back to config / environment)
            schema: Schema name (falls back to config, then the URL)
            engine: Pre-created engine; when given, url is ignored and the
                engine is not disposed

        Returns:
            Tuple of (SearchRun, Report)
        """
        own_engine = engine is None
        if engine is None:
            engine = self.connect(url)

        try:
            schema_name = resolve_schema_name(
                engine, schema or self.config.get("database.schema")
            )
            logger.info(f"Searching schema {schema_name} for: {options.term}")

            run = SearchEngine(engine, schema_name, options).run()
        finally:
            if own_engine:
                engine.dispose()

        if run.failures:
            logger.warning(f"{len(run.failures)} tables could not be searched")

        return run, render_report(run.results, options)
