"""Search pipeline: catalog -> filter -> synthesize -> execute."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy.engine import Engine

from dbgrep.core.catalog import list_tables
from dbgrep.core.executor import SearchExecutor
from dbgrep.core.query import DEFAULT_QUOTE, build_search
from dbgrep.core.table_filter import TableFilter
from dbgrep.core.types import SearchOptions, SearchResult, TableInfo
from dbgrep.errors import QueryError
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)

# Dialects whose identifier quote is the double quote
_DOUBLE_QUOTE_DIALECTS = ("postgresql",)

# Dialects where LIKE is only defined on text operands
_TEXT_CAST_DIALECTS = ("postgresql",)


def identifier_quote(engine: Engine) -> str:
    """Quote character used for column names on this engine."""
    if engine.dialect.name in _DOUBLE_QUOTE_DIALECTS:
        return '"'
    return DEFAULT_QUOTE


def needs_text_cast(engine: Engine) -> bool:
    return engine.dialect.name in _TEXT_CAST_DIALECTS


@dataclass
class SearchRun:
    """Outcome of one search run."""

    schema_name: str
    tables_found: int = 0
    tables_searched: int = 0
    results: List[SearchResult] = field(default_factory=list)
    failures: List[QueryError] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def total_rows(self) -> int:
        return sum(result.row_count for result in self.results)

    @property
    def hit_tables(self) -> int:
        return sum(1 for result in self.results if result.has_rows)


class SearchEngine:
    """Runs a search over every eligible table of a schema.

    Only a failing table query is recoverable; a bad pattern or a catalog
    failure propagates to the caller.

    Example:
        >>> engine = connect_database("sqlite:///shop.db")
        >>> run = SearchEngine(engine, "main", SearchOptions(term="bob")).run()
        >>> run.total_rows
        1
    """

    def __init__(self, engine: Engine, schema_name: str, options: SearchOptions):
        self.engine = engine
        self.schema_name = schema_name
        self.options = options
        self.table_filter = TableFilter(options.include, options.exclude)
        self.executor = SearchExecutor(
            engine,
            row_limit=options.row_limit,
            statement_timeout=options.statement_timeout,
        )
        self.quote = identifier_quote(engine)
        self.cast_to_text = needs_text_cast(engine)

    def eligible_tables(self, tables: List[TableInfo]) -> List[TableInfo]:
        """Drop column-less tables and tables rejected by the filter."""
        return [
            table
            for table in tables
            if table.is_searchable and self.table_filter.accepts(table.name)
        ]

    def search_table(self, table: TableInfo) -> Tuple[Optional[SearchResult], Optional[QueryError]]:
        """Search one table, turning a query failure into a returned error."""
        statement = build_search(
            self.schema_name,
            table.name,
            table.columns,
            self.options.term,
            self.options.row_limit,
            quote=self.quote,
            cast_to_text=self.cast_to_text,
        )
        try:
            return self.executor.execute(table.name, statement, self.options.dry_run), None
        except QueryError as e:
            logger.warning(f"Error searching table {table.name}: {e.__cause__ or e}")
            return None, e

    def run(self) -> SearchRun:
        """Execute the whole pipeline.

        Returns:
            SearchRun with results in catalog order

        Raises:
            CatalogError: If the table list cannot be read
        """
        started = time.perf_counter()
        run = SearchRun(schema_name=self.schema_name)

        tables = list_tables(self.engine, self.schema_name)
        run.tables_found = len(tables)

        eligible = self.eligible_tables(tables)
        run.tables_searched = len(eligible)
        if len(eligible) != len(tables):
            logger.info(f"Searching {len(eligible)} of {len(tables)} tables")

        if self.options.workers > 1 and not self.options.dry_run:
            # map() yields in submission order, so catalog order is kept
            with ThreadPoolExecutor(max_workers=self.options.workers) as pool:
                outcomes = list(pool.map(self.search_table, eligible))
        else:
            outcomes = [self.search_table(table) for table in eligible]

        for result, error in outcomes:
            if error is not None:
                run.failures.append(error)
            elif self.options.dry_run or result.has_rows:
                run.results.append(result)

        run.elapsed = time.perf_counter() - started
        logger.debug(f"Search of {self.schema_name} took {run.elapsed:.3f}s")
        return run


def search(engine: Engine, schema_name: str, options: SearchOptions) -> SearchRun:
    """Convenience wrapper around SearchEngine."""
    return SearchEngine(engine, schema_name, options).run()
