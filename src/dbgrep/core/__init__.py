"""Core search engine for dbgrep."""

from dbgrep.core.catalog import group_columns, list_tables
from dbgrep.core.executor import SearchExecutor
from dbgrep.core.query import build_search, render_display_query
from dbgrep.core.report import Report, format_row, render_report, truncate_value
from dbgrep.core.search import SearchEngine, SearchRun, search
from dbgrep.core.table_filter import TableFilter, is_excluded, is_included
from dbgrep.core.types import (
    BinaryValue,
    NullValue,
    SearchOptions,
    SearchResult,
    SearchStatement,
    TableInfo,
    TextValue,
    to_cell,
)

__all__ = [
    # Types
    "BinaryValue",
    "NullValue",
    "SearchOptions",
    "SearchResult",
    "SearchStatement",
    "TableInfo",
    "TextValue",
    "to_cell",
    # Pipeline stages
    "list_tables",
    "group_columns",
    "TableFilter",
    "is_included",
    "is_excluded",
    "build_search",
    "render_display_query",
    "SearchExecutor",
    "Report",
    "format_row",
    "render_report",
    "truncate_value",
    # Orchestration
    "SearchEngine",
    "SearchRun",
    "search",
]
