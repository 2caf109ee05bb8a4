"""Plain-text report rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from dbgrep.core.types import ELLIPSIS, Cell, SearchOptions, SearchResult


@dataclass
class Report:
    """Rendered report plus its summary counts."""

    text: str
    total_rows: int
    hit_tables: int

    @property
    def summary(self) -> str:
        return f"{self.total_rows} matches in {self.hit_tables} tables"


def truncate_value(value: str, max_length: int) -> str:
    """Cut ``value`` to ``max_length`` characters and append an ellipsis."""
    if len(value) <= max_length:
        return value
    return value[:max_length] + ELLIPSIS


def format_value(cell: Cell, options: SearchOptions) -> str:
    value = cell.render()
    if options.truncate:
        value = truncate_value(value, options.truncate_length)
    return value


def format_row(row: Sequence[Cell], options: SearchOptions) -> str:
    """Render one row as comma-joined quoted values.

    Only the first ``column_limit`` columns are shown.
    """
    return ",".join(f'"{format_value(cell, options)}"' for cell in row[: options.column_limit])


def format_header(result: SearchResult) -> List[str]:
    return [f"Table: {result.table_name} - Query:", result.display_query]


def render_report(results: Sequence[SearchResult], options: SearchOptions) -> Report:
    """Render the report for a run.

    Tables without rows are skipped unless this is a dry run, where every
    eligible table is listed with its query.

    Args:
        results: Search results in catalog order
        options: Options of the run

    Returns:
        Report with the text and the summary counts
    """
    lines: List[str] = []
    total_rows = 0
    hit_tables = 0

    for result in results:
        if not (options.dry_run or result.has_rows):
            continue

        lines.extend(format_header(result))
        for row in result.rows:
            lines.append(format_row(row, options))
        lines.append("")

        if result.has_rows:
            hit_tables += 1
            total_rows += result.row_count

    text = "\n".join(lines) + "\n" if lines else ""
    return Report(text=text, total_rows=total_rows, hit_tables=hit_tables)
