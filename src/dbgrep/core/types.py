"""Search data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from dbgrep.errors import ConfigurationError

ELLIPSIS = "..."


@dataclass(frozen=True)
class TableInfo:
    """A table and its columns in ordinal order."""

    name: str
    columns: Tuple[str, ...]

    @property
    def is_searchable(self) -> bool:
        """Tables without columns never get a search statement."""
        return len(self.columns) > 0

    def __repr__(self) -> str:
        return f"TableInfo({self.name}, columns={len(self.columns)})"


@dataclass(frozen=True)
class SearchOptions:
    """Options for one search run.

    Attributes:
        term: Substring to look for
        row_limit: Max rows fetched per table
        include: Glob patterns a table must match (empty = all tables)
        exclude: Glob patterns that drop a table (wins over include)
        column_limit: Columns shown per report line
        truncate: Whether long values are shortened in the report
        truncate_length: Characters kept before the ellipsis
        dry_run: Only show the queries, read no rows
        statement_timeout: Per-query server-side timeout in seconds (None disables)
        workers: Number of tables searched concurrently
    """

    term: str
    row_limit: int = 20
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    column_limit: int = 5
    truncate: bool = True
    truncate_length: int = 50
    dry_run: bool = False
    statement_timeout: Optional[float] = 30
    workers: int = 1

    def __post_init__(self):
        if not self.term:
            raise ConfigurationError("search term must not be empty")

        for name in ("row_limit", "column_limit", "truncate_length", "workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if self.statement_timeout is not None and self.statement_timeout <= 0:
            raise ConfigurationError(
                f"statement_timeout must be positive, got {self.statement_timeout}"
            )

        # Lists are accepted for convenience but stored as tuples
        object.__setattr__(self, "include", tuple(self.include))
        object.__setattr__(self, "exclude", tuple(self.exclude))

    @classmethod
    def from_config(cls, config, term: str, **overrides: Any) -> SearchOptions:
        """Build options from a Config, with explicit overrides taking precedence.

        Overrides whose value is None are ignored, so unset CLI options fall
        through to the config file.

        Args:
            config: Config instance
            term: Search term
            **overrides: Field values (row_limit, include, dry_run, ...)

        Returns:
            SearchOptions instance
        """
        values: Dict[str, Any] = {
            "row_limit": config.get("search.limit", 20),
            "column_limit": config.get("search.column_limit", 5),
            "truncate": config.get("search.truncate", True),
            "truncate_length": config.get("search.truncate_length", 50),
            "statement_timeout": config.get("search.statement_timeout", 30),
            "workers": config.get("search.workers", 1),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(term=term, **values)


@dataclass(frozen=True)
class NullValue:
    """A database NULL."""

    def render(self) -> str:
        return "NULL"


@dataclass(frozen=True)
class TextValue:
    """A textual (or stringified scalar) cell."""

    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class BinaryValue:
    """A binary cell, shown as its UTF-8 text."""

    data: bytes

    def render(self) -> str:
        return self.data.decode("utf-8", errors="replace")


Cell = Union[NullValue, TextValue, BinaryValue]

NULL = NullValue()


def to_cell(value: Any) -> Cell:
    """Convert a driver value into a cell.

    Args:
        value: Whatever the DBAPI driver returned for a column

    Returns:
        NullValue, BinaryValue or TextValue
    """
    if value is None:
        return NULL
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BinaryValue(bytes(value))
    if isinstance(value, str):
        return TextValue(value)
    return TextValue(str(value))


@dataclass(frozen=True)
class SearchStatement:
    """Output of the query synthesizer.

    ``sql`` and ``parameters`` are what gets executed. ``display_query`` is
    for people only: values are pasted in unescaped.
    """

    sql: str
    parameters: Dict[str, str]
    display_query: str

    @property
    def values(self) -> List[str]:
        """Bound values in placeholder order."""
        return list(self.parameters.values())


@dataclass
class SearchResult:
    """Rows matched in a single table."""

    table_name: str
    display_query: str
    columns: List[str] = field(default_factory=list)
    rows: List[List[Cell]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def has_rows(self) -> bool:
        return bool(self.rows)

    def __repr__(self) -> str:
        return f"SearchResult(table={self.table_name}, rows={self.row_count})"
