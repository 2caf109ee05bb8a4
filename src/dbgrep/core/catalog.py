"""Schema catalog reader."""

from __future__ import annotations

from itertools import groupby
from operator import itemgetter
from typing import Iterable, List, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dbgrep.core.types import TableInfo
from dbgrep.errors import CatalogError
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)

INFORMATION_SCHEMA_QUERY = """
SELECT table_name, column_name
FROM information_schema.columns
WHERE table_schema = :schema
ORDER BY table_name, ordinal_position"""

# sqlite has no information_schema; pragma_table_info takes the schema as
# its second argument, sqlite_master has to be qualified in the statement.
SQLITE_QUERY = """
SELECT m.name, p.name
FROM {schema}.sqlite_master AS m
JOIN pragma_table_info(m.name, :schema) AS p
WHERE m.type IN ('table', 'view') AND m.name NOT LIKE 'sqlite_%'
ORDER BY m.name, p.cid"""


def _catalog_query(dialect_name: str, schema_name: str) -> str:
    if dialect_name == "sqlite":
        quoted = '"{}"'.format(schema_name.replace('"', '""'))
        return SQLITE_QUERY.format(schema=quoted)
    return INFORMATION_SCHEMA_QUERY


def group_columns(pairs: Iterable[Tuple[str, str]]) -> List[TableInfo]:
    """Group table-clustered (table, column) pairs into TableInfo objects.

    The input is already ordered by table, so this is a single pass; a table
    that shows up in two separate runs would yield two entries.
    """
    return [
        TableInfo(name=table, columns=tuple(column for _, column in rows))
        for table, rows in groupby(pairs, key=itemgetter(0))
    ]


def list_tables(engine: Engine, schema_name: str) -> List[TableInfo]:
    """List tables and their columns in one introspection query.

    Args:
        engine: SQLAlchemy engine
        schema_name: Schema (database) to introspect

    Returns:
        TableInfo list ordered by table name, columns in ordinal order

    Raises:
        CatalogError: If the introspection query fails
    """
    query = _catalog_query(engine.dialect.name, schema_name)
    logger.debug(f"Reading catalog of schema {schema_name}")

    try:
        with engine.connect() as conn:
            result = conn.execute(text(query), {"schema": schema_name})
            pairs = [(str(row[0]), str(row[1])) for row in result]
    except SQLAlchemyError as e:
        raise CatalogError(f"failed to read tables of schema {schema_name}: {e}") from e

    tables = group_columns(pairs)
    logger.info(f"Found {len(tables)} tables")
    return tables
