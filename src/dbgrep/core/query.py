"""Search statement synthesis.

Two separate rendering paths live here:

* :func:`build_search` produces the parameter-bound statement that is
  executed, plus its display form.
* :func:`render_display_query` pastes the bound values into the statement
  text for people to read. Its output is not escaped and must never be
  executed; the executor only ever receives ``SearchStatement.sql``.

The executed text goes through ``sqlalchemy.text()``, which reads every
``:name`` as a bind parameter, so colons inside identifiers are written as
``\\:`` there and turned back into plain colons for display.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Sequence

from dbgrep.core.types import SearchStatement

DEFAULT_QUOTE = "`"
PARAM_PREFIX = "term_"

_PLACEHOLDER_RE = re.compile(rf"\\:|:({PARAM_PREFIX}\d+)\b")


def escape_colons(sql: str) -> str:
    """Keep literal colons from being read as bind parameters by ``text()``."""
    return sql.replace(":", "\\:")


def quote_identifier(name: str, quote: str = DEFAULT_QUOTE) -> str:
    """Wrap a column name in quote characters, doubling embedded quotes."""
    return f"{quote}{name.replace(quote, quote * 2)}{quote}"


def column_expression(name: str, quote: str = DEFAULT_QUOTE, cast_to_text: bool = False) -> str:
    """The left-hand side of one LIKE predicate.

    Dialects without an implicit text conversion for LIKE (PostgreSQL) get
    an explicit ``CAST(... AS TEXT)`` so numeric and date columns match too.
    """
    expression = escape_colons(quote_identifier(name, quote))
    if cast_to_text:
        return f"CAST({expression} AS TEXT)"
    return expression


def like_pattern(term: str) -> str:
    """The value every column is compared against."""
    return f"%{term}%"


def build_search(
    schema_name: str,
    table_name: str,
    columns: Sequence[str],
    term: str,
    row_limit: int,
    quote: str = DEFAULT_QUOTE,
    cast_to_text: bool = False,
) -> SearchStatement:
    """Build the OR-of-LIKEs search statement for one table.

    Args:
        schema_name: Schema (database) the table lives in
        table_name: Table to search
        columns: Column names in ordinal order, must not be empty
        term: Search term, wrapped in ``%`` wildcards
        row_limit: Value of the LIMIT clause
        quote: Identifier quote character of the target dialect
        cast_to_text: Cast every column to TEXT before comparing

    Returns:
        SearchStatement with one bound parameter per column

    Raises:
        ValueError: If the column list is empty

    Example:
        >>> stmt = build_search("db", "users", ["id", "email"], "bob", 20)
        >>> stmt.display_query
        "SELECT t.* FROM db.users t WHERE `id` LIKE '%bob%' OR `email` LIKE '%bob%' LIMIT 20;"
    """
    if not columns:
        raise ValueError(f"Table {table_name} has no columns to search")

    value = like_pattern(term)
    parameters: Dict[str, str] = {}
    conditions = []

    for i, column in enumerate(columns):
        param = f"{PARAM_PREFIX}{i}"
        expression = column_expression(column, quote, cast_to_text)
        conditions.append(f"{expression} LIKE :{param}")
        parameters[param] = value

    sql = "SELECT t.* FROM {}.{} t WHERE {} LIMIT {:d};".format(
        escape_colons(schema_name),
        escape_colons(table_name),
        " OR ".join(conditions),
        row_limit,
    )

    return SearchStatement(
        sql=sql,
        parameters=parameters,
        display_query=render_display_query(sql, parameters),
    )


def render_display_query(sql: str, parameters: Mapping[str, object]) -> str:
    """Replace each placeholder, left to right, with its quoted value.

    Substitution is a single pass, so a value that itself looks like a
    placeholder is left alone. Escaped colons become plain colons.
    """

    def substitute(match: re.Match) -> str:
        if match.group(1) is None:
            return ":"
        return f"'{parameters[match.group(1)]}'"

    return _PLACEHOLDER_RE.sub(substitute, sql)
