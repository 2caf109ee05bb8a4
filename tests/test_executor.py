"""Tests for the search executor."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from conftest import create_sqlite
from dbgrep.core.executor import SearchExecutor
from dbgrep.core.query import build_search
from dbgrep.core.types import NULL, BinaryValue, TextValue
from dbgrep.errors import QueryError


def test_execute_returns_matching_rows(shop_engine):
    stmt = build_search("main", "orders", ["id", "customer", "note"], "bob", 20)
    result = SearchExecutor(shop_engine, row_limit=20).execute("orders", stmt)

    assert result.table_name == "orders"
    assert result.display_query == stmt.display_query
    assert result.columns == ["id", "customer", "note"]
    assert result.rows == [[TextValue("1"), TextValue("alice"), TextValue("gift for bob")]]


def test_execute_no_match(shop_engine):
    stmt = build_search("main", "logs", ["id", "msg"], "bob", 20)
    result = SearchExecutor(shop_engine, row_limit=20).execute("logs", stmt)

    assert result.rows == []
    assert not result.has_rows
    assert result.columns == ["id", "msg"]


def test_row_limit_is_enforced(tmp_path):
    """Never more rows than the limit, even if the statement allowed more."""
    values = ", ".join(f"({i}, 'bob {i}')" for i in range(30))
    url = create_sqlite(
        tmp_path / "many.db",
        ["CREATE TABLE notes (id INTEGER, body TEXT)", f"INSERT INTO notes VALUES {values}"],
    )
    engine = create_engine(url)
    # LIMIT 100 in the statement, executor capped at 5
    stmt = build_search("main", "notes", ["id", "body"], "bob", 100)

    result = SearchExecutor(engine, row_limit=5).execute("notes", stmt)

    assert result.row_count == 5
    engine.dispose()


def test_null_and_binary_cells(tmp_path):
    url = create_sqlite(
        tmp_path / "blobs.db",
        [
            "CREATE TABLE files (name TEXT, payload BLOB, owner TEXT)",
            "INSERT INTO files VALUES ('bob.txt', X'68690a', NULL)",
        ],
    )
    engine = create_engine(url)
    stmt = build_search("main", "files", ["name", "payload", "owner"], "bob", 20)

    result = SearchExecutor(engine, row_limit=20).execute("files", stmt)

    assert result.rows == [[TextValue("bob.txt"), BinaryValue(b"hi\n"), NULL]]
    engine.dispose()


def test_dry_run_does_no_io():
    """Dry run returns the display query without touching the engine."""
    engine = MagicMock()
    stmt = build_search("db", "users", ["id", "email"], "bob", 20)

    result = SearchExecutor(engine, row_limit=20).execute("users", stmt, dry_run=True)

    engine.connect.assert_not_called()
    assert result.rows == []
    assert result.display_query == stmt.display_query
    assert result.display_query


def test_query_failure_raises_query_error(shop_engine):
    stmt = build_search("main", "ghost", ["id"], "bob", 20)

    with pytest.raises(QueryError) as exc_info:
        SearchExecutor(shop_engine, row_limit=20).execute("ghost", stmt)

    assert exc_info.value.table_name == "ghost"
    assert "ghost" in str(exc_info.value)


def _mock_engine(dialect_name):
    engine = MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    conn.dialect.name = dialect_name
    conn.execute.return_value.keys.return_value = ["id"]
    conn.execute.return_value.fetchmany.return_value = [("7",)]
    return engine, conn


@pytest.mark.parametrize(
    "dialect_name, expected",
    [
        ("postgresql", "SET LOCAL statement_timeout = 2500"),
        ("mysql", "SET SESSION max_execution_time = 2500"),
        ("mariadb", "SET SESSION max_execution_time = 2500"),
    ],
)
def test_statement_timeout(dialect_name, expected):
    engine, conn = _mock_engine(dialect_name)
    stmt = build_search("db", "users", ["id"], "7", 20)

    result = SearchExecutor(engine, row_limit=20, statement_timeout=2.5).execute("users", stmt)

    first_statement = conn.execute.call_args_list[0].args[0]
    assert str(first_statement) == expected
    assert conn.execute.call_count == 2
    assert result.rows == [[TextValue("7")]]


def test_no_timeout_statement_for_other_dialects():
    engine, conn = _mock_engine("sqlite")
    stmt = build_search("main", "users", ["id"], "7", 20)

    SearchExecutor(engine, row_limit=20, statement_timeout=2.5).execute("users", stmt)

    assert conn.execute.call_count == 1
    assert str(conn.execute.call_args.args[0]) == stmt.sql
