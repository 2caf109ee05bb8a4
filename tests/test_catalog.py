"""Tests for the schema catalog reader."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

from conftest import create_sqlite
from dbgrep.core.catalog import group_columns, list_tables
from dbgrep.core.types import TableInfo
from dbgrep.errors import CatalogError


def test_list_tables_sqlite(shop_engine):
    """Tables come back sorted by name with columns in ordinal order."""
    tables = list_tables(shop_engine, "main")

    assert [t.name for t in tables] == ["logs", "orders", "users", "users_backup"]
    assert tables[1] == TableInfo("orders", ("id", "customer", "note"))
    assert tables[2].columns == ("id", "email")


def test_list_tables_includes_views(tmp_path):
    """Views are listed like tables, as information_schema.columns does."""
    url = create_sqlite(
        tmp_path / "views.db",
        [
            "CREATE TABLE users (id INTEGER, email TEXT)",
            "CREATE VIEW active_users AS SELECT email FROM users",
        ],
    )
    engine = create_engine(url)
    try:
        tables = list_tables(engine, "main")
    finally:
        engine.dispose()

    assert tables == [TableInfo("active_users", ("email",)), TableInfo("users", ("id", "email"))]


def test_list_tables_unknown_schema(shop_engine):
    with pytest.raises(CatalogError, match="nope"):
        list_tables(shop_engine, "nope")


def test_list_tables_wraps_driver_errors():
    engine = MagicMock()
    engine.dialect.name = "mysql"
    engine.connect.side_effect = OperationalError("SELECT", {}, Exception("denied"))

    with pytest.raises(CatalogError, match="denied"):
        list_tables(engine, "shop")


def test_group_columns_single_pass():
    pairs = [("a", "id"), ("a", "name"), ("b", "id")]
    assert group_columns(pairs) == [
        TableInfo("a", ("id", "name")),
        TableInfo("b", ("id",)),
    ]


def test_group_columns_empty():
    assert group_columns([]) == []
