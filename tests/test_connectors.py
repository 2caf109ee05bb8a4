"""Tests for database connection helpers."""

from unittest.mock import MagicMock

import pytest

from dbgrep.connectors import connect_database, resolve_schema_name
from dbgrep.errors import ConfigurationError, DatabaseConnectionError


def test_connect_sqlite(shop_url):
    engine = connect_database(shop_url)
    assert engine.dialect.name == "sqlite"
    assert resolve_schema_name(engine) == "main"
    engine.dispose()


def test_connect_missing_url():
    with pytest.raises(ConfigurationError, match="No database URL"):
        connect_database(None)


def test_connect_invalid_url():
    with pytest.raises(ConfigurationError, match="Invalid database URL"):
        connect_database("not a url")


def test_connect_unreachable(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing-dir' / 'x.db'}"
    with pytest.raises(DatabaseConnectionError, match="failed to connect"):
        connect_database(url)


def test_resolve_schema_explicit_wins(shop_url):
    engine = connect_database(shop_url)
    assert resolve_schema_name(engine, "other") == "other"
    engine.dispose()


def test_resolve_schema_from_url():
    engine = MagicMock()
    engine.dialect.name = "mysql"
    engine.dialect.default_schema_name = None
    engine.url.database = "shop"
    assert resolve_schema_name(engine) == "shop"


def test_resolve_schema_unknown():
    engine = MagicMock()
    engine.dialect.name = "mysql"
    engine.dialect.default_schema_name = None
    engine.url.database = None
    with pytest.raises(ConfigurationError, match="--schema"):
        resolve_schema_name(engine)
