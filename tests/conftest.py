"""Shared fixtures: small SQLite databases created through SQLAlchemy."""

from pathlib import Path
from typing import Iterable

import pytest
from sqlalchemy import create_engine, text

from dbgrep.utils.config import set_config


def create_sqlite(path: Path, statements: Iterable[str]) -> str:
    """Create a SQLite database file and return its URL."""
    url = f"sqlite:///{path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for statement in statements:
            conn.execute(text(statement))
    engine.dispose()
    return url


SHOP_STATEMENTS = [
    "CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT)",
    "INSERT INTO users VALUES (7, 'bob@x.com'), (8, 'alice@x.com')",
    "CREATE TABLE users_backup (id INTEGER, email TEXT)",
    "INSERT INTO users_backup VALUES (7, 'bob@x.com')",
    "CREATE TABLE orders (id INTEGER, customer TEXT, note TEXT)",
    "INSERT INTO orders VALUES (1, 'alice', 'gift for bob'), (2, 'carol', NULL)",
    "CREATE TABLE logs (id INTEGER, msg TEXT)",
    "INSERT INTO logs VALUES (1, 'started'), (2, 'stopped')",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the global config and environment out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DBGREP_CONFIG", raising=False)
    monkeypatch.delenv("DBGREP_DATABASE_URL", raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def shop_url(tmp_path):
    """URL of a database with users, users_backup, orders and logs."""
    return create_sqlite(tmp_path / "shop.db", SHOP_STATEMENTS)


@pytest.fixture
def shop_engine(shop_url):
    engine = create_engine(shop_url)
    yield engine
    engine.dispose()
