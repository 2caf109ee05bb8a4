"""Database connectors for dbgrep."""

from dbgrep.connectors.db_connector import connect_database, resolve_schema_name

__all__ = ["connect_database", "resolve_schema_name"]
