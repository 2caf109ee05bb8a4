"""Error taxonomy for dbgrep.

Everything except :class:`QueryError` is fatal to a run. A ``QueryError``
only drops the table it was raised for.
"""

from __future__ import annotations


class DbGrepError(Exception):
    """Base class for all dbgrep errors."""

    pass


class ConfigurationError(DbGrepError):
    """Raised for bad option values, bad config files or a missing term."""

    pass


class PatternError(ConfigurationError):
    """Raised when an include/exclude glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str = "unbalanced character class"):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"malformed pattern: {pattern} ({reason})")


class DatabaseConnectionError(DbGrepError):
    """Raised when the database cannot be reached."""

    pass


class CatalogError(DbGrepError):
    """Raised when schema introspection fails."""

    pass


class QueryError(DbGrepError):
    """Raised when the search statement for one table fails."""

    def __init__(self, table_name: str, message: str):
        self.table_name = table_name
        super().__init__(f"error searching table {table_name}: {message}")
