"""dbgrep - find a value anywhere in a relational schema."""

__version__ = "0.1.0"

# Core
from dbgrep.core import (
    SearchEngine,
    SearchOptions,
    SearchResult,
    SearchRun,
    TableInfo,
    build_search,
    list_tables,
    render_report,
    search,
)

# Connectors
from dbgrep.connectors import connect_database, resolve_schema_name

# Errors
from dbgrep.errors import (
    CatalogError,
    ConfigurationError,
    DatabaseConnectionError,
    DbGrepError,
    PatternError,
    QueryError,
)

# Utils
from dbgrep.utils.config import Config, get_config, load_config

__all__ = [
    # Version
    "__version__",
    # Core
    "SearchEngine",
    "SearchOptions",
    "SearchResult",
    "SearchRun",
    "TableInfo",
    "build_search",
    "list_tables",
    "render_report",
    "search",
    # Connectors
    "connect_database",
    "resolve_schema_name",
    # Errors
    "DbGrepError",
    "ConfigurationError",
    "PatternError",
    "DatabaseConnectionError",
    "CatalogError",
    "QueryError",
    # Config
    "Config",
    "get_config",
    "load_config",
]
