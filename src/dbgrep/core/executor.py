"""Search statement execution."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from dbgrep.core.types import SearchResult, SearchStatement, to_cell
from dbgrep.errors import QueryError
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)


class SearchExecutor:
    """Runs search statements against a read-only engine.

    Each call checks a connection out of the engine's pool, so one executor
    can be shared by worker threads as long as the driver allows concurrent
    connections. Nothing is ever written.
    """

    def __init__(
        self,
        engine: Engine,
        row_limit: int,
        statement_timeout: Optional[float] = None,
    ):
        """Initialize executor.

        Args:
            engine: SQLAlchemy engine
            row_limit: Max rows kept per table
            statement_timeout: Server-side timeout per statement in seconds
        """
        self.engine = engine
        self.row_limit = row_limit
        self.statement_timeout = statement_timeout

    def execute(
        self, table_name: str, statement: SearchStatement, dry_run: bool = False
    ) -> SearchResult:
        """Run one table's search statement.

        Args:
            table_name: Table being searched
            statement: Output of build_search
            dry_run: Return the display query only, without touching the database

        Returns:
            SearchResult with at most ``row_limit`` rows

        Raises:
            QueryError: If the statement or the fetch fails
        """
        result = SearchResult(table_name=table_name, display_query=statement.display_query)

        if dry_run:
            return result

        logger.info(f"Searching through table: {table_name}")

        try:
            with self.engine.connect() as conn:
                self._apply_timeout(conn)
                cursor = conn.execute(text(statement.sql), statement.parameters)
                result.columns = list(cursor.keys())
                for row in cursor.fetchmany(self.row_limit):
                    result.rows.append([to_cell(value) for value in row])
                cursor.close()
        except SQLAlchemyError as e:
            raise QueryError(table_name, str(e)) from e

        logger.debug(f"{table_name}: {result.row_count} rows")
        return result

    def _apply_timeout(self, conn: Connection) -> None:
        if not self.statement_timeout:
            return

        millis = int(self.statement_timeout * 1000)
        dialect = conn.dialect.name

        if dialect == "postgresql":
            conn.execute(text(f"SET LOCAL statement_timeout = {millis:d}"))
        elif dialect in ("mysql", "mariadb"):
            conn.execute(text(f"SET SESSION max_execution_time = {millis:d}"))
        else:
            logger.debug(f"No statement timeout support for dialect {dialect}")
