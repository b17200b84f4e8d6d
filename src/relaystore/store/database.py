"""SQLite database connection manager for relaystore."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from loguru import logger

from ..core.exceptions import DatabaseError
from .schema import JOURNAL_MODE_SQL, get_schema


class Database:
    """SQLite database connection manager.

    Connecting brings the store to the target schema: WAL journaling, the
    ``events`` table, the ``events_fts`` search index and its sync triggers.
    Every step is conditional, so connecting to an initialized store is a
    no-op beyond opening the file.

    Example:
        >>> db = Database(Path("relay.sqlite"))
        >>> db.connect()
        >>> db.journal_mode
        'wal'
    """

    def __init__(self, path: Path):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file.
        """
        self.path = Path(path)
        self._connection: sqlite3.Connection | None = None

    def __enter__(self) -> "Database":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Open the database file and initialize the schema.

        Raises:
            DatabaseError: If the file cannot be opened or any schema
                statement fails.
        """
        if self._connection:
            self.close()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path))
            self._connection.row_factory = sqlite3.Row
        except Exception as e:
            self._connection = None
            raise DatabaseError(f"Failed to open database {self.path}: {e}") from e

        logger.debug(f"Opened database at {self.path}")

        try:
            self._enable_wal()
            self._init_schema()
        except Exception:
            self._connection.close()
            self._connection = None
            raise

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            try:
                self._connection.close()
            except Exception as e:
                raise DatabaseError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Context manager for database transactions.

        Yields:
            A cursor for executing SQL statements.

        Raises:
            DatabaseError: If connection is not available or transaction fails.
        """
        if not self._connection:
            raise DatabaseError("Database not connected")

        cursor = self._connection.cursor()
        try:
            yield cursor
            self._connection.commit()
        except Exception as e:
            self._connection.rollback()
            raise DatabaseError(f"Transaction failed: {e}") from e
        finally:
            cursor.close()

    def execute(self, sql: str, params: tuple | dict = ()) -> sqlite3.Cursor:
        """Execute a SQL query.

        Args:
            sql: SQL statement to execute.
            params: Parameters for the SQL statement.

        Returns:
            A cursor with the query results.

        Raises:
            DatabaseError: If connection is not available or query fails.
        """
        if not self._connection:
            raise DatabaseError("Database not connected")

        try:
            return self._connection.execute(sql, params)
        except Exception as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements.

        Args:
            sql: SQL script with multiple statements.

        Raises:
            DatabaseError: If connection is not available or script fails.
        """
        if not self._connection:
            raise DatabaseError("Database not connected")

        try:
            self._connection.executescript(sql)
        except Exception as e:
            raise DatabaseError(f"Script execution failed: {e}") from e

    @property
    def journal_mode(self) -> str:
        """Current journal mode as reported by SQLite (lowercase)."""
        row = self.execute("PRAGMA journal_mode").fetchone()
        return str(row[0]).lower()

    def _enable_wal(self) -> None:
        """Switch the file to write-ahead logging."""
        try:
            mode = self._connection.execute(JOURNAL_MODE_SQL).fetchone()[0]
        except Exception as e:
            raise DatabaseError(f"Failed to enable WAL journal mode: {e}") from e
        logger.debug(f"Journal mode for {self.path}: {mode}")

    def _init_schema(self) -> None:
        """Initialize database schema."""
        try:
            self._connection.executescript(get_schema())
        except Exception as e:
            raise DatabaseError(f"Failed to initialize schema: {e}") from e
        logger.debug(f"Schema ready at {self.path}")
