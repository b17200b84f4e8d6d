"""Maintenance of the events_fts search index."""

from loguru import logger

from .database import Database
from .schema import REINDEX_EVENTS_SQL, indexed_text_sql


class SearchIndexRepository:
    """Repository for the contentless ``events_fts`` table.

    Rows are normally written by the schema triggers. This repository counts
    them, rebuilds the whole index from ``events`` with the same projection
    the insert trigger uses, and previews the text a row would be indexed as.
    """

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations.
        """
        self.db = db

    def count(self) -> int:
        """Count index rows."""
        cursor = self.db.execute("SELECT COUNT(*) as count FROM events_fts")
        return cursor.fetchone()["count"]

    def indexed_text(self, content: str | None, tags: str | None) -> str:
        """Compute the search text the insert trigger would write.

        Args:
            content: Event content, may be None.
            tags: JSON-encoded tags column value, may be None.

        Returns:
            The text that would be indexed for such a row.
        """
        cursor = self.db.execute(
            f"SELECT {indexed_text_sql(':content', ':tags')} AS text",
            {"content": content, "tags": tags},
        )
        return cursor.fetchone()["text"]

    def rebuild(self) -> int:
        """Re-project every event into the search index.

        Returns:
            Number of index rows written.
        """
        with self.db.transaction() as cursor:
            cursor.execute("INSERT INTO events_fts(events_fts) VALUES('delete-all')")
            cursor.execute(REINDEX_EVENTS_SQL)
            indexed = cursor.execute("SELECT COUNT(*) FROM events").fetchone()[0]

        logger.info(f"Rebuilt search index with {indexed} rows")
        return indexed
