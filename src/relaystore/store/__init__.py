"""Data access layer for relaystore.

This package provides the persistence layer:
- Database: SQLite connection handle and schema initializer
- EventRepository: event ingestion (save, delete, replace)
- SearchIndexRepository: events_fts maintenance

Example:
    from relaystore.store import Database, EventRepository

    db = Database(Path("relay.sqlite"))
    db.connect()
    events = EventRepository(db)
"""

from .database import Database
from .events import EventRepository
from .schema import INDEXED_TAG_NAMES, get_schema, indexed_text_sql
from .search_index import SearchIndexRepository

__all__ = [
    "Database",
    "EventRepository",
    "SearchIndexRepository",
    "INDEXED_TAG_NAMES",
    "get_schema",
    "indexed_text_sql",
]
