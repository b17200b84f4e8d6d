"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from relaystore.core.types import Event
from relaystore.store.database import Database
from relaystore.store.events import EventRepository
from relaystore.store.search_index import SearchIndexRepository


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "relay.sqlite"


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def event_repo(db: Database) -> EventRepository:
    """Provide an EventRepository instance."""
    return EventRepository(db)


@pytest.fixture
def index_repo(db: Database) -> SearchIndexRepository:
    """Provide a SearchIndexRepository instance."""
    return SearchIndexRepository(db)


@pytest.fixture
def make_event():
    """Build events with unique ids and overridable fields."""
    counter = iter(range(1, 1_000_000))

    def _make(**overrides) -> Event:
        n = next(counter)
        fields = {
            "id": f"{n:064x}",
            "pubkey": "a" * 64,
            "sig": "b" * 128,
            "kind": 1,
            "content": None,
            "tags": [],
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def fts_match(db: Database):
    """Return rowids of events_fts rows matching a phrase."""

    def _match(term: str) -> list[int]:
        phrase = '"' + term.replace('"', '""') + '"'
        cursor = db.execute(
            "SELECT rowid FROM events_fts WHERE events_fts MATCH ? ORDER BY rowid",
            (phrase,),
        )
        return [row[0] for row in cursor.fetchall()]

    return _match


@pytest.fixture
def rowid_of(db: Database):
    """Return the internal rowid of an events row."""

    def _rowid(event_id: str) -> int:
        cursor = db.execute("SELECT rowid FROM events WHERE id = ?", (event_id,))
        return cursor.fetchone()[0]

    return _rowid
