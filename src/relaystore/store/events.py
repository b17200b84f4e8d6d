"""Event storage for relaystore.

This module writes rows into the ``events`` table. The search index is kept
in sync by the schema triggers, so nothing here touches ``events_fts``.

Classes:
    EventRepository: Save, delete and replace events by kind class.
"""

import json
import sqlite3
from datetime import datetime, timezone

from loguru import logger

from ..core.exceptions import DuplicateEventError, EventError
from ..core.types import Event, KindClass, is_older
from .database import Database
from .schema import decode_tags

_COLUMNS = "id, pubkey, sig, kind, created_at, content, tags"


def _to_timestamp(value) -> int | None:
    """Normalize a created_at column value to unix seconds.

    Rows written without created_at hold the CURRENT_TIMESTAMP text default.
    Naive datetimes are read as UTC.

    Raises:
        EventError: If the value is neither a number nor an ISO datetime.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if value.isdigit():
        return int(value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise EventError(f"Invalid created_at value: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def _insert_statement(event: Event) -> tuple[str, tuple]:
    """Build the INSERT OR IGNORE statement for an event.

    Raises:
        EventError: If the tags cannot be JSON-encoded.
    """
    try:
        tags_json = json.dumps(event.tags)
    except (TypeError, ValueError) as e:
        raise EventError(f"Invalid tags for event {event.id}: {e}") from e

    if event.created_at is None:
        sql = (
            "INSERT OR IGNORE INTO events (id, pubkey, sig, kind, content, tags) "
            "VALUES (?, ?, ?, ?, ?, ?)"
        )
        return sql, (event.id, event.pubkey, event.sig, event.kind, event.content, tags_json)

    sql = f"INSERT OR IGNORE INTO events ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)"
    return sql, (
        event.id,
        event.pubkey,
        event.sig,
        event.kind,
        event.created_at,
        event.content,
        tags_json,
    )


class EventRepository:
    """Repository for event ingestion.

    Example:
        >>> repo = EventRepository(db)
        >>> repo.store(event)
        >>> repo.delete(event.id)
        True
    """

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations.
        """
        self.db = db

    def save(self, event: Event) -> None:
        """Insert an event.

        Args:
            event: Event to insert.

        Raises:
            DuplicateEventError: If an event with the same id is stored.
            EventError: If the tags cannot be JSON-encoded.
        """
        sql, params = _insert_statement(event)

        with self.db.transaction() as cursor:
            cursor.execute(sql, params)
            inserted = cursor.rowcount

        if inserted == 0:
            raise DuplicateEventError(event.id)
        logger.debug(f"Saved event {event.id} (kind {event.kind})")

    def delete(self, event_id: str) -> bool:
        """Delete an event by id.

        Args:
            event_id: Id of the event to delete.

        Returns:
            True if a row was deleted.
        """
        with self.db.transaction() as cursor:
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.debug(f"Deleted event {event_id}")
        return deleted

    def get(self, event_id: str) -> Event | None:
        """Retrieve an event by id.

        Args:
            event_id: Id of the event.

        Returns:
            Event if found, None otherwise.
        """
        cursor = self.db.execute(
            f"SELECT {_COLUMNS} FROM events WHERE id = ?",
            (event_id,),
        )
        row = cursor.fetchone()
        return self._row_to_event(row) if row else None

    def replace(self, event: Event) -> bool:
        """Store a replaceable or addressable event, superseding older versions.

        Stored events with the same kind and author (and the same ``d`` tag
        for addressable kinds) that are older than ``event`` are deleted.
        ``event`` is saved only if no stored version is newer. The deletes
        and the insert commit together.

        Args:
            event: Replaceable or addressable event.

        Returns:
            True if ``event`` is now stored.

        Raises:
            EventError: If the tags cannot be JSON-encoded. Nothing is
                deleted in that case.
        """
        sql, params = _insert_statement(event)

        superseded = []
        should_store = True
        for previous in self._find_versions(event):
            if previous.id == event.id:
                should_store = False
            elif is_older(previous, event):
                superseded.append(previous.id)
            else:
                should_store = False

        inserted = 0
        with self.db.transaction() as cursor:
            for previous_id in superseded:
                cursor.execute("DELETE FROM events WHERE id = ?", (previous_id,))
                logger.debug(f"Replaced event {previous_id} with {event.id}")
            if should_store:
                cursor.execute(sql, params)
                inserted = cursor.rowcount

        return inserted > 0

    def store(self, event: Event) -> bool:
        """Store an event according to its kind class.

        Ephemeral events are dropped, regular events are saved and
        replaceable or addressable events go through :meth:`replace`.

        Returns:
            True if the event was written.
        """
        kind_class = event.kind_class
        if kind_class is KindClass.EPHEMERAL:
            return False
        if kind_class is KindClass.REGULAR:
            self.save(event)
            return True
        return self.replace(event)

    def count(self) -> int:
        """Count stored events."""
        cursor = self.db.execute("SELECT COUNT(*) as count FROM events")
        return cursor.fetchone()["count"]

    def _find_versions(self, event: Event) -> list[Event]:
        cursor = self.db.execute(
            f"SELECT {_COLUMNS} FROM events WHERE kind = ? AND pubkey = ?",
            (event.kind, event.pubkey),
        )
        versions = [self._row_to_event(row) for row in cursor.fetchall()]
        if event.kind_class is KindClass.ADDRESSABLE:
            d_tag = event.d_tag
            versions = [v for v in versions if v.d_tag == d_tag]
        return versions

    def _row_to_event(self, row: sqlite3.Row) -> Event:
        tags = [tag for tag in decode_tags(row["tags"]) if isinstance(tag, list)]
        return Event(
            id=row["id"],
            pubkey=row["pubkey"],
            sig=row["sig"],
            kind=row["kind"],
            content=row["content"],
            tags=tags,
            created_at=_to_timestamp(row["created_at"]),
        )
