"""Database schema definitions for relaystore.

The search index is a contentless trigram FTS5 table. Application code never
writes to it directly: the ``events_ai`` and ``events_ad`` triggers project
each ``events`` row into it by internal rowid on insert and retire it on
delete. Updates are not mirrored.
"""

import json
from typing import Any

# Tag names whose first value is added to the search text
INDEXED_TAG_NAMES = ("url", "title", "name", "alt", "t")

JOURNAL_MODE_SQL = "PRAGMA journal_mode = WAL"

EVENTS_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS events (
    id TEXT PRIMARY KEY,
    pubkey TEXT NOT NULL,
    sig TEXT NOT NULL,
    kind INTEGER NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    content TEXT,
    tags TEXT
);
"""

EVENTS_FTS_SQL = """\
CREATE VIRTUAL TABLE IF NOT EXISTS events_fts USING fts5(
    text,
    content='',
    tokenize=trigram,
    contentless_delete=1
);
"""

# Search text for one row: content, a space, then the first value of every
# recognized tag. Malformed tags fall back to an empty array so the event
# row is still inserted; only the content is indexed in that case.
INDEXED_TEXT_SQL = """\
(SELECT COALESCE({content}, '') || ' ' ||
        COALESCE(GROUP_CONCAT(json_extract(value, '$[1]'), ' '), '')
   FROM json_each(CASE WHEN json_valid({tags}) THEN {tags} ELSE '[]' END)
  WHERE CASE WHEN type = 'array' THEN json_extract(value, '$[0]') END
        IN ({tag_names}))"""


def indexed_text_sql(content: str, tags: str) -> str:
    """Render the search text expression for the given column references.

    Args:
        content: SQL expression for the content value.
        tags: SQL expression for the JSON tags value.

    Returns:
        A parenthesized scalar subquery usable in any SELECT or VALUES list.
    """
    return INDEXED_TEXT_SQL.format(
        content=content,
        tags=tags,
        tag_names=", ".join(f"'{name}'" for name in INDEXED_TAG_NAMES),
    )


EVENTS_INSERT_TRIGGER_SQL = """\
CREATE TRIGGER IF NOT EXISTS events_ai AFTER INSERT ON events BEGIN
    INSERT INTO events_fts (rowid, text)
        VALUES (new.rowid, {text});
END;
""".format(text=indexed_text_sql("new.content", "new.tags"))

EVENTS_DELETE_TRIGGER_SQL = """\
CREATE TRIGGER IF NOT EXISTS events_ad AFTER DELETE ON events BEGIN
    DELETE FROM events_fts WHERE rowid = old.rowid;
END;
"""

REINDEX_EVENTS_SQL = """\
INSERT INTO events_fts (rowid, text)
    SELECT e.rowid, {text} FROM events e;
""".format(text=indexed_text_sql("e.content", "e.tags"))

# TODO: indices on pubkey, kind and single-letter tags once a query layer needs them
SCHEMA_SQL = "\n".join(
    [
        EVENTS_TABLE_SQL,
        EVENTS_FTS_SQL,
        EVENTS_INSERT_TRIGGER_SQL,
        EVENTS_DELETE_TRIGGER_SQL,
    ]
)


def get_schema() -> str:
    """Get the SQL schema string."""
    return SCHEMA_SQL


def decode_tags(raw: str | None) -> list[Any]:
    """Decode a stored tags column.

    Args:
        raw: JSON text from the ``tags`` column, or None.

    Returns:
        List of tag entries; empty for NULL, malformed JSON or non-arrays.
    """
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if isinstance(value, list):
        return value
    return []
