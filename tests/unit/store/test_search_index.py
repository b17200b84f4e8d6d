"""Tests for the search index repository."""

import json

import pytest

from relaystore.store.database import Database
from relaystore.store.schema import decode_tags
from relaystore.store.search_index import SearchIndexRepository


class TestIndexedText:
    """Tests for the search text preview."""

    def test_content_and_recognized_tags(self, index_repo: SearchIndexRepository):
        text = index_repo.indexed_text("hello", json.dumps([["t", "nostr"], ["p", "abc"]]))
        assert text == "hello nostr"

    def test_tags_keep_order(self, index_repo: SearchIndexRepository):
        tags = [["url", "u"], ["alt", "a"], ["title", "x"], ["name", "n"]]
        assert index_repo.indexed_text("c", json.dumps(tags)) == "c u a x n"

    def test_null_content_no_tags(self, index_repo: SearchIndexRepository):
        """Empty input yields whitespace only."""
        assert index_repo.indexed_text(None, None) == " "

    def test_skips_short_and_non_array_tags(self, index_repo: SearchIndexRepository):
        tags = json.dumps([["t"], "t", [], ["t", "ok"]])
        assert index_repo.indexed_text("c", tags) == "c ok"

    def test_malformed_tags_index_content_only(self, index_repo: SearchIndexRepository):
        assert index_repo.indexed_text("c", "not json") == "c "

    def test_preview_matches_trigger(self, db: Database, event_repo, index_repo, make_event, fts_match, rowid_of):
        """The preview text is what the trigger indexes."""
        event = make_event(content="preview", tags=[["title", "matched"]])
        event_repo.save(event)

        text = index_repo.indexed_text(event.content, json.dumps(event.tags))

        assert fts_match(text) == [rowid_of(event.id)]


class TestDecodeTags:
    """Tests for reading stored tags."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, []),
            ("not json", []),
            ("42", []),
            ('{"a": ["t", "x"]}', []),
            ('[["t", "x"]]', [["t", "x"]]),
        ],
    )
    def test_decode(self, raw, expected):
        assert decode_tags(raw) == expected


class TestSearchIndexRepository:
    """Tests for count and rebuild."""

    def test_count_tracks_events(self, event_repo, index_repo, make_event):
        for _ in range(3):
            event_repo.save(make_event(content="counted"))

        assert index_repo.count() == 3

    def test_rebuild_refreshes_updated_rows(
        self, db: Database, event_repo, index_repo: SearchIndexRepository,
        make_event, fts_match, rowid_of,
    ):
        """Rebuild picks up updates the triggers never mirrored."""
        event = make_event(content="hello world", tags=[["t", "nostr"]])
        event_repo.save(event)
        with db.transaction() as cursor:
            cursor.execute(
                "UPDATE events SET content = 'goodbye moon' WHERE id = ?", (event.id,)
            )

        assert index_repo.rebuild() == 1

        rowid = rowid_of(event.id)
        assert fts_match("hello") == []
        assert fts_match("goodbye") == [rowid]
        assert fts_match("nostr") == [rowid]

    def test_rebuild_matches_trigger_output(self, db: Database, index_repo, fts_match, rowid_of):
        """Rebuilt rows match what the insert trigger wrote."""
        rows = [
            ("e1", "alpha", json.dumps([["title", "bravo"], ["p", "charlie"]])),
            ("e2", None, json.dumps([["alt", "delta"]])),
            ("e3", "echo", "not json"),
            ("e4", "huge", '[["t", 1e20]]'),
            ("e5", "nested", '[["t", ["caf\u00e9 au lait"]]]'),
            ("e6", "nan", '[["t", NaN]]'),
        ]
        with db.transaction() as cursor:
            cursor.executemany(
                "INSERT INTO events (id, pubkey, sig, kind, content, tags) "
                "VALUES (?, 'p', 's', 1, ?, ?)",
                rows,
            )
        terms = [
            "alpha bravo", "charlie", "delta", "echo",
            "1.0e+20", "1e+20", "100000000000000000000",
            "au lait", "\\u00e9", "NaN",
        ]
        before = {term: fts_match(term) for term in terms}

        assert index_repo.rebuild() == 6

        after = {term: fts_match(term) for term in terms}
        assert after == before
        assert after["alpha bravo"] == [rowid_of("e1")]
        assert after["charlie"] == []
        assert after["au lait"] == [rowid_of("e5")]
        assert index_repo.count() == 6

    def test_rebuild_drops_orphan_rows(self, db: Database, index_repo, fts_match):
        """Index rows without an event are removed."""
        with db.transaction() as cursor:
            cursor.execute("INSERT INTO events_fts (rowid, text) VALUES (999, 'orphan')")

        assert index_repo.rebuild() == 0
        assert fts_match("orphan") == []
        assert index_repo.count() == 0
