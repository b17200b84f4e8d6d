"""SQLite event store with full-text search for a Nostr relay."""

__version__ = "0.1.0"
