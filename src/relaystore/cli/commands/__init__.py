"""Command implementations for relaystore CLI."""

from .status import handle_status
from .store import handle_init, handle_reindex

__all__ = [
    "handle_init",
    "handle_reindex",
    "handle_status",
]
