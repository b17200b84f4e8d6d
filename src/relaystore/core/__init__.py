"""Core types, configuration and errors for relaystore."""

from .config import Config
from .exceptions import (
    DatabaseError,
    DuplicateEventError,
    EventError,
    RelayStoreError,
)
from .types import (
    Event,
    KindClass,
    StoreStatus,
    classify_kind,
    is_older,
)

__all__ = [
    "Config",
    "RelayStoreError",
    "DatabaseError",
    "EventError",
    "DuplicateEventError",
    "Event",
    "KindClass",
    "StoreStatus",
    "classify_kind",
    "is_older",
]
