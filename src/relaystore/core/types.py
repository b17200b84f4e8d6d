"""Type definitions for relaystore."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class KindClass(Enum):
    """Storage class of an event kind."""

    REGULAR = "regular"
    REPLACEABLE = "replaceable"
    EPHEMERAL = "ephemeral"
    ADDRESSABLE = "addressable"


def classify_kind(kind: int) -> KindClass:
    """Classify an event kind by its NIP-01 range.

    Args:
        kind: Event kind number.

    Returns:
        The KindClass that decides how the event is stored.
    """
    if kind in (0, 3) or 10000 <= kind < 20000:
        return KindClass.REPLACEABLE
    if 20000 <= kind < 30000:
        return KindClass.EPHEMERAL
    if 30000 <= kind < 40000:
        return KindClass.ADDRESSABLE
    return KindClass.REGULAR


@dataclass
class Event:
    """A signed event as stored in the events table."""

    id: str
    pubkey: str
    sig: str
    kind: int
    content: Optional[str] = None
    tags: list[list[str]] = field(default_factory=list)
    created_at: Optional[int] = None  # unix seconds; None uses the column default

    @property
    def kind_class(self) -> KindClass:
        return classify_kind(self.kind)

    @property
    def d_tag(self) -> str:
        """Value of the first ``d`` tag, or an empty string."""
        for tag in self.tags:
            if len(tag) >= 2 and tag[0] == "d":
                return tag[1]
        return ""


def is_older(previous: Event, candidate: Event) -> bool:
    """Check whether a stored event is superseded by a candidate.

    Ties on created_at are broken by id: the greater id is the older one.
    """
    prev_ts = previous.created_at or 0
    cand_ts = candidate.created_at or 0
    return prev_ts < cand_ts or (prev_ts == cand_ts and previous.id > candidate.id)


@dataclass
class StoreStatus:
    """Summary of an event store."""

    path: Path
    journal_mode: str
    event_count: int
    index_count: int
    size_bytes: int
