"""Custom exceptions for relaystore."""


class RelayStoreError(Exception):
    """Base exception for all relaystore errors."""

    pass


class DatabaseError(RelayStoreError):
    """Database operation failed."""

    pass


class EventError(RelayStoreError):
    """Event could not be stored."""

    pass


class DuplicateEventError(EventError):
    """Event already exists in the store."""

    def __init__(self, event_id: str):
        """Initialize exception with the duplicate event id.

        Args:
            event_id: Id of the event that was already stored.
        """
        self.event_id = event_id
        super().__init__(f"duplicate: event already exists: {event_id}")
