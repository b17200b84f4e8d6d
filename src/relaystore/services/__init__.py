"""Service layer for relaystore."""

from .status import StatusService

__all__ = ["StatusService"]
