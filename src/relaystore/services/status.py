"""Status service for event store reporting."""

from loguru import logger

from ..core.types import StoreStatus
from ..store.database import Database
from ..store.events import EventRepository
from ..store.search_index import SearchIndexRepository


class StatusService:
    """Service for event store status reporting.

    Example:

        status = StatusService(db).get_store_status()
        print(f"Events: {status.event_count}")
    """

    def __init__(self, db: Database):
        """Initialize StatusService.

        Args:
            db: Connected database.
        """
        self.db = db

    def get_store_status(self) -> StoreStatus:
        """Get current store status.

        Returns:
            StoreStatus with counts, journal mode and file size.
        """
        logger.debug("Getting store status")

        event_count = EventRepository(self.db).count()
        index_count = SearchIndexRepository(self.db).count()

        try:
            size_bytes = self.db.path.stat().st_size
        except OSError:
            size_bytes = 0

        status = StoreStatus(
            path=self.db.path,
            journal_mode=self.db.journal_mode,
            event_count=event_count,
            index_count=index_count,
            size_bytes=size_bytes,
        )
        logger.debug(
            f"Store status: events={event_count}, index_rows={index_count}, "
            f"journal_mode={status.journal_mode}"
        )
        return status
