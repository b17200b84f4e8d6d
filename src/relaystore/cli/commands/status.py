"""Status command for relaystore CLI."""

from ...core.config import Config
from ...core.exceptions import DatabaseError
from ...core.types import StoreStatus
from ...services import StatusService
from ...store.database import Database


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if not config.db_path.exists():
        raise DatabaseError(f"No event store at {config.db_path}; run init first")

    db = Database(config.db_path)
    db.connect()
    try:
        status = StatusService(db).get_store_status()
    finally:
        db.close()
    _print_status(status)


def _print_status(status: StoreStatus) -> None:
    """Print status information.

    Args:
        status: StoreStatus object to display.
    """
    print("Event Store Status")
    print("=" * 50)
    print(f"Path: {status.path}")
    print(f"Journal Mode: {status.journal_mode}")
    print(f"Events: {status.event_count}")
    print(f"Index Rows: {status.index_count}")
    print(f"Size: {status.size_bytes} bytes")
