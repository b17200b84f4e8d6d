"""Store setup and maintenance commands for relaystore CLI."""

from loguru import logger

from ...core.config import Config
from ...core.exceptions import DatabaseError
from ...store.database import Database
from ...store.search_index import SearchIndexRepository


def handle_init(args, config: Config) -> None:
    """Handle init command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    db = Database(config.db_path)
    db.connect()
    try:
        logger.info(f"Event store ready at {db.path} (journal mode {db.journal_mode})")
        print(f"Initialized {db.path}")
    finally:
        db.close()


def handle_reindex(args, config: Config) -> None:
    """Handle reindex command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if not config.db_path.exists():
        raise DatabaseError(f"No event store at {config.db_path}; run init first")

    db = Database(config.db_path)
    db.connect()
    try:
        indexed = SearchIndexRepository(db).rebuild()
        print(f"Reindexed {indexed} events")
    finally:
        db.close()
