"""Configuration management for relaystore."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DB_NAME = "relay.sqlite"


def _default_db_path() -> Path:
    """Get default database path."""
    working_dir = os.environ.get("WORKING_DIR")
    if working_dir:
        return Path(working_dir) / DEFAULT_DB_NAME
    return Path(DEFAULT_DB_NAME)


@dataclass
class Config:
    """Main application configuration."""

    db_path: Path = field(default_factory=_default_db_path)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Config with file values and environment overrides applied.
        """
        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()
        if db_path := data.get("db_path"):
            config.db_path = Path(db_path)
        if log_level := data.get("log_level"):
            config.log_level = str(log_level)

        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | None = None) -> "Config":
        """Load from an explicit file, $RELAYSTORE_CONFIG, or the environment."""
        if path is None and (env_path := os.environ.get("RELAYSTORE_CONFIG")):
            path = Path(env_path)
        if path is not None:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        if path := os.environ.get("RELAYSTORE_DB_PATH"):
            self.db_path = Path(path)

        if level := os.environ.get("RELAYSTORE_LOG_LEVEL"):
            self.log_level = level.upper()
