"""Database connection manager for SQLite."""

import logging
import sqlite3

from emr_manager.config import DatabaseConfig
from emr_manager.errors import StorageFailure

from .schema import SCHEMA

logger = logging.getLogger(__name__)

SQLITE_PREFIX = "sqlite:///"


def parse_sqlite_url(url: str) -> str:
    """Return the filesystem path (or ':memory:') named by a sqlite:/// URL."""
    if not url.startswith(SQLITE_PREFIX):
        raise StorageFailure(f"Unsupported database URL '{url}' (expected {SQLITE_PREFIX}<path>)")
    path = url[len(SQLITE_PREFIX):]
    if not path:
        raise StorageFailure(f"Database URL '{url}' does not name a database")
    return path


class Database:
    """Holds the single live connection shared by every DAO."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None

    def open(self) -> "Database":
        """Open the connection with row factory and foreign keys enabled."""
        path = parse_sqlite_url(self.config.url)
        try:
            conn = sqlite3.connect(path)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise StorageFailure(f"Connection failed: {e}", cause=e) from e
        self._conn = conn
        logger.info("Connected to database %s", path)
        return self

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageFailure("Database connection is not open")
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
        except sqlite3.Error as e:
            logger.error("Error closing connection: %s", e)
        finally:
            self._conn = None
        logger.info("Database connection closed")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def init_database(db: Database) -> None:
    """Initialize the database with schema."""
    try:
        db.connection.executescript(SCHEMA)
        db.connection.commit()
    except sqlite3.Error as e:
        raise StorageFailure(f"Failed to initialize schema: {e}", cause=e) from e
