"""Generic data-access object shared by every entity table."""

import logging
import sqlite3
from typing import Generic, TypeVar

from emr_manager.errors import StorageFailure

from .connection import Database

logger = logging.getLogger(__name__)


class Record:
    """Mixin giving dataclass records equality and hashing on their primary key only."""

    KEY_FIELD = "id"

    @property
    def key(self):
        return getattr(self, self.KEY_FIELD)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash((type(self).__name__, self.key))


T = TypeVar("T", bound=Record)
K = TypeVar("K")


class BaseDAO(Generic[T, K]):
    """CRUD over one table keyed by a single column.

    Subclasses name the table, its key column and the non-key columns in
    insert order, and supply the row <-> record mapping. Every public method
    issues exactly one parameterized statement; write methods commit
    immediately and report whether a row was affected.
    """

    TABLE: str = ""
    KEY_COLUMN: str = "id"
    COLUMNS: tuple[str, ...] = ()
    ENTITY_NAME: str = ""

    def __init__(self, db: Database):
        self.db = db

    def create(self, entity: T) -> bool:
        columns = (self.KEY_COLUMN, *self.COLUMNS)
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {self.TABLE} ({', '.join(columns)}) VALUES ({placeholders})"
        params = (entity.key, *self._entity_to_params(entity))
        return self._write(sql, params, f"create {self.ENTITY_NAME}")

    def read(self, key: K) -> T | None:
        sql = f"SELECT * FROM {self.TABLE} WHERE {self.KEY_COLUMN} = ?"
        cursor = self._execute(sql, (key,), f"read {self.ENTITY_NAME}")
        row = cursor.fetchone()
        return self._row_to_entity(row) if row else None

    def read_all(self) -> list[T]:
        sql = f"SELECT * FROM {self.TABLE}"
        return self._fetch_all(sql, (), f"read all {self.TABLE}")

    def update(self, entity: T) -> bool:
        set_clause = ", ".join(f"{column} = ?" for column in self.COLUMNS)
        sql = f"UPDATE {self.TABLE} SET {set_clause} WHERE {self.KEY_COLUMN} = ?"
        params = (*self._entity_to_params(entity), entity.key)
        return self._write(sql, params, f"update {self.ENTITY_NAME}")

    def delete(self, key: K) -> bool:
        sql = f"DELETE FROM {self.TABLE} WHERE {self.KEY_COLUMN} = ?"
        return self._write(sql, (key,), f"delete {self.ENTITY_NAME}")

    def exists(self, key: K) -> bool:
        sql = f"SELECT COUNT(*) FROM {self.TABLE} WHERE {self.KEY_COLUMN} = ?"
        cursor = self._execute(sql, (key,), f"check {self.ENTITY_NAME} existence")
        return cursor.fetchone()[0] > 0

    # Subclass hooks

    def _entity_to_params(self, entity: T) -> tuple:
        """Values for COLUMNS, in order."""
        raise NotImplementedError

    def _row_to_entity(self, row: sqlite3.Row) -> T:
        raise NotImplementedError

    # Private helpers

    def _fetch_all(self, sql: str, params: tuple, action: str) -> list[T]:
        cursor = self._execute(sql, params, action)
        return [self._row_to_entity(row) for row in cursor.fetchall()]

    def _write(self, sql: str, params: tuple, action: str) -> bool:
        cursor = self._execute(sql, params, action)
        try:
            self.db.connection.commit()
        except sqlite3.Error as e:
            logger.error("Failed to %s: %s", action, e)
            raise StorageFailure(f"Failed to {action}: {e}", cause=e) from e
        logger.debug("%s affected %d row(s)", action, cursor.rowcount)
        return cursor.rowcount > 0

    def _execute(self, sql: str, params: tuple, action: str) -> sqlite3.Cursor:
        conn = self.db.connection
        logger.debug("%s: %s %r", action, sql, params)
        try:
            return conn.execute(sql, params)
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.rollback()
            logger.error("Failed to %s: %s", action, e)
            raise StorageFailure(f"Failed to {action}: {e}", cause=e) from e
