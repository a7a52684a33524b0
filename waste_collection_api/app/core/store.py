"""
Generic entity store over the SQLite tables.

``EntityStore`` wraps one ``sqlite3.Connection`` and exposes the small
set of operations the services need: lookup by identifier, listing,
lookup by column values, create, partial update and delete.  Rows are
returned as plain dictionaries keyed by column name.

The store is constructed explicitly (``EntityStore.open``) by the
application lifespan and handed to services through the ``get_store``
dependency; nothing in this module keeps a process-wide handle.
A violated UNIQUE constraint is re-raised as ``ValidationError``; any
other ``sqlite3.Error`` is logged and re-raised as ``PersistenceError``.
Identifiers outside SQLite's signed 64-bit range cannot name a row, so
they are reported as missing.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from fastapi import Request

from .db import connect, init_db
from .errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

# Table name -> human readable entity name used in error messages.
TABLES: Dict[str, str] = {
    "clients": "client",
    "vehicles": "vehicle",
    "workers": "worker",
    "service_records": "service record",
}

# SQLite keeps INTEGER PRIMARY KEY values as signed 64-bit integers.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

UNIQUE_VIOLATION = "UNIQUE constraint failed: "


def _storable(value: Any) -> bool:
    """False for integers SQLite cannot bind."""
    return not isinstance(value, int) or MIN_ID <= value <= MAX_ID


def _duplicate_error(exc: sqlite3.Error) -> Optional[ValidationError]:
    """Describe a UNIQUE violation, e.g. ``vehicles.plate``, as a validation error."""
    message = str(exc)
    if not isinstance(exc, sqlite3.IntegrityError) or not message.startswith(UNIQUE_VIOLATION):
        return None
    # Composite keys are reported as "t.a, t.b"; the first column names the conflict.
    table, _, column = message[len(UNIQUE_VIOLATION):].split(",")[0].strip().partition(".")
    return ValidationError(f"A {TABLES.get(table, 'record')} with this {column} already exists.")


class EntityStore:
    """Persistence interface for clients, vehicles, workers and service records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._columns: Dict[str, set[str]] = {}

    @classmethod
    def open(cls, database_url: Optional[str] = None) -> "EntityStore":
        """Connect to the database, apply migrations and return a store."""
        conn = connect(database_url)
        try:
            init_db(conn)
        except sqlite3.Error as exc:
            conn.close()
            logger.exception("Database migration failed")
            raise PersistenceError("Could not initialise the database.") from exc
        return cls(conn)

    def close(self) -> None:
        self._conn.close()
        logger.info("Database connection closed")

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, roll back and wrap on failure."""
        cursor = self._conn.cursor()
        try:
            yield cursor
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            duplicate = _duplicate_error(exc)
            if duplicate is not None:
                logger.warning("Rejected write: %s", exc)
                raise duplicate from exc
            logger.exception("Store operation failed")
            raise PersistenceError("The database operation could not be completed.") from exc
        except Exception:
            self._conn.rollback()
            raise
        finally:
            cursor.close()

    def _check(self, table: str, fields: Mapping[str, Any] = ()) -> None:
        """Reject unknown tables and columns before they reach SQL text."""
        if table not in TABLES:
            raise ValueError(f"Unknown table {table!r}")
        if table not in self._columns:
            rows = self._conn.execute(f"PRAGMA table_info({table})").fetchall()
            self._columns[table] = {row["name"] for row in rows}
        unknown = set(fields) - self._columns[table]
        if unknown:
            raise ValueError(f"Unknown columns for {table}: {sorted(unknown)}")

    def find_by_id(self, table: str, entity_id: int) -> Optional[Dict[str, Any]]:
        self._check(table)
        if not _storable(entity_id):
            return None
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT * FROM {table} WHERE id = ?", (entity_id,)
            ).fetchone()
        return dict(row) if row else None

    def find_all(self, table: str) -> List[Dict[str, Any]]:
        self._check(table)
        with self._cursor() as cursor:
            rows = cursor.execute(f"SELECT * FROM {table} ORDER BY id").fetchall()
        return [dict(row) for row in rows]

    def find_one(self, table: str, **criteria: Any) -> Optional[Dict[str, Any]]:
        """Return the first row whose columns equal all given values."""
        self._check(table, criteria)
        if not all(_storable(value) for value in criteria.values()):
            return None
        where = " AND ".join(f"{column} = ?" for column in criteria) or "1 = 1"
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT * FROM {table} WHERE {where} ORDER BY id LIMIT 1",
                tuple(criteria.values()),
            ).fetchone()
        return dict(row) if row else None

    def create(self, table: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        self._check(table, fields)
        columns = ", ".join(fields)
        placeholders = ", ".join("?" for _ in fields)
        with self._cursor() as cursor:
            cursor.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(fields.values()),
            )
            row = cursor.execute(
                f"SELECT * FROM {table} WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return dict(row)

    def update(self, table: str, entity_id: int, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply a partial update and return the stored row.

        Raises ``NotFoundError`` if no row has the given identifier.
        """
        self._check(table, fields)
        if not _storable(entity_id):
            raise NotFoundError(TABLES[table], entity_id)
        assignments = [f"{column} = ?" for column in fields]
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        with self._cursor() as cursor:
            cursor.execute(
                f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?",
                (*fields.values(), entity_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(TABLES[table], entity_id)
            row = cursor.execute(
                f"SELECT * FROM {table} WHERE id = ?", (entity_id,)
            ).fetchone()
        return dict(row)

    def delete(self, table: str, entity_id: int) -> Dict[str, Any]:
        """Delete a row and return it as it was before removal.

        Raises ``NotFoundError`` if no row has the given identifier.
        """
        self._check(table)
        if not _storable(entity_id):
            raise NotFoundError(TABLES[table], entity_id)
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT * FROM {table} WHERE id = ?", (entity_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError(TABLES[table], entity_id)
            cursor.execute(f"DELETE FROM {table} WHERE id = ?", (entity_id,))
        return dict(row)


def get_store(request: Request) -> EntityStore:
    """FastAPI dependency returning the store opened by the lifespan."""
    return request.app.state.store
