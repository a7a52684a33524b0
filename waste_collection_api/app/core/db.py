"""
SQLite database integration and simple migration system.

This module provides a connection factory (``connect``) and the
migration routine (``init_db``) applied when the application starts.
It uses SQLite as a lightweight embedded database; to switch to
another DBMS you would replace connection logic and adapt SQL syntax
accordingly.

Monetary and volume columns are declared ``TEXT`` and written through
the ``Decimal`` adapter registered below, so values round-trip exactly
instead of passing through SQLite's binary ``REAL`` storage.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from datetime import date, datetime
from decimal import Decimal

from .config import resolve_project_path, settings

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

sqlite3.register_adapter(Decimal, str)
sqlite3.register_adapter(date, date.isoformat)
sqlite3.register_adapter(datetime, datetime.isoformat)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS clients (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            type TEXT NOT NULL CHECK (type IN ('HOTEL', 'HEALTH', 'HOUSE')),
            address TEXT NOT NULL,
            rate_per_m3 TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS vehicles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            plate TEXT NOT NULL UNIQUE,
            max_capacity_m3 TEXT NOT NULL,
            fuel_consumption TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS workers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            role TEXT NOT NULL,
            base_salary TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS service_records (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER NOT NULL,
            vehicle_id INTEGER NOT NULL,
            worker_id INTEGER NOT NULL,
            date TEXT NOT NULL,
            volume_m3 TEXT NOT NULL,
            cost TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(client_id) REFERENCES clients(id),
            FOREIGN KEY(vehicle_id) REFERENCES vehicles(id),
            FOREIGN KEY(worker_id) REFERENCES workers(id)
        );
        """,
    ),
    # Migration 2: indices on service record foreign keys
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_service_records_client_id ON service_records(client_id);
        CREATE INDEX IF NOT EXISTS idx_service_records_vehicle_id ON service_records(vehicle_id);
        CREATE INDEX IF NOT EXISTS idx_service_records_worker_id ON service_records(worker_id);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the project root.
    """
    if database_url == MEMORY_DATABASE or os.path.isabs(database_url):
        return database_url
    return str(resolve_project_path(database_url))


def connect(database_url: str | None = None) -> sqlite3.Connection:
    """Open a SQLite connection for the lifetime of the application.

    The connection returns rows as ``sqlite3.Row`` and enforces
    foreign keys.  ``check_same_thread`` is disabled because the ASGI
    server may call into the store from worker threads; writes are
    committed one statement group at a time by ``EntityStore``.
    """
    db_path = get_database_path(database_url or settings.database_url)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # SQLite ignores REFERENCES clauses unless enabled per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    logger.info("Opened database %s", db_path)
    return conn


def init_db(conn: sqlite3.Connection) -> int:
    """Apply pending migrations and return the resulting schema version.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any migrations from
    ``MIGRATIONS`` with a higher version number.
    """
    cursor = conn.cursor()
    try:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
        conn.commit()
    finally:
        cursor.close()
    return current_version
