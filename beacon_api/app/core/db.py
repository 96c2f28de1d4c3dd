"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager that wraps a single
transaction (``get_cursor``) and ``init_db`` which applies migrations
on application start.  Every function takes the database path
explicitly so stores and tests can point at their own files.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Iterator

DEFAULT_TIMEOUT = 5.0

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS beacons (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            beacon_key TEXT NOT NULL UNIQUE,
            owner_id TEXT NOT NULL,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            creation_date TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS rendezvous (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            beacon_key TEXT NOT NULL,
            remote_address TEXT NOT NULL,
            creation_date TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: indices for the owner, date and history lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_beacons_owner_id ON beacons(owner_id);
        CREATE INDEX IF NOT EXISTS idx_beacons_creation_date ON beacons(creation_date);
        CREATE INDEX IF NOT EXISTS idx_rendezvous_beacon_key ON rendezvous(beacon_key);
        CREATE INDEX IF NOT EXISTS idx_rendezvous_creation_date ON rendezvous(creation_date);
        """,
    ),
]


def resolve_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned unchanged.  Relative paths are
    resolved against the package root (``beacon_api/``).
    """
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # beacon_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str, timeout: float = DEFAULT_TIMEOUT) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  ``timeout`` is how long a writer waits on a locked database
    before ``sqlite3.OperationalError`` is raised.
    """
    conn = sqlite3.connect(db_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str, timeout: float = DEFAULT_TIMEOUT) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor inside one transaction.

    Commits when the block exits normally, rolls back when it raises,
    and always closes the connection.
    """
    conn = get_connection(db_path, timeout)
    try:
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any migrations in
    ``MIGRATIONS`` with a higher version number.
    """
    with get_cursor(db_path) as cursor:
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
                current_version = version


def utc_now() -> datetime:
    """Default clock used by the stores."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as a fixed‑width UTC ISO‑8601 string.

    All stored timestamps share one offset and precision, so ordering
    the TEXT column lexicographically orders by time.  Naive datetimes
    are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def day_bounds(day: date) -> tuple[str, str]:
    """Return the half‑open ``[start, end)`` timestamp range of a UTC day."""
    if isinstance(day, datetime):
        day = datetime.fromisoformat(format_timestamp(day)).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return format_timestamp(start), format_timestamp(start + timedelta(days=1))
