"""
Persistent collection of rendezvous records.

``RendezvousStore`` wraps the ``rendezvous`` table.  It does not check
that ``beacon_key`` refers to an existing beacon; ``BeaconService``
performs that check before every insert.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import Callable, List, Optional

from beacon_api.app.core.db import DEFAULT_TIMEOUT, day_bounds, format_timestamp, get_connection, get_cursor, utc_now
from beacon_api.app.schemas.rendezvous import RendezvousRead

logger = logging.getLogger(__name__)

_COLUMNS = "id, beacon_key, remote_address, creation_date"


class RendezvousStore:
    """SQLite‑backed store for ``RendezvousRead`` records."""

    def __init__(
        self,
        db_path: str,
        clock: Callable[[], datetime] = utc_now,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.db_path = db_path
        self.clock = clock
        self.timeout = timeout

    def insert(self, beacon_key: str, remote_address: str) -> RendezvousRead:
        created = format_timestamp(self.clock())
        with get_cursor(self.db_path, self.timeout) as cursor:
            cursor.execute(
                "INSERT INTO rendezvous (beacon_key, remote_address, creation_date) VALUES (?, ?, ?)",
                (beacon_key, remote_address, created),
            )
            rendezvous_id = cursor.lastrowid
        logger.info("Recorded rendezvous %s for beacon %s from %s", rendezvous_id, beacon_key, remote_address)
        return RendezvousRead(
            id=rendezvous_id,
            beacon_key=beacon_key,
            remote_address=remote_address,
            creation_date=created,
        )

    def find_by_id(self, rendezvous_id: int) -> Optional[RendezvousRead]:
        rows = self._select("WHERE id = ?", (rendezvous_id,))
        return rows[0] if rows else None

    def find_by_key(self, beacon_key: str) -> List[RendezvousRead]:
        """Return the rendezvous history of one beacon, oldest first."""
        return self._select("WHERE beacon_key = ?", (beacon_key,))

    def find_by_date(self, day: date) -> List[RendezvousRead]:
        start, end = day_bounds(day)
        return self._select("WHERE creation_date >= ? AND creation_date < ?", (start, end))

    def count(self, beacon_key: Optional[str] = None) -> int:
        """Count all rendezvous, or only those of ``beacon_key``."""
        query = "SELECT COUNT(*) AS total FROM rendezvous"
        params: tuple = ()
        if beacon_key is not None:
            query += " WHERE beacon_key = ?"
            params = (beacon_key,)
        conn = get_connection(self.db_path, self.timeout)
        try:
            return conn.execute(query, params).fetchone()["total"]
        finally:
            conn.close()

    def _select(self, clause: str, params: tuple) -> List[RendezvousRead]:
        query = f"SELECT {_COLUMNS} FROM rendezvous {clause} ORDER BY creation_date ASC, id ASC"
        conn = get_connection(self.db_path, self.timeout)
        try:
            rows = conn.execute(query, params).fetchall()
            return [
                RendezvousRead(
                    id=row["id"],
                    beacon_key=row["beacon_key"],
                    remote_address=row["remote_address"],
                    creation_date=row["creation_date"],
                )
                for row in rows
            ]
        finally:
            conn.close()
