"""
Persistent collection of beacons.

``BeaconStore`` wraps the ``beacons`` table.  Key uniqueness is
enforced by the UNIQUE constraint on ``beacon_key``: an insert is never
preceded by an existence check, so two concurrent inserts of the same
key yield one row and one ``DuplicateKey``.

All list queries are ordered by ``creation_date`` ascending, with the
surrogate ``id`` breaking ties between beacons created in the same
microsecond.  All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import Callable, List, Optional

from beacon_api.app.core.db import DEFAULT_TIMEOUT, day_bounds, format_timestamp, get_connection, get_cursor, utc_now
from beacon_api.app.core.exceptions import DuplicateKey
from beacon_api.app.schemas.beacon import BeaconRead
from beacon_api.app.services.lookup import LookupResult

logger = logging.getLogger(__name__)

_COLUMNS = "id, beacon_key, owner_id, name, description, creation_date"
_ORDER = "ORDER BY creation_date ASC, id ASC"


class BeaconStore:
    """SQLite‑backed store for ``BeaconRead`` records."""

    def __init__(
        self,
        db_path: str,
        clock: Callable[[], datetime] = utc_now,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.db_path = db_path
        self.clock = clock
        self.timeout = timeout

    def insert(self, key: str, owner_id: str, name: str, description: str) -> BeaconRead:
        """Persist a new beacon and return it with ``id`` and ``creation_date`` set.

        Raises ``DuplicateKey`` if a beacon with ``key`` already exists.
        """
        created = format_timestamp(self.clock())
        try:
            with get_cursor(self.db_path, self.timeout) as cursor:
                cursor.execute(
                    """
                    INSERT INTO beacons (beacon_key, owner_id, name, description, creation_date)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (key, owner_id, name, description, created),
                )
                beacon_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            if "UNIQUE" in str(exc) and "beacon_key" in str(exc):
                logger.warning("Rejected duplicate beacon key %s", key)
                raise DuplicateKey(key) from exc
            raise
        logger.info("Saved beacon %s for owner %s", beacon_id, owner_id)
        return BeaconRead(
            id=beacon_id,
            key=key,
            owner_id=owner_id,
            name=name,
            description=description,
            creation_date=created,
        )

    def find_by_id(self, beacon_id: int) -> Optional[BeaconRead]:
        rows = self._select("WHERE id = ?", (beacon_id,))
        if not rows:
            logger.debug("No beacon found with ID: %s", beacon_id)
            return None
        return rows[0]

    def find_by_key(self, key: str, partial: bool = False) -> LookupResult[BeaconRead]:
        """Look up a single beacon by key.

        With ``partial`` the key may be any substring of the stored key.
        The result is tagged ``NOT_FOUND`` for zero matches and
        ``AMBIGUOUS`` for more than one; the store never picks one of
        several matches.
        """
        if not key:
            return LookupResult.not_found(key)
        if partial:
            rows = self._select(f"WHERE instr(beacon_key, ?) > 0 {_ORDER} LIMIT 2", (key,), ordered=False)
        else:
            rows = self._select("WHERE beacon_key = ? LIMIT 2", (key,), ordered=False)
        if not rows:
            logger.debug("No beacon found with key: %s", key)
            return LookupResult.not_found(key)
        if len(rows) > 1:
            logger.warning("Key %s matches more than one beacon", key)
            return LookupResult.ambiguous(key)
        return LookupResult.found(key, rows[0])

    def find_by_owner(self, owner_id: str) -> List[BeaconRead]:
        return self._select("WHERE owner_id = ?", (owner_id,))

    def find_by_date(self, day: date) -> List[BeaconRead]:
        """Return all beacons created on the given UTC calendar day."""
        start, end = day_bounds(day)
        return self._select("WHERE creation_date >= ? AND creation_date < ?", (start, end))

    def list_all(self) -> List[BeaconRead]:
        return self._select("", ())

    def count(self) -> int:
        conn = get_connection(self.db_path, self.timeout)
        try:
            row = conn.execute("SELECT COUNT(*) AS total FROM beacons").fetchone()
            return row["total"]
        finally:
            conn.close()

    def _select(self, clause: str, params: tuple, ordered: bool = True) -> List[BeaconRead]:
        query = f"SELECT {_COLUMNS} FROM beacons {clause}"
        if ordered:
            query += f" {_ORDER}"
        conn = get_connection(self.db_path, self.timeout)
        try:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_beacon(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_beacon(row: sqlite3.Row) -> BeaconRead:
        return BeaconRead(
            id=row["id"],
            key=row["beacon_key"],
            owner_id=row["owner_id"],
            name=row["name"],
            description=row["description"],
            creation_date=row["creation_date"],
        )
