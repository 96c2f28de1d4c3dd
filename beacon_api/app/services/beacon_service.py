"""
Business logic for beacons and their rendezvous history.

``BeaconService`` receives its stores and key generator at
construction; nothing here is held in module state.  Store methods
block on SQLite I/O, so every call is pushed to a worker thread with
``run_in_threadpool`` and the event loop stays free.  No lock is held
across those calls.

Storage failures never leave this module as ``sqlite3`` exceptions:
``DuplicateKey`` is retried, everything else unexpected is wrapped in
``StorageError``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Any, Callable, List, Optional, TypeVar

from fastapi.concurrency import run_in_threadpool

from beacon_api.app.core.exceptions import BeaconCreationFailed, BeaconNotFound, DuplicateKey, StorageError
from beacon_api.app.schemas.beacon import BeaconRead
from beacon_api.app.schemas.rendezvous import RendezvousRead
from beacon_api.app.services.beacon_store import BeaconStore
from beacon_api.app.services.key_generator import KeyGenerator
from beacon_api.app.services.lookup import LookupResult
from beacon_api.app.services.rendezvous_store import RendezvousStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


class BeaconService:
    """Creates beacons and records rendezvous against them."""

    def __init__(
        self,
        beacons: BeaconStore,
        rendezvous: RendezvousStore,
        key_generator: Optional[KeyGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.beacons = beacons
        self.rendezvous = rendezvous
        self.key_generator = key_generator or KeyGenerator()
        self.max_attempts = max_attempts

    async def create(self, owner_id: str, name: str, description: str) -> BeaconRead:
        """Issue a new beacon for ``owner_id``.

        A freshly generated key that collides with an existing one is
        discarded and a new key is drawn, up to ``max_attempts`` times in
        total.  Raises ``BeaconCreationFailed`` when every attempt
        collided.
        """
        for attempt in range(1, self.max_attempts + 1):
            key = self.key_generator.generate()
            try:
                beacon = await self._call(self.beacons.insert, key, owner_id, name, description)
            except DuplicateKey:
                logger.warning("Key collision on attempt %s/%s for owner %s", attempt, self.max_attempts, owner_id)
                continue
            logger.info("Created beacon %s for owner %s", beacon.id, owner_id)
            return beacon
        logger.error("Giving up on beacon creation for owner %s after %s attempts", owner_id, self.max_attempts)
        raise BeaconCreationFailed(self.max_attempts)

    async def record_rendezvous(self, beacon_key: str, remote_address: str) -> RendezvousRead:
        """Record that ``beacon_key`` was fetched from ``remote_address``.

        Raises ``BeaconNotFound`` and writes nothing when no beacon has
        exactly this key.  The existence check and the insert are two
        separate transactions.  That is safe only because beacons are
        never deleted: once the check passes the beacon stays present.
        """
        lookup = await self._call(self.beacons.find_by_key, beacon_key)
        beacon = lookup.unwrap()
        if beacon is None:
            logger.info("Rendezvous for unknown beacon %s from %s ignored", beacon_key, remote_address)
            raise BeaconNotFound(beacon_key)
        return await self._call(self.rendezvous.insert, beacon.key, remote_address)

    async def list_beacons(self) -> List[BeaconRead]:
        return await self._call(self.beacons.list_all)

    async def get_beacon(self, beacon_id: int) -> Optional[BeaconRead]:
        return await self._call(self.beacons.find_by_id, beacon_id)

    async def lookup_beacon(self, beacon_key: str, partial: bool = False) -> LookupResult[BeaconRead]:
        return await self._call(self.beacons.find_by_key, beacon_key, partial)

    async def find_beacon(self, beacon_key: str, partial: bool = False) -> Optional[BeaconRead]:
        """Return the beacon for ``beacon_key`` or ``None``.

        Raises ``AmbiguousResult`` if a partial key matches several
        beacons.
        """
        lookup = await self.lookup_beacon(beacon_key, partial)
        return lookup.unwrap()

    async def find_beacons_for_owner(self, owner_id: str) -> List[BeaconRead]:
        return await self._call(self.beacons.find_by_owner, owner_id)

    async def find_beacons_by_date(self, day: date) -> List[BeaconRead]:
        return await self._call(self.beacons.find_by_date, day)

    async def find_rendezvous_for_beacon(self, beacon_key: str) -> List[RendezvousRead]:
        """Return the rendezvous history of a beacon, oldest first.

        Raises ``BeaconNotFound`` if the beacon does not exist.
        """
        lookup = await self._call(self.beacons.find_by_key, beacon_key)
        if not lookup.is_found:
            raise BeaconNotFound(beacon_key)
        return await self._call(self.rendezvous.find_by_key, beacon_key)

    async def get_rendezvous(self, rendezvous_id: int) -> Optional[RendezvousRead]:
        return await self._call(self.rendezvous.find_by_id, rendezvous_id)

    async def find_rendezvous_by_date(self, day: date) -> List[RendezvousRead]:
        return await self._call(self.rendezvous.find_by_date, day)

    @staticmethod
    async def _call(func: Callable[..., T], *args: Any) -> T:
        try:
            return await run_in_threadpool(func, *args)
        except sqlite3.Error as exc:
            logger.exception("Storage failure in %s", getattr(func, "__name__", func))
            raise StorageError(str(exc)) from exc
