"""Pytest configuration for the Beacon API test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List

import pytest

from beacon_api.app.core.db import init_db
from beacon_api.app.services.beacon_service import BeaconService
from beacon_api.app.services.beacon_store import BeaconStore
from beacon_api.app.services.rendezvous_store import RendezvousStore

BASE_TIME = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class ScriptedClock:
    """Clock returning the given instants in order, then ticking forward."""

    def __init__(self, moments: Iterable[datetime] = ()) -> None:
        self.moments: List[datetime] = list(moments)
        self.last = BASE_TIME

    def __call__(self) -> datetime:
        if self.moments:
            self.last = self.moments.pop(0)
        else:
            self.last = self.last + timedelta(seconds=1)
        return self.last


class SequenceKeys:
    """Key generator handing out a fixed sequence of keys."""

    def __init__(self, *keys: str) -> None:
        self.keys = list(keys)
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return self.keys.pop(0)


@pytest.fixture
def db_path(tmp_path) -> str:
    path = str(tmp_path / "beacons.db")
    init_db(path)
    return path


@pytest.fixture
def clock() -> ScriptedClock:
    return ScriptedClock()


@pytest.fixture
def beacon_store(db_path, clock) -> BeaconStore:
    return BeaconStore(db_path, clock=clock)


@pytest.fixture
def rendezvous_store(db_path, clock) -> RendezvousStore:
    return RendezvousStore(db_path, clock=clock)


@pytest.fixture
def service(beacon_store, rendezvous_store) -> BeaconService:
    return BeaconService(beacon_store, rendezvous_store)
