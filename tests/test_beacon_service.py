"""Tests for ``BeaconService``."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from beacon_api.app.core.exceptions import (
    AmbiguousResult,
    BeaconCreationFailed,
    BeaconNotFound,
    StorageError,
)
from beacon_api.app.services.beacon_service import BeaconService
from beacon_api.app.services.beacon_store import BeaconStore
from beacon_api.app.services.lookup import LookupStatus
from beacon_api.app.services.rendezvous_store import RendezvousStore
from conftest import BASE_TIME, ScriptedClock, SequenceKeys


def run(coro):
    return asyncio.run(coro)


def test_create_beacon_scenario(service) -> None:
    beacon = run(service.create("u1", "n", "d"))

    assert len(beacon.key) == 26
    assert (beacon.owner_id, beacon.name, beacon.description) == ("u1", "n", "d")
    assert run(service.find_beacons_for_owner("u1")) == [beacon]
    assert run(service.list_beacons()) == [beacon]
    assert run(service.get_beacon(beacon.id)) == beacon


def test_rendezvous_scenario(service) -> None:
    beacon = run(service.create("u1", "n", "d"))

    recorded = run(service.record_rendezvous(beacon.key, "203.0.113.5"))
    history = service.rendezvous.find_by_key(beacon.key)

    assert history == [recorded]
    assert history[0].remote_address == "203.0.113.5"
    assert history[0].creation_date >= beacon.creation_date
    assert run(service.find_rendezvous_for_beacon(beacon.key)) == history
    assert run(service.get_rendezvous(recorded.id)) == recorded


def test_rendezvous_for_unknown_key_records_nothing(service) -> None:
    run(service.create("u1", "n", "d"))

    with pytest.raises(BeaconNotFound):
        run(service.record_rendezvous("nonexistent", "203.0.113.5"))

    assert service.rendezvous.count() == 0


def test_rendezvous_requires_the_exact_key(service) -> None:
    beacon = run(service.create("u1", "n", "d"))

    with pytest.raises(BeaconNotFound):
        run(service.record_rendezvous(beacon.key[:10], "203.0.113.5"))

    assert service.rendezvous.count() == 0


def test_create_retries_after_key_collision(beacon_store, rendezvous_store) -> None:
    beacon_store.insert("taken", "u0", "n", "d")
    keys = SequenceKeys("taken", "taken", "fresh")
    service = BeaconService(beacon_store, rendezvous_store, key_generator=keys, max_attempts=3)

    beacon = run(service.create("u1", "n", "d"))

    assert beacon.key == "fresh"
    assert keys.calls == 3
    assert beacon_store.count() == 2


def test_create_gives_up_after_max_attempts(beacon_store, rendezvous_store) -> None:
    beacon_store.insert("taken", "u0", "n", "d")
    keys = SequenceKeys("taken", "taken", "taken", "never-used")
    service = BeaconService(beacon_store, rendezvous_store, key_generator=keys, max_attempts=3)

    with pytest.raises(BeaconCreationFailed) as excinfo:
        run(service.create("u1", "n", "d"))

    assert excinfo.value.attempts == 3
    assert keys.calls == 3
    assert beacon_store.count() == 1


def test_max_attempts_must_be_positive(beacon_store, rendezvous_store) -> None:
    with pytest.raises(ValueError):
        BeaconService(beacon_store, rendezvous_store, max_attempts=0)


def test_find_beacon_outcomes(beacon_store, rendezvous_store) -> None:
    service = BeaconService(beacon_store, rendezvous_store, key_generator=SequenceKeys("abc111", "abc222"))
    first = run(service.create("u1", "n", "d"))
    run(service.create("u2", "n", "d"))

    assert run(service.find_beacon("abc111")) == first
    assert run(service.find_beacon("111", partial=True)) == first
    assert run(service.find_beacon("nope")) is None
    assert run(service.lookup_beacon("abc", partial=True)).status is LookupStatus.AMBIGUOUS
    with pytest.raises(AmbiguousResult):
        run(service.find_beacon("abc", partial=True))


def test_find_rendezvous_for_unknown_beacon(service) -> None:
    with pytest.raises(BeaconNotFound):
        run(service.find_rendezvous_for_beacon("missing"))


def test_history_is_sorted_for_scrambled_inserts(db_path) -> None:
    beacon_clock = ScriptedClock([BASE_TIME])
    rendezvous_clock = ScriptedClock(
        [BASE_TIME + timedelta(minutes=3), BASE_TIME + timedelta(minutes=1), BASE_TIME + timedelta(minutes=2)]
    )
    service = BeaconService(
        BeaconStore(db_path, clock=beacon_clock),
        RendezvousStore(db_path, clock=rendezvous_clock),
        key_generator=SequenceKeys("k1"),
    )
    run(service.create("u1", "n", "d"))
    for address in ("third", "first", "second"):
        run(service.record_rendezvous("k1", address))

    history = run(service.find_rendezvous_for_beacon("k1"))

    assert [r.remote_address for r in history] == ["first", "second", "third"]
    assert [r.remote_address for r in run(service.find_rendezvous_by_date(BASE_TIME.date()))] == [
        "first",
        "second",
        "third",
    ]
    assert len(run(service.find_beacons_by_date(BASE_TIME.date()))) == 1


def test_storage_failures_are_wrapped(tmp_path) -> None:
    # No migrations applied, so every query hits a missing table.
    path = str(tmp_path / "empty.db")
    service = BeaconService(BeaconStore(path), RendezvousStore(path))

    with pytest.raises(StorageError):
        run(service.list_beacons())
    with pytest.raises(StorageError):
        run(service.create("u1", "n", "d"))
