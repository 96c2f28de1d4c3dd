"""Tests for ``RendezvousStore``."""

from __future__ import annotations

from datetime import date, timedelta

from beacon_api.app.services.rendezvous_store import RendezvousStore
from conftest import BASE_TIME, ScriptedClock


def test_insert_assigns_id_and_creation_date(rendezvous_store) -> None:
    created = rendezvous_store.insert("k1", "203.0.113.5")

    assert created.id > 0
    assert created.beacon_key == "k1"
    assert created.remote_address == "203.0.113.5"
    assert rendezvous_store.find_by_id(created.id) == created
    assert rendezvous_store.find_by_id(created.id + 1) is None


def test_find_by_key_is_sorted_oldest_first(db_path) -> None:
    clock = ScriptedClock(
        [BASE_TIME + timedelta(seconds=30), BASE_TIME, BASE_TIME + timedelta(seconds=10), BASE_TIME]
    )
    store = RendezvousStore(db_path, clock=clock)
    store.insert("k1", "10.0.0.3")
    store.insert("k1", "10.0.0.1")
    store.insert("k1", "10.0.0.2")
    store.insert("k2", "10.0.0.9")

    history = store.find_by_key("k1")

    assert [r.remote_address for r in history] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
    assert [r.creation_date for r in history] == sorted(r.creation_date for r in history)
    assert store.find_by_key("unknown") == []


def test_find_by_date(db_path) -> None:
    clock = ScriptedClock([BASE_TIME, BASE_TIME - timedelta(days=1), BASE_TIME - timedelta(hours=1)])
    store = RendezvousStore(db_path, clock=clock)
    store.insert("k1", "a")
    store.insert("k1", "b")
    store.insert("k2", "c")

    assert [r.remote_address for r in store.find_by_date(date(2026, 10, 19))] == ["c", "a"]
    assert [r.remote_address for r in store.find_by_date(date(2026, 10, 18))] == ["b"]


def test_count(rendezvous_store) -> None:
    rendezvous_store.insert("k1", "a")
    rendezvous_store.insert("k1", "b")
    rendezvous_store.insert("k2", "c")

    assert rendezvous_store.count() == 3
    assert rendezvous_store.count("k1") == 2
    assert rendezvous_store.count("missing") == 0
