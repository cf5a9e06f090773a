from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from ledger.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from ledger.store import TransactionStore
from helpers import make_transaction
from conftest import fixed_clock


def test_add_grows_collection_and_persists(store, repository):
    record = make_transaction(store.next_id())
    store.add(record)
    assert len(store) == 1
    assert store.get(record.id) == record
    assert [r.id for r in repository.load()] == [record.id]


def test_add_rejects_duplicate_id(store):
    store.add(make_transaction("1"))
    with pytest.raises(ValidationError):
        store.add(make_transaction("1"))
    assert len(store) == 1


def test_remove_existing_shrinks_collection(store, repository):
    store.add(make_transaction("1"))
    store.add(make_transaction("2"))
    assert store.remove("1") is True
    assert len(store) == 1
    assert "1" not in store
    assert [r.id for r in repository.load()] == ["2"]


def test_remove_unknown_id_is_noop_but_still_saves(store, storage):
    store.add(make_transaction("1"))
    path = storage.path_for("transactions")
    path.unlink()
    assert store.remove("missing") is False
    assert len(store) == 1
    assert path.exists()


def test_get_unknown_raises(store):
    with pytest.raises(RecordNotFoundError):
        store.get("nope")


def test_next_id_is_unique_under_a_frozen_clock(store):
    ids = [store.next_id() for _ in range(3)]
    assert len(set(ids)) == 3
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)
    assert ids[0] == str(int(fixed_clock().timestamp() * 1000))


def test_next_id_skips_past_loaded_ids(repository):
    future = str(int(datetime(2030, 1, 1).timestamp() * 1000))
    repository.save([make_transaction(future)])
    store = TransactionStore(repository, clock=fixed_clock)
    assert int(store.next_id()) == int(future) + 1


def test_store_hydrates_from_repository(repository):
    repository.save([make_transaction("1"), make_transaction("2")])
    store = TransactionStore(repository, clock=fixed_clock)
    assert [r.id for r in store.transactions] == ["1", "2"]


def test_transactions_snapshot_is_read_only(store):
    store.add(make_transaction("1"))
    snapshot = store.transactions
    store.add(make_transaction("2"))
    assert len(snapshot) == 1


def _failing_save(_transactions):
    raise PersistenceError("disk full")


def test_failed_save_leaves_add_invisible(store, repository, monkeypatch, caplog):
    store.add(make_transaction("1"))
    monkeypatch.setattr(repository, "save", _failing_save)
    with caplog.at_level(logging.ERROR, logger="ledger.store"):
        with pytest.raises(PersistenceError):
            store.add(make_transaction("2"))
    assert [r.id for r in store.transactions] == ["1"]
    assert "2" not in store
    assert any("Saving ledger data failed" in r.getMessage() for r in caplog.records)


def test_failed_save_keeps_removed_record(store, repository, monkeypatch):
    store.add(make_transaction("1"))
    monkeypatch.setattr(repository, "save", _failing_save)
    with pytest.raises(PersistenceError):
        store.remove("1")
    assert store.get("1").id == "1"
    monkeypatch.undo()
    assert [r.id for r in repository.load()] == ["1"]


def test_concurrent_adds_are_all_kept(store, repository):
    def add_one(_):
        return store.add(make_transaction(store.next_id())).id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(add_one, range(40)))

    assert len(set(ids)) == 40
    assert len(store) == 40
    assert {r.id for r in repository.load()} == set(ids)
