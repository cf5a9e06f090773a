from __future__ import annotations

import json
import logging
from datetime import time

import pytest

from ledger.exceptions import PersistenceError
from ledger.models import EXPENSE
from ledger.storage import STORAGE_KEY, JSONStorage, TransactionRepository
from helpers import make_transaction


def test_missing_blob_loads_as_empty(repository):
    assert repository.load() == []


def test_round_trip_reproduces_collection(repository):
    records = [
        make_transaction("1", "1000", on="2024-01-01"),
        make_transaction("2", "400", kind=EXPENSE, on="2024-01-02", at=None),
    ]
    repository.save(records)
    loaded = repository.load()
    assert {r.id: r for r in loaded} == {r.id: r for r in records}


def test_blob_lives_under_fixed_key(storage, repository):
    repository.save([make_transaction("1")])
    path = storage.path_for(STORAGE_KEY)
    assert path.name == "transactions.json"
    assert json.loads(path.read_text(encoding="utf-8"))[0]["id"] == "1"


def test_save_overwrites_previous_blob(repository):
    repository.save([make_transaction("1"), make_transaction("2")])
    repository.save([make_transaction("3")])
    assert [r.id for r in repository.load()] == ["3"]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"id": "1"}',
        '[{"id": "1", "description": "x"}]',
        '[{"id": "1", "description": "x", "amount": "abc", "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "x", "amount": "NaN", "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "x", "amount": "Infinity", "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "x", "amount": "-inf", "date": "2024-01-01", "type": "expense"}]',
        '[{"id": "1", "description": "x", "amount": NaN, "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "  ", "amount": 10, "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "x", "amount": -5, "date": "2024-01-01", "type": "expense"}]',
        '[{"id": "1", "description": "x", "amount": 0, "date": "2024-01-01", "type": "income"}]',
        '[{"id": "1", "description": "a", "amount": 1, "date": "2024-01-01", "type": "income"},'
        ' {"id": "1", "description": "b", "amount": 2, "date": "2024-01-02", "type": "expense"}]',
    ],
)
def test_malformed_blob_falls_back_to_empty_with_warning(storage, repository, caplog, content):
    storage.path_for(STORAGE_KEY).write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="ledger.storage"):
        assert repository.load() == []
    assert any("Ignoring" in record.getMessage() for record in caplog.records)


def test_browser_clock_times_load_without_discarding_collection(storage, repository):
    blob = [
        {"id": "1", "description": "Lunch", "amount": 12.5, "date": "2024-01-01", "time": "02:05 PM", "type": "expense"},
        {"id": "2", "description": "Salary", "amount": 1000, "date": "2024-01-01", "time": "9:30:15 am", "type": "income"},
        {"id": "3", "description": "Tip", "amount": 3, "date": "2024-01-02", "time": "not a time", "type": "income"},
    ]
    storage.path_for(STORAGE_KEY).write_text(json.dumps(blob), encoding="utf-8")
    loaded = {record.id: record for record in repository.load()}
    assert loaded["1"].time == time(14, 5)
    assert loaded["2"].time == time(9, 30)
    assert loaded["3"].time is None


def test_json_storage_raises_persistence_error_on_corrupt_document(storage):
    storage.path_for("other").write_text("[", encoding="utf-8")
    with pytest.raises(PersistenceError):
        storage.load("other")


def test_custom_key_is_isolated(storage):
    TransactionRepository(storage, "archive").save([make_transaction("9")])
    assert TransactionRepository(storage).load() == []
    assert storage.path_for("archive").exists()


def test_json_storage_creates_base_directory(tmp_path):
    JSONStorage(tmp_path / "nested" / "dir")
    assert (tmp_path / "nested" / "dir").is_dir()
