from __future__ import annotations

from datetime import datetime
from typing import List, Sequence, Tuple

import pytest

from ledger.presenter import Presenter, SummaryView, TransactionRow
from ledger.storage import JSONStorage, TransactionRepository
from ledger.store import TransactionStore

FIXED_NOW = datetime(2024, 1, 5, 9, 30, 45)


def fixed_clock() -> datetime:
    return FIXED_NOW


class RecordingList:
    def __init__(self) -> None:
        self.rows: List[TransactionRow] = []
        self.placeholder = None

    def show_rows(self, rows: Sequence[TransactionRow]) -> None:
        self.rows = list(rows)
        self.placeholder = None

    def show_empty(self, message: str) -> None:
        self.rows = []
        self.placeholder = message


class RecordingPanel:
    def __init__(self) -> None:
        self.views: List[SummaryView] = []

    def show_summary(self, view: SummaryView) -> None:
        self.views.append(view)

    @property
    def last(self) -> SummaryView:
        return self.views[-1]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def __call__(self, message: str, severity: str) -> None:
        self.messages.append((message, severity))


@pytest.fixture
def storage(tmp_path) -> JSONStorage:
    return JSONStorage(tmp_path / "data")


@pytest.fixture
def repository(storage) -> TransactionRepository:
    return TransactionRepository(storage)


@pytest.fixture
def store(repository) -> TransactionStore:
    return TransactionStore(repository, clock=fixed_clock)


@pytest.fixture
def surfaces():
    return RecordingList(), RecordingPanel(), RecordingPanel()


@pytest.fixture
def presenter(surfaces) -> Presenter:
    return Presenter(*surfaces)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
