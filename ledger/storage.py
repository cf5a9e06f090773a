"""Persistence utilities for the ledger core."""

from __future__ import annotations

import json
import logging
from decimal import InvalidOperation
from pathlib import Path
from typing import Any, Iterable, List

from .exceptions import PersistenceError
from .models import Transaction

logger = logging.getLogger(__name__)

STORAGE_KEY = "transactions"


class JSONStorage:
    """Key-value store keeping one JSON document per key, with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self._base_path / f"{key}.json"

    def load(self, key: str) -> Any:
        """Return the decoded document stored under ``key`` or None when absent."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

    def save(self, key: str, payload: Any) -> None:
        path = self.path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, ensure_ascii=False)
                handle.flush()
            # Use replace for atomic move on POSIX; ensures crash-safe persistence.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path


class TransactionRepository:
    """Reads and writes the whole transaction collection under one storage key."""

    def __init__(self, storage: JSONStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> List[Transaction]:
        """Load the stored collection.

        A missing blob yields an empty collection. A blob that cannot be decoded
        into transactions is treated the same way, with a warning, so startup
        never fails on bad data. The blob is left untouched until the next save.
        """
        try:
            payload = self._storage.load(self._key)
        except PersistenceError as exc:
            logger.warning("Ignoring unreadable ledger data: %s", exc)
            return []

        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning(
                "Ignoring ledger data under %r: expected a list, got %s",
                self._key,
                type(payload).__name__,
            )
            return []

        try:
            transactions = [Transaction.from_dict(record) for record in payload]
        except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation) as exc:
            logger.warning("Ignoring malformed ledger data under %r: %r", self._key, exc)
            return []

        ids = [transaction.id for transaction in transactions]
        if len(set(ids)) != len(ids):
            logger.warning("Ignoring malformed ledger data under %r: duplicate ids", self._key)
            return []
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> None:
        self._storage.save(self._key, [transaction.to_dict() for transaction in transactions])
