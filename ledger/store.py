"""In-memory transaction store mirrored to persistence after every mutation."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Iterator, Tuple

from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .models import Transaction
from .storage import TransactionRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TransactionStore:
    """Owns the transaction collection and mediates persistence.

    Mutations are saved before they become visible, so a failed write leaves
    the in-memory collection as it was. A lock serialises mutations and saves
    for hosts that handle requests on several threads.
    """

    def __init__(self, repository: TransactionRepository, clock: Clock = datetime.now) -> None:
        self._repository = repository
        self._clock = clock
        self._lock = threading.RLock()
        self._transactions: Dict[str, Transaction] = {}
        self._last_id = 0
        self.load()  # Hydrate in-memory cache from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(self, record: Transaction) -> Transaction:
        with self._lock:
            if record.id in self._transactions:
                raise ValidationError(f"Transaction {record.id} already exists")
            updated = {**self._transactions, record.id: record}
            self._commit(updated)
            self._remember_id(record.id)
        logger.info("Added %s %s (%s)", record.type, record.amount, record.id)
        return record

    def remove(self, transaction_id: str) -> bool:
        """Drop the transaction with ``transaction_id``; unknown ids are ignored."""
        with self._lock:
            removed = transaction_id in self._transactions
            updated = {
                key: record for key, record in self._transactions.items() if key != transaction_id
            }
            self._commit(updated)
        if removed:
            logger.info("Removed transaction %s", transaction_id)
        else:
            logger.debug("No transaction %s to remove", transaction_id)
        return removed

    def get(self, transaction_id: str) -> Transaction:
        try:
            return self._transactions[transaction_id]
        except KeyError as exc:
            raise RecordNotFoundError(f"Transaction {transaction_id} not found") from exc

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._transactions.values())

    def next_id(self) -> str:
        """Return a new creation-time id, kept strictly increasing within the store."""
        with self._lock:
            candidate = int(self._clock().timestamp() * 1000)
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            self._last_id = candidate
            return str(candidate)

    def load(self) -> None:
        """Replace the in-memory collection with what persistence holds."""
        with self._lock:
            self._transactions = {record.id: record for record in self._repository.load()}
            for transaction_id in self._transactions:
                self._remember_id(transaction_id)

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    # Internal helpers -----------------------------------------------------
    def _remember_id(self, transaction_id: str) -> None:
        if transaction_id.isdigit():
            self._last_id = max(self._last_id, int(transaction_id))

    def _commit(self, updated: Dict[str, Transaction]) -> None:
        try:
            self._repository.save(updated.values())
        except PersistenceError:
            logger.error("Saving ledger data failed", exc_info=True)
            raise
        # Readers only ever see a fully saved mapping; it is swapped in whole.
        self._transactions = updated
