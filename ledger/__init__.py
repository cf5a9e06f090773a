"""Core business logic package for the ledger."""

from .aggregator import Summary, summarize
from .controller import LedgerController
from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .models import EXPENSE, INCOME, Transaction
from .presenter import Presenter, order_for_display
from .settings import Settings
from .storage import JSONStorage, TransactionRepository
from .store import TransactionStore

__all__ = [
    "EXPENSE",
    "INCOME",
    "JSONStorage",
    "LedgerController",
    "PersistenceError",
    "Presenter",
    "RecordNotFoundError",
    "Settings",
    "Summary",
    "Transaction",
    "TransactionRepository",
    "TransactionStore",
    "ValidationError",
    "order_for_display",
    "summarize",
]
