"""Data models for the ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Optional

__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_TYPES",
    "Transaction",
    "format_time",
    "parse_date",
    "parse_time",
]

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = {INCOME, EXPENSE}

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
# Clock formats the browser page wrote with toLocaleTimeString.
LEGACY_TIME_FORMATS = ("%I:%M %p", "%I:%M:%S %p")


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date."""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def parse_time(value: Optional[str]) -> Optional[time]:
    """Parse ``HH:MM`` (seconds tolerated) into a minute-precision time.

    12-hour browser times such as ``02:05 PM`` are accepted too. Anything else
    yields None; the time only orders entries within a date.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        parsed = time.fromisoformat(text)
    except ValueError:
        for fmt in LEGACY_TIME_FORMATS:
            try:
                parsed = datetime.strptime(text.upper(), fmt).time()
                break
            except ValueError:
                continue
        else:
            return None
    return parsed.replace(second=0, microsecond=0, tzinfo=None)


def format_time(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(TIME_FORMAT)


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: Decimal
    date: date
    time: Optional[time]
    type: str

    @property
    def is_income(self) -> bool:
        return self.type == INCOME

    @property
    def occurred_at(self) -> datetime:
        """Combined date and time instant; unknown times count as midnight."""
        return datetime.combine(self.date, self.time or time(0, 0))

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the transaction to JSON-friendly natives."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": f"{self.amount:.2f}",
            "date": self.date.strftime(DATE_FORMAT),
            "time": format_time(self.time),
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Hydrate a Transaction from JSON-native data.

        Blobs written by the browser page store ``amount`` as a JSON number,
        may omit ``time`` or hold a 12-hour clock time; those shapes are
        accepted. Records breaking the transaction invariants raise ValueError.
        """
        kind = data["type"]
        if kind not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type {kind!r}")
        description = data["description"]
        if not isinstance(description, str) or not description.strip():
            raise ValueError("Transaction description cannot be empty")
        amount = Decimal(str(data["amount"]))
        if not amount.is_finite() or amount <= 0:
            raise ValueError(f"Transaction amount must be a positive number, got {amount}")
        return cls(
            id=str(data["id"]),
            description=description,
            amount=amount,
            date=parse_date(data["date"]),
            time=parse_time(data.get("time")),
            type=kind,
        )
