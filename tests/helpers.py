from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional

from ledger.models import INCOME, Transaction


def make_transaction(
    id: str,
    amount: str = "10.00",
    *,
    kind: str = INCOME,
    on: str = "2024-01-01",
    at: Optional[str] = "12:00",
    description: str = "Entry",
) -> Transaction:
    return Transaction(
        id=id,
        description=description,
        amount=Decimal(amount),
        date=date.fromisoformat(on),
        time=time.fromisoformat(at) if at else None,
        type=kind,
    )
