"""Income, expense and balance totals over a transaction collection."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable

from .models import INCOME, Transaction

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal

    @classmethod
    def empty(cls) -> "Summary":
        return cls(ZERO, ZERO, ZERO)

    def __add__(self, other: "Summary") -> "Summary":
        if not isinstance(other, Summary):
            return NotImplemented
        return Summary(
            total_income=self.total_income + other.total_income,
            total_expense=self.total_expense + other.total_expense,
            balance=self.balance + other.balance,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_income": f"{self.total_income:.2f}",
            "total_expense": f"{self.total_expense:.2f}",
            "balance": f"{self.balance:.2f}",
        }


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """Sum incomes and expenses; balance is income minus expense."""
    total_income = ZERO
    total_expense = ZERO
    for transaction in transactions:
        if transaction.type == INCOME:
            total_income += transaction.amount
        else:
            total_expense += transaction.amount
    return Summary(total_income, total_expense, total_income - total_expense)
