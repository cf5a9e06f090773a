"""Display ordering and view models for the transaction list and summary panels.

The presenter never touches a widget toolkit directly. Front ends hand it
surfaces that accept plain view models: a list surface for the rows and two
summary panels (top and bottom) that always receive the same ``SummaryView``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Protocol, Sequence

from .aggregator import Summary, summarize
from .models import Transaction, format_time
from .text import ENGLISH, DisplayText

POSITIVE = "positive"
NEGATIVE = "negative"


@dataclass(frozen=True)
class TransactionRow:
    delete_id: str
    date: str
    time: str
    description: str
    amount: str
    amount_style: str
    type_label: str


@dataclass(frozen=True)
class SummaryView:
    total_income: str
    total_expense: str
    balance: str
    balance_state: str


class ListSurface(Protocol):
    def show_rows(self, rows: Sequence[TransactionRow]) -> None: ...

    def show_empty(self, message: str) -> None: ...


class SummarySurface(Protocol):
    def show_summary(self, view: SummaryView) -> None: ...


def format_amount(value: Decimal, text: DisplayText = ENGLISH, *, signed: bool = False) -> str:
    display = f"{abs(value) if signed else value:,.2f}{text.currency_suffix}"
    if not signed:
        return display
    return f"{'-' if value < 0 else '+'}{display}"


def order_for_display(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Most recent first by date then time; among equal instants the later insertion wins."""
    indexed = list(enumerate(transactions))
    indexed.sort(key=lambda pair: (pair[1].occurred_at, pair[0]), reverse=True)
    return [transaction for _, transaction in indexed]


def build_row(transaction: Transaction, text: DisplayText = ENGLISH) -> TransactionRow:
    signed_amount = transaction.amount if transaction.is_income else -transaction.amount
    return TransactionRow(
        delete_id=transaction.id,
        date=transaction.date.isoformat(),
        time=format_time(transaction.time) or "",
        description=transaction.description,
        amount=format_amount(signed_amount, text, signed=True),
        amount_style=transaction.type,
        type_label=text.type_label(transaction.type),
    )


def build_rows(ordered: Iterable[Transaction], text: DisplayText = ENGLISH) -> List[TransactionRow]:
    return [build_row(transaction, text) for transaction in ordered]


def build_summary(summary: Summary, text: DisplayText = ENGLISH) -> SummaryView:
    return SummaryView(
        total_income=format_amount(summary.total_income, text),
        total_expense=format_amount(summary.total_expense, text),
        balance=format_amount(summary.balance, text),
        balance_state=POSITIVE if summary.balance >= 0 else NEGATIVE,
    )


class Presenter:
    """Pushes rows and totals to the surfaces a front end registers."""

    def __init__(
        self,
        list_surface: ListSurface,
        top_panel: SummarySurface,
        bottom_panel: SummarySurface,
        text: DisplayText = ENGLISH,
    ) -> None:
        self.list_surface = list_surface
        self.top_panel = top_panel
        self.bottom_panel = bottom_panel
        self.text = text

    def render_list(self, ordered: Sequence[Transaction]) -> None:
        if not ordered:
            self.list_surface.show_empty(self.text.no_transactions)
            return
        self.list_surface.show_rows(build_rows(ordered, self.text))

    def render_summary(self, summary: Summary) -> SummaryView:
        view = build_summary(summary, self.text)
        self.top_panel.show_summary(view)
        self.bottom_panel.show_summary(view)
        return view

    def refresh(self, transactions: Iterable[Transaction]) -> None:
        snapshot = tuple(transactions)
        self.render_list(order_for_display(snapshot))
        self.render_summary(summarize(snapshot))
