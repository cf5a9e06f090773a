"""Display text packs used by the presenter, controller and front ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .models import EXPENSE, INCOME


@dataclass(frozen=True)
class DisplayText:
    income: str
    expense: str
    balance: str
    no_transactions: str
    added: str
    deleted: str
    invalid: str
    confirm_delete: str
    delete: str
    yes: str
    no: str
    currency_suffix: str

    def type_label(self, kind: str) -> str:
        return {INCOME: self.income, EXPENSE: self.expense}.get(kind, kind)


ENGLISH = DisplayText(
    income="Income",
    expense="Expense",
    balance="Balance",
    no_transactions="No transactions yet.",
    added="Transaction added successfully!",
    deleted="Transaction deleted successfully!",
    invalid="Please fill in every field correctly. (The amount must be a positive number)",
    confirm_delete="Are you sure you want to delete this transaction?",
    delete="Delete",
    yes="Yes",
    no="No",
    currency_suffix="",
)

KHMER = DisplayText(
    income="ចំណូល",
    expense="ចំណាយ",
    balance="សមតុល្យ",
    no_transactions="មិនទាន់មានប្រតិបត្តិការនៅឡើយទេ។",
    added="ប្រតិបត្តិការត្រូវបានបន្ថែមដោយជោគជ័យ!",
    deleted="ប្រតិបត្តិការត្រូវបានលុបដោយជោគជ័យ!",
    invalid="សូមបញ្ចូលព័ត៌មានប្រតិបត្តិការឱ្យបានពេញលេញ និងត្រឹមត្រូវ។ (ចំនួនទឹកប្រាក់ត្រូវតែជាលេខវិជ្ជមាន)",
    confirm_delete="តើអ្នកពិតជាចង់លុបប្រតិបត្តិការនេះមែនទេ?",
    delete="លុប",
    yes="បាទ/ចាស",
    no="ទេ",
    currency_suffix=" ៛",
)

TEXT_PACKS: Dict[str, DisplayText] = {"en": ENGLISH, "km": KHMER}


def text_for(locale: str) -> DisplayText:
    """Return the text pack for ``locale``, falling back to English."""
    return TEXT_PACKS.get((locale or "").strip().lower(), ENGLISH)
