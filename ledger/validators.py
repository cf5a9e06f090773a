"""Validation helpers that turn raw form fields into transactions."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Mapping, Optional

from .exceptions import ValidationError
from .models import INCOME, TRANSACTION_TYPES, Transaction, parse_date

DESCRIPTION_MAX_LENGTH = 200


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def sanitize_amount_input(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).replace(",", "").strip()


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    text = sanitize_amount_input(raw)
    if not text:
        raise ValidationError(f"{field} is required")
    try:
        amount = Decimal(text)
        if not amount.is_finite():
            raise InvalidOperation(text)
        amount = _quantize_two_decimals(amount)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_date(value: object, field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must use the YYYY-MM-DD format") from exc


def validate_type(value: object, field: str = "type") -> str:
    if value is None or value == "":
        return INCOME
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    if canonical not in TRANSACTION_TYPES:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(TRANSACTION_TYPES))}")
    return canonical


def build_transaction(
    fields: Mapping[str, object], *, id: str, now: Optional[datetime] = None
) -> Transaction:
    """Validate raw form fields and stamp a new transaction.

    ``now`` supplies the creation time recorded on the transaction (minute
    precision). Nothing is created when any field is rejected.
    """
    description = validate_required_str(
        fields.get("description"), "description", DESCRIPTION_MAX_LENGTH
    )
    amount = parse_amount(fields.get("amount"))
    occurred_on = validate_date(fields.get("date"))
    kind = validate_type(fields.get("type"))
    stamp = (now or datetime.now()).time().replace(second=0, microsecond=0)
    return Transaction(
        id=id,
        description=description,
        amount=amount,
        date=occurred_on,
        time=stamp,
        type=kind,
    )
