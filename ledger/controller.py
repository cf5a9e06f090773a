"""Wires form submissions and delete requests to the store and presenter."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Dict, Mapping, Optional, Protocol

from .exceptions import ValidationError
from .models import INCOME, Transaction
from .presenter import Presenter
from .store import Clock, TransactionStore
from .text import ENGLISH, DisplayText
from .validators import build_transaction

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"
SEVERITIES = {SUCCESS, ERROR, WARNING, INFO}

# Transient notifications disappear after this delay.
TOAST_DURATION_MS = 3000

Confirm = Callable[[str], bool]
Notify = Callable[[str, str], None]


class FormSurface(Protocol):
    def read_fields(self) -> Mapping[str, object]: ...

    def reset_fields(self, defaults: Mapping[str, str]) -> None: ...


def default_form(today: date) -> Dict[str, str]:
    return {"description": "", "amount": "", "date": today.isoformat(), "type": INCOME}


class LedgerController:
    def __init__(
        self,
        store: TransactionStore,
        presenter: Optional[Presenter] = None,
        *,
        confirm: Confirm,
        notify: Notify,
        form: Optional[FormSurface] = None,
        text: DisplayText = ENGLISH,
        clock: Clock = datetime.now,
    ) -> None:
        self.store = store
        self.presenter = presenter
        self.confirm = confirm
        self.notify = notify
        self.form = form
        self.text = text
        self._clock = clock

    def add(self, fields: Mapping[str, object]) -> Transaction:
        """Validate ``fields`` and commit a new transaction; raises ValidationError."""
        record = build_transaction(fields, id=self.store.next_id(), now=self._clock())
        self.store.add(record)
        self.refresh()
        return record

    def on_add_submit(self, fields: Optional[Mapping[str, object]] = None) -> Optional[Transaction]:
        """Handle the add button: commit, reset the form and notify, or report the error."""
        if fields is None:
            if self.form is None:
                raise RuntimeError("No form surface attached to the controller")
            fields = self.form.read_fields()
        try:
            record = self.add(fields)
        except ValidationError as exc:
            logger.info("Rejected transaction: %s", exc)
            self.notify(self.text.invalid, ERROR)
            return None

        if self.form is not None:
            self.form.reset_fields(default_form(self._clock().date()))
        self.notify(self.text.added, SUCCESS)
        return record

    def on_delete_request(self, transaction_id: str) -> bool:
        """Ask for confirmation, then delete; declining does nothing at all."""
        if not self.confirm(self.text.confirm_delete):
            return False
        self.store.remove(transaction_id)
        self.refresh()
        self.notify(self.text.deleted, SUCCESS)
        return True

    def refresh(self) -> None:
        if self.presenter is not None:
            self.presenter.refresh(self.store.transactions)
