"""Console interface for the ledger."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ledger.aggregator import summarize
from ledger.controller import ERROR, SUCCESS, LedgerController
from ledger.exceptions import PersistenceError, ValidationError
from ledger.logging_setup import configure_logging
from ledger.models import INCOME, TRANSACTION_TYPES
from ledger.presenter import Presenter, SummaryView, TransactionRow
from ledger.settings import Settings
from ledger.storage import JSONStorage, TransactionRepository
from ledger.store import TransactionStore
from ledger.text import TEXT_PACKS, DisplayText, text_for


class ConsoleList:
    def show_rows(self, rows: Sequence[TransactionRow]) -> None:
        for row in rows:
            when = f"{row.date} {row.time}".rstrip()
            print(f"[{row.delete_id}] {when:<16} {row.amount:>16}  {row.type_label:<8} {row.description}")

    def show_empty(self, message: str) -> None:
        print(message)


class ConsoleSummary:
    def __init__(self, text: DisplayText) -> None:
        self.text = text

    def show_summary(self, view: SummaryView) -> None:
        marker = "" if view.balance_state == "positive" else " (!)"
        print(
            f"{self.text.income}: {view.total_income} | "
            f"{self.text.expense}: {view.total_expense} | "
            f"{self.text.balance}: {view.balance}{marker}"
        )


class _Silent:
    def show_rows(self, rows: Sequence[TransactionRow]) -> None:
        pass

    def show_empty(self, message: str) -> None:
        pass

    def show_summary(self, view: SummaryView) -> None:
        pass


def _console_notify(message: str, severity: str) -> None:
    print(message, file=sys.stderr if severity == ERROR else sys.stdout)


def _prompt_confirm(read: Optional[Callable[[str], str]] = None) -> Callable[[str], bool]:
    def confirm(message: str) -> bool:
        try:
            answer = (read or input)(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    return confirm


def _load_store(data_dir: Path, key: str) -> TransactionStore:
    storage = JSONStorage(data_dir)
    return TransactionStore(TransactionRepository(storage, key))


def handle_add(args: argparse.Namespace, controller: LedgerController) -> int:
    fields = {
        "description": args.description,
        "amount": args.amount,
        "date": args.date or date.today().isoformat(),
        "type": args.type,
    }
    try:
        record = controller.add(fields)
    except ValidationError as exc:
        controller.notify(f"{controller.text.invalid}\n{exc}", ERROR)
        return 1
    controller.notify(f"{controller.text.added} [{record.id}]", SUCCESS)
    return 0


def handle_list(args: argparse.Namespace, controller: LedgerController) -> int:
    # The console only needs one summary panel, printed after the rows.
    Presenter(ConsoleList(), ConsoleSummary(controller.text), _Silent(), controller.text).refresh(
        controller.store.transactions
    )
    return 0


def handle_delete(args: argparse.Namespace, controller: LedgerController) -> int:
    controller.on_delete_request(args.id)
    return 0


def handle_summary(args: argparse.Namespace, controller: LedgerController) -> int:
    presenter = Presenter(_Silent(), ConsoleSummary(controller.text), _Silent(), controller.text)
    presenter.render_summary(summarize(controller.store.transactions))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ledger CLI")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory to store JSON data (default: $LEDGER_DATA_DIR or ./data)",
    )
    parser.add_argument("--locale", choices=sorted(TEXT_PACKS), help="Display language")
    parser.add_argument("--log-level", help="Logging level (default: $LEDGER_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Record a new transaction")
    add_parser.add_argument("description")
    add_parser.add_argument("amount")
    add_parser.add_argument("--date", help="YYYY-MM-DD, defaults to today")
    add_parser.add_argument("--type", choices=sorted(TRANSACTION_TYPES), default=INCOME)

    subparsers.add_parser("list", help="List transactions, newest first")

    delete_parser = subparsers.add_parser("delete", help="Delete a transaction")
    delete_parser.add_argument("id")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    subparsers.add_parser("summary", help="Show income, expense and balance totals")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    text = text_for(args.locale or settings.locale)
    data_dir = args.data_dir or settings.data_dir

    handlers = {
        "add": handle_add,
        "list": handle_list,
        "delete": handle_delete,
        "summary": handle_summary,
    }

    try:
        store = _load_store(data_dir, settings.storage_key)
        confirm = (lambda _message: True) if getattr(args, "yes", False) else _prompt_confirm()
        controller = LedgerController(store, confirm=confirm, notify=_console_notify, text=text)
        return handlers[args.command](args, controller)
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
