"""Tkinter desktop application for the ledger."""

from __future__ import annotations

import argparse
import tkinter as tk
from datetime import date
from pathlib import Path
from tkinter import messagebox, ttk
from typing import Iterable, Mapping, Optional, Sequence

from ledger.controller import ERROR, SUCCESS, TOAST_DURATION_MS, WARNING, LedgerController, default_form
from ledger.exceptions import PersistenceError
from ledger.logging_setup import configure_logging
from ledger.models import EXPENSE, INCOME
from ledger.presenter import NEGATIVE, Presenter, SummaryView, TransactionRow
from ledger.settings import Settings
from ledger.storage import JSONStorage, TransactionRepository
from ledger.store import TransactionStore
from ledger.text import DisplayText, text_for


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"
INCOME_FG = "#4ade80"
EXPENSE_FG = "#f87171"

METRIC_VALUE_COLORS = {
    "MetricValue.TLabel": INCOME_FG,
    "MetricValueExpense.TLabel": EXPENSE_FG,
}

TOAST_COLORS = {
    SUCCESS: "#22c55e",
    ERROR: "#ef4444",
    WARNING: "#f97316",
}


class SummaryPanel(ttk.Frame):
    """Income, expense and balance metrics; the app shows one above and one below the list."""

    def __init__(self, master: tk.Misc, text: DisplayText) -> None:
        super().__init__(master, padding=(20, 10), style="Summary.TFrame")
        self.columnconfigure((0, 1, 2), weight=1)
        self.income_var = tk.StringVar(value="0.00")
        self.expense_var = tk.StringVar(value="0.00")
        self.balance_var = tk.StringVar(value="0.00")

        self._build_metric(0, text.income, self.income_var)
        self._build_metric(1, text.expense, self.expense_var, value_style="MetricValueExpense.TLabel")
        self.balance_container, self.balance_value_label = self._build_metric(
            2, text.balance, self.balance_var
        )

    def _build_metric(
        self, column: int, label: str, var: tk.StringVar, value_style: str = "MetricValue.TLabel"
    ) -> tuple[ttk.Frame, ttk.Label]:
        container = ttk.Frame(self, style="Metric.TFrame", padding=(16, 12))
        container.grid(row=0, column=column, sticky="ew", padx=6)
        ttk.Label(container, text=label, style="MetricLabel.TLabel").grid(row=0, column=0, sticky="w")
        value_label = ttk.Label(container, textvariable=var, style=value_style)
        value_label.grid(row=1, column=0, sticky="w")
        return container, value_label

    def show_summary(self, view: SummaryView) -> None:
        self.income_var.set(view.total_income)
        self.expense_var.set(view.total_expense)
        self.balance_var.set(view.balance)
        if view.balance_state == NEGATIVE:
            self.balance_container.configure(style="MetricNegative.TFrame")
            self.balance_value_label.configure(style="MetricValueNegative.TLabel")
        else:
            self.balance_container.configure(style="Metric.TFrame")
            self.balance_value_label.configure(style="MetricValue.TLabel")


class TransactionForm(ttk.LabelFrame):
    def __init__(self, master: tk.Misc, text: DisplayText) -> None:
        super().__init__(master, text="Add Transaction", style="Card.TLabelframe")
        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=1)

        self.description_var = tk.StringVar()
        self.amount_var = tk.StringVar()
        self.date_var = tk.StringVar(value=date.today().isoformat())
        self.type_var = tk.StringVar(value=INCOME)

        self._add_field("Description", self.description_var, 0, 0, columnspan=2)
        self._add_field("Amount", self.amount_var, 0, 2)
        self._add_field("Date (YYYY-MM-DD)", self.date_var, 1, 2)

        type_row = ttk.Frame(self, style="Panel.TFrame")
        type_row.grid(column=0, row=4, columnspan=2, sticky="w", padx=4, pady=(0, 8))
        for column, (value, label) in enumerate(((INCOME, text.income), (EXPENSE, text.expense))):
            ttk.Radiobutton(type_row, text=label, value=value, variable=self.type_var).grid(
                column=column, row=0, padx=(0, 12)
            )

        self.button_row = ttk.Frame(self, style="Panel.TFrame")
        self.button_row.grid(column=0, row=5, columnspan=2, sticky="e", padx=4, pady=4)

    def _add_field(
        self, label: str, var: tk.StringVar, column: int, row: int, *, columnspan: int = 1
    ) -> ttk.Entry:
        ttk.Label(self, text=label, style="FormLabel.TLabel").grid(
            column=column, row=row, columnspan=columnspan, sticky="w", padx=4, pady=4
        )
        entry = ttk.Entry(self, textvariable=var, style="App.TEntry")
        entry.grid(column=column, row=row + 1, columnspan=columnspan, sticky="ew", padx=4, pady=(0, 8))
        return entry

    def read_fields(self) -> Mapping[str, object]:
        return {
            "description": self.description_var.get(),
            "amount": self.amount_var.get(),
            "date": self.date_var.get(),
            "type": self.type_var.get(),
        }

    def reset_fields(self, defaults: Mapping[str, str]) -> None:
        self.description_var.set(defaults["description"])
        self.amount_var.set(defaults["amount"])
        self.date_var.set(defaults["date"])
        self.type_var.set(defaults["type"])


class TransactionTable(ttk.Frame):
    def __init__(self, master: tk.Misc) -> None:
        super().__init__(master, style="Panel.TFrame")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        columns = ("date", "time", "description", "amount", "type")
        self.tree = ttk.Treeview(
            self,
            columns=columns,
            show="headings",
            height=10,
            style="App.Treeview",
        )
        headings = {
            "date": "Date",
            "time": "Time",
            "description": "Description",
            "amount": "Amount",
            "type": "Type",
        }
        for key, label in headings.items():
            width = 220 if key == "description" else 110
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="w")
        self.tree.tag_configure(INCOME, foreground=INCOME_FG)
        self.tree.tag_configure(EXPENSE, foreground=EXPENSE_FG)

        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        self.placeholder = ttk.Label(self, style="FormLabel.TLabel", anchor="center")

        self.button_bar = ttk.Frame(self, style="Panel.TFrame")
        self.button_bar.grid(row=1, column=0, columnspan=2, sticky="e", pady=8)

    def show_rows(self, rows: Sequence[TransactionRow]) -> None:
        self.placeholder.place_forget()
        self.tree.delete(*self.tree.get_children())
        for row in rows:
            values = (row.date, row.time, row.description, row.amount, row.type_label)
            self.tree.insert("", "end", iid=row.delete_id, values=values, tags=(row.amount_style,))

    def show_empty(self, message: str) -> None:
        self.tree.delete(*self.tree.get_children())
        self.placeholder.configure(text=message)
        self.placeholder.place(relx=0.5, rely=0.4, anchor="center")

    def selected_ids(self) -> Iterable[str]:
        return tuple(self.tree.selection())


class LedgerApp(tk.Tk):
    """Main application window."""

    def __init__(self, data_dir: Path, settings: Optional[Settings] = None) -> None:
        super().__init__()
        settings = settings or Settings.from_env()
        self.title("Ledger")
        self.geometry("960x720")
        self.minsize(820, 600)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()
        self.text = text_for(settings.locale)

        storage = JSONStorage(data_dir)
        self.store = TransactionStore(TransactionRepository(storage, settings.storage_key))

        self._build_layout()
        self.presenter = Presenter(self.table, self.top_summary, self.bottom_summary, self.text)
        self.controller = LedgerController(
            self.store,
            self.presenter,
            confirm=self.ask_confirmation,
            notify=self.show_toast,
            form=self.form,
            text=self.text,
        )
        self.form.reset_fields(default_form(date.today()))
        self.controller.refresh()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)
        style.configure("TRadiobutton", background=SECONDARY_BG, foreground=TEXT_PRIMARY)

        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("Card.TLabelframe", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Card.TLabelframe.Label", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Header.TFrame", background=PRIMARY_BG)
        style.configure("Summary.TFrame", background=SECONDARY_BG)
        style.configure("Metric.TFrame", background=SECONDARY_BG)

        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("MetricLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9, "bold"))
        for style_name, foreground in METRIC_VALUE_COLORS.items():
            style.configure(style_name, background=SECONDARY_BG, foreground=foreground, font=("Segoe UI", 16, "bold"))
        style.configure(
            "MetricNegative.TFrame",
            background="#321524",
            bordercolor="#f87171",
            relief="solid",
            borderwidth=1,
        )
        style.configure(
            "MetricValueNegative.TLabel",
            background="#321524",
            foreground="#fca5a5",
            font=("Segoe UI", 16, "bold"),
        )

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.configure(
            "Secondary.TButton",
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            padding=(14, 6),
        )
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])
        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=28,
        )
        style.configure(
            "App.Treeview.Heading",
            background=SECONDARY_BG,
            foreground=TEXT_MUTED,
            relief="flat",
        )
        style.map(
            "App.Treeview",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(3, weight=1)

        header = ttk.Frame(self, padding=20, style="Header.TFrame")
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Ledger", style="Header.TLabel").grid(row=0, column=0, sticky="w")

        self.top_summary = SummaryPanel(self, self.text)
        self.top_summary.grid(row=1, column=0, sticky="ew")

        self.form = TransactionForm(self, self.text)
        self.form.grid(row=2, column=0, sticky="ew", padx=20, pady=12)
        ttk.Button(
            self.form.button_row,
            text="Add",
            command=self.submit,
            style="Primary.TButton",
        ).grid(column=0, row=0, padx=4)

        self.table = TransactionTable(self)
        self.table.grid(row=3, column=0, sticky="nsew", padx=20)
        ttk.Button(
            self.table.button_bar,
            text=self.text.delete,
            command=self.delete_selected,
            style="Secondary.TButton",
        ).grid(row=0, column=0, padx=4)

        self.bottom_summary = SummaryPanel(self, self.text)
        self.bottom_summary.grid(row=4, column=0, sticky="ew", pady=(0, 12))

    def submit(self) -> None:
        try:
            self.controller.on_add_submit()
        except PersistenceError as exc:
            messagebox.showerror("Storage Error", str(exc), parent=self)

    def delete_selected(self) -> None:
        selection = self.table.selected_ids()
        if not selection:
            messagebox.showinfo("No selection", "Please select a transaction to delete.", parent=self)
            return
        for transaction_id in selection:
            try:
                self.controller.on_delete_request(transaction_id)
            except PersistenceError as exc:
                messagebox.showerror("Storage Error", str(exc), parent=self)
                break

    def ask_confirmation(self, message: str) -> bool:
        return messagebox.askyesno("Ledger", message, parent=self)

    def show_toast(self, message: str, severity: str) -> None:
        toast = tk.Toplevel(self)
        toast.overrideredirect(True)
        toast.configure(bg=TOAST_COLORS.get(severity, "#374151"))
        tk.Label(
            toast,
            text=message,
            bg=TOAST_COLORS.get(severity, "#374151"),
            fg="#ffffff",
            padx=12,
            pady=8,
            wraplength=320,
        ).pack()
        self.update_idletasks()
        x = self.winfo_rootx() + self.winfo_width() - toast.winfo_reqwidth() - 16
        y = self.winfo_rooty() + self.winfo_height() - toast.winfo_reqheight() - 16
        toast.geometry(f"+{x}+{y}")
        toast.after(TOAST_DURATION_MS, toast.destroy)


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the ledger")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory containing JSON storage files (default: $LEDGER_DATA_DIR or ./data)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = LedgerApp(args.data_dir or settings.data_dir, settings)
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
