"""Flask application serving the ledger page and a JSON API over the same core."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS

from ledger.aggregator import summarize
from ledger.controller import TOAST_DURATION_MS, LedgerController, default_form
from ledger.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from ledger.presenter import Presenter, SummaryView, TransactionRow, order_for_display
from ledger.settings import Settings
from ledger.storage import JSONStorage, TransactionRepository
from ledger.store import TransactionStore
from ledger.text import text_for


class PageView:
    """Collects what the presenter renders so the template can lay it out."""

    def __init__(self) -> None:
        self.rows: List[TransactionRow] = []
        self.placeholder: Optional[str] = None

    def show_rows(self, rows: Sequence[TransactionRow]) -> None:
        self.rows = list(rows)
        self.placeholder = None

    def show_empty(self, message: str) -> None:
        self.rows = []
        self.placeholder = message


class SummaryPanel:
    def __init__(self) -> None:
        self.view: Optional[SummaryView] = None

    def show_summary(self, view: SummaryView) -> None:
        self.view = view


class RequestForm:
    """Form surface backed by the submitted request fields."""

    def __init__(self, fields: Mapping[str, str]) -> None:
        self.values: Dict[str, str] = dict(fields)

    def read_fields(self) -> Mapping[str, object]:
        return self.values

    def reset_fields(self, defaults: Mapping[str, str]) -> None:
        self.values = dict(defaults)


def create_app(data_dir: Optional[Path] = None, settings: Optional[Settings] = None) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key

    if settings.is_dev:
        CORS(app, resources={r"/api/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/api/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app, resources={r"/api/*": {}})

    text = text_for(settings.locale)
    storage = JSONStorage(Path(data_dir or settings.data_dir))
    store = TransactionStore(TransactionRepository(storage, settings.storage_key))

    def _flash_notify(message: str, severity: str) -> None:
        flash(message, severity)

    def _log_notify(message: str, severity: str) -> None:
        app.logger.info("%s: %s", severity, message)

    def _page_controller(form: Optional[RequestForm] = None, answer: Optional[str] = None):
        return LedgerController(
            store,
            confirm=lambda _message: answer == "yes",
            notify=_flash_notify,
            form=form,
            text=text,
        )

    def _api_controller() -> LedgerController:
        # API clients confirm on their side before issuing DELETE.
        return LedgerController(store, confirm=lambda _message: True, notify=_log_notify, text=text)

    def _render_page(form_values: Mapping[str, str], status: int = 200):
        page, top, bottom = PageView(), SummaryPanel(), SummaryPanel()
        Presenter(page, top, bottom, text).refresh(store.transactions)
        html = render_template(
            "index.html",
            text=text,
            form=form_values,
            page=page,
            top=top.view,
            bottom=bottom.view,
            toast_duration_ms=TOAST_DURATION_MS,
        )
        return html, status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    # Browser page -------------------------------------------------------
    @app.get("/")
    def index():
        return _render_page(default_form(date.today()))

    @app.post("/transactions")
    def submit_transaction():
        form = RequestForm(request.form.to_dict())
        record = _page_controller(form=form).on_add_submit()
        if record is None:
            # Keep what the user typed so they can correct it.
            return _render_page(form.values, 400)
        return redirect(url_for("index"))

    @app.get("/transactions/<transaction_id>/delete")
    def confirm_delete(transaction_id: str):
        return render_template(
            "confirm.html",
            text=text,
            message=text.confirm_delete,
            transaction_id=transaction_id,
        )

    @app.post("/transactions/<transaction_id>/delete")
    def delete_transaction(transaction_id: str):
        _page_controller(answer=request.form.get("answer")).on_delete_request(transaction_id)
        return redirect(url_for("index"))

    # JSON API -----------------------------------------------------------
    @app.get("/api/transactions")
    def list_transactions():
        snapshot = store.transactions
        return jsonify({
            "items": [transaction.to_dict() for transaction in order_for_display(snapshot)],
            "summary": summarize(snapshot).to_dict(),
        })

    @app.post("/api/transactions")
    def create_transaction():
        payload = _json_body()
        record = _api_controller().add(payload)
        return jsonify(record.to_dict()), 201

    @app.get("/api/transactions/<transaction_id>")
    def get_transaction(transaction_id: str):
        return jsonify(store.get(transaction_id).to_dict())

    @app.delete("/api/transactions/<transaction_id>")
    def delete_transaction_api(transaction_id: str):
        _api_controller().on_delete_request(transaction_id)
        return ("", 204)

    @app.get("/api/summary")
    def summary():
        return jsonify(summarize(store.transactions).to_dict())

    return app


if __name__ == "__main__":  # pragma: no cover - manual execution
    create_app().run(debug=Settings.from_env().is_dev)
