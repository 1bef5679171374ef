"""Mini README: FastAPI-powered dashboard for Pocket Ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * preset_confirmation - adapts the ``confirmed`` form flag to the async
      confirmation callback the edit session awaits.

The HTML page renders the current view server side; the small script in
``static/dashboard.js`` posts form submissions and row actions to the JSON
endpoints and reloads the page. Filters travel as ``search``, ``type`` and
``month`` query parameters on every read endpoint.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import LedgerSettings, get_settings
from ..errors import NotFoundError, ValidationError
from ..export import to_csv
from ..finance import Dashboard, FilterCriteria, LedgerView, MoneyFormat, TransactionDraft, TransactionStore
from ..finance.session import Confirmer
from ..logging_utils import get_logger
from ..storage import open_store

LOGGER = get_logger(__name__)


def preset_confirmation(answer: bool) -> Confirmer:
    """Return a confirmer that replays the answer the browser dialog gave."""

    async def confirm(prompt: str) -> bool:
        LOGGER.debug("Confirmation '%s' answered %s", prompt, answer)
        return answer

    return confirm


def create_application(
    store: Optional[TransactionStore] = None,
    settings: Optional[LedgerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    store = store if store is not None else open_store(settings)
    dashboard = Dashboard(store, MoneyFormat.from_settings(settings))

    app = FastAPI(title="Pocket Ledger", version="1.0.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    app.state.dashboard = dashboard

    def current_view(search: str, type_filter: str, month: str) -> LedgerView:
        try:
            criteria = FilterCriteria.build(search, type_filter, month)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return dashboard.apply_filters(criteria)

    def mutation_payload(**extra: object) -> JSONResponse:
        payload = {
            "mode": dashboard.session.mode.value,
            "editing_id": dashboard.session.editing_id,
            "view": dashboard.view.as_dict(),
            "warning": store.last_warning,
        }
        payload.update(extra)
        return JSONResponse(payload)

    @app.get("/", response_class=HTMLResponse)
    async def index(
        request: Request,
        search: str = "",
        type: str = "all",
        month: str = "",
    ) -> HTMLResponse:
        """Render the dashboard with totals, chart feed and the filtered table."""

        view = current_view(search, type, month)
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "view": view,
                "mode": dashboard.session.mode.value,
                "editing_id": dashboard.session.editing_id,
                "default_category": store.default_category,
            },
        )

    @app.get("/api/view")
    async def read_view(search: str = "", type: str = "all", month: str = "") -> JSONResponse:
        view = current_view(search, type, month)
        return JSONResponse(
            {
                "mode": dashboard.session.mode.value,
                "editing_id": dashboard.session.editing_id,
                "view": view.as_dict(),
            }
        )

    @app.post("/api/transactions")
    async def submit_transaction(
        description: str = Form(""),
        amount: str = Form(""),
        transaction_type: str = Form("", alias="type"),
        category: Optional[str] = Form(None),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Add a transaction, or save the one being edited."""

        draft = TransactionDraft(
            description=description,
            amount=amount,
            transaction_type=transaction_type or None,
            category=category,
            occurred_on=date or None,
        )
        try:
            transaction = dashboard.session.submit(draft)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except NotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return mutation_payload(transaction=transaction.as_dict())

    @app.post("/api/transactions/{transaction_id}/edit")
    async def begin_edit(transaction_id: int) -> JSONResponse:
        """Switch the session to edit mode and return the form pre-fill values."""

        try:
            values = dashboard.session.begin_edit(transaction_id)
        except NotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse({"mode": dashboard.session.mode.value, "values": values})

    @app.post("/api/edit/cancel")
    async def cancel_edit() -> JSONResponse:
        dashboard.session.cancel_edit()
        return JSONResponse({"mode": dashboard.session.mode.value})

    @app.post("/api/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: int, confirmed: bool = Form(False)) -> JSONResponse:
        """Delete one transaction once the user confirmed the dialog."""

        try:
            deleted = await dashboard.session.remove(transaction_id, preset_confirmation(confirmed))
        except NotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return mutation_payload(deleted=deleted)

    @app.post("/api/transactions/clear")
    async def clear_transactions(confirmed: bool = Form(False)) -> JSONResponse:
        cleared = await dashboard.session.clear(preset_confirmation(confirmed))
        return mutation_payload(cleared=cleared)

    @app.get("/export.csv")
    async def export_csv(search: str = "", type: str = "all", month: str = "") -> Response:
        """Download the currently filtered transactions as CSV."""

        view = current_view(search, type, month)
        LOGGER.info("Exporting %s transactions as CSV", len(view.transactions))
        return Response(
            content=to_csv(view.transactions),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
        )

    return app
