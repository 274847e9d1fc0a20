"""Mini README: FastAPI surface for the Budget View controller.

Structure:
    * create_application - application factory wiring the controller to
      HTTP actions.

Each action mirrors one control of the budget page (load, type change,
submit, reset, edit, delete, retry, export) and answers with the full view
snapshot so any front end can redraw from a single response. Failed remote
calls answer 502 with the error banner filled in; local state is unchanged.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse, Response

from ..configuration import BudgetViewSettings, get_settings
from ..logging_utils import configure_root_logger, get_logger, level_for_environment
from .controller import TransactionViewController

LOGGER = get_logger(__name__)


def create_application(
    settings: Optional[BudgetViewSettings] = None,
    controller: Optional[TransactionViewController] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    controller = controller or TransactionViewController.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if settings.load_on_startup:
            LOGGER.info("Loading transactions from %s", settings.api_base_url)
            await controller.fetch_transactions()
        yield

    app = FastAPI(title="Budget View", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller

    def _view(ok: bool = True) -> JSONResponse:
        return JSONResponse(controller.view(), status_code=200 if ok else 502)

    @app.get("/api/view")
    async def view() -> JSONResponse:
        """Return the current table, balance, form and error banner."""

        return _view()

    @app.post("/api/transactions/load")
    async def load_transactions() -> JSONResponse:
        return _view(await controller.fetch_transactions())

    @app.post("/api/form/type")
    async def change_type(transaction_type: str = Form(..., alias="type")) -> JSONResponse:
        """Repopulate category choices for the selected type."""

        try:
            controller.select_type(transaction_type)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _view()

    @app.post("/api/form/submit")
    async def submit_form(
        transaction_type: str = Form(..., alias="type"),
        category: str = Form(""),
        amount: str = Form(""),
        description: str = Form(""),
        transaction_id: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Create a transaction, or update one when an edit target is present."""

        try:
            ok = await controller.submit_form(
                transaction_type=transaction_type,
                category=category,
                amount=amount,
                description=description,
                transaction_id=transaction_id,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _view(ok)

    @app.post("/api/form/reset")
    async def reset_form() -> JSONResponse:
        controller.reset_form()
        return _view()

    @app.post("/api/transactions/{transaction_id}/edit")
    async def edit_transaction(transaction_id: str) -> JSONResponse:
        """Load a transaction into the form for editing."""

        if not controller.edit_transaction(transaction_id):
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return _view()

    @app.post("/api/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        return _view(await controller.delete_transaction(transaction_id))

    @app.post("/api/retry")
    async def retry() -> JSONResponse:
        """Re-issue the operation behind the current error banner."""

        return _view(await controller.retry())

    @app.get("/api/export")
    async def export_csv(raw: bool = False) -> Response:
        """Download every local transaction as CSV."""

        document = controller.export_csv(raw=raw)
        LOGGER.info("Serving CSV export %s", settings.export_filename)
        return Response(
            content=document,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
        )

    return app
