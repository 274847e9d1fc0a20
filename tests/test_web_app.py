"""Mini README: Tests for the FastAPI surface.

Each route is exercised through ``TestClient`` with the fake transaction
service behind the controller, covering start-up loading, form actions,
error statuses and the CSV download.
"""

from __future__ import annotations

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from budgetview.configuration import BudgetViewSettings
from budgetview.interface import TransactionViewController, create_application
from budgetview.logging_utils import level_for_environment


@pytest.fixture
def settings() -> BudgetViewSettings:
    return BudgetViewSettings(api_base_url="https://budget.test/budgettransaction/")


@pytest.fixture
def web_client(settings, fake_service):
    controller = TransactionViewController.from_settings(
        settings, transport=httpx.MockTransport(fake_service)
    )
    app = create_application(settings=settings, controller=controller)
    with TestClient(app) as test_client:
        yield test_client


def test_settings_strip_trailing_slash(settings) -> None:
    assert settings.api_base_url == "https://budget.test/budgettransaction"
    assert settings.table_row_limit == 10


def test_startup_loads_transactions(web_client) -> None:
    payload = web_client.get("/api/view").json()
    assert [row["id"] for row in payload["rows"]] == ["1"]
    assert payload["rows"][0]["actions"]["delete"] == "/api/transactions/1/delete"
    assert payload["balance"] == {"amount": 100.0, "text": "100.00", "negative": False}
    assert payload["error"] is None


def test_submit_edit_and_delete_round_trip(web_client, fake_service) -> None:
    response = web_client.post(
        "/api/form/submit",
        data={"type": "expense", "category": "groceries", "amount": "130", "description": "Big shop"},
    )
    assert response.status_code == 200
    assert response.json()["balance"]["text"] == "-30.00"
    assert response.json()["balance"]["negative"] is True

    edit = web_client.post("/api/transactions/2/edit").json()
    assert edit["form"]["mode"] == "edit"
    assert edit["form"]["category"] == "groceries"
    assert [option["label"] for option in edit["form"]["category_options"]][0] == "Entertainment"

    updated = web_client.post(
        "/api/form/submit",
        data={"type": "expense", "category": "groceries", "amount": "30", "description": "Big shop", "transaction_id": "2"},
    ).json()
    assert updated["balance"]["text"] == "70.00"
    assert updated["form"]["mode"] == "create"

    deleted = web_client.post("/api/transactions/2/delete").json()
    assert deleted["transaction_count"] == 1
    assert fake_service.ids() == {"1"}


def test_type_change_and_validation(web_client) -> None:
    response = web_client.post("/api/form/type", data={"type": "expense"})
    assert response.json()["form"]["category"] == "entertainment"

    assert web_client.post("/api/form/type", data={"type": "loan"}).status_code == 400
    assert web_client.post("/api/transactions/999/edit").status_code == 404


def test_failure_returns_502_and_retry_recovers(web_client, fake_service) -> None:
    fake_service.fail_methods.add("POST")
    response = web_client.post(
        "/api/form/submit",
        data={"type": "income", "category": "sales", "amount": "5", "description": "Stall"},
    )
    assert response.status_code == 502
    assert response.json()["error"]["operation"] == "add transaction"
    assert response.json()["transaction_count"] == 1

    fake_service.fail_methods.clear()
    retried = web_client.post("/api/retry")
    assert retried.status_code == 200
    assert retried.json()["balance"]["text"] == "105.00"
    assert retried.json()["error"] is None


def test_export_downloads_csv(web_client) -> None:
    response = web_client.get("/api/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="transactions.csv"' in response.headers["content-disposition"]
    assert response.text.startswith("ID,Type,Category,Amount,Date,Description\r\n1,income,salary,100,")


def test_environment_controls_log_level() -> None:
    assert level_for_environment("development") == logging.DEBUG
    assert level_for_environment("Production") == logging.INFO
