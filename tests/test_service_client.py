"""Mini README: Tests for the async transaction service client.

These tests confirm the REST shapes sent to the service and that transport
failures, error statuses and malformed bodies map onto the error taxonomy.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from budgetview.finance import TransactionDraft
from budgetview.service import (
    MalformedResponseError,
    ServiceStatusError,
    TransactionServiceClient,
    TransportError,
)


def _draft() -> TransactionDraft:
    return TransactionDraft(
        transaction_type="expense",
        category="groceries",
        amount=30.0,
        date="2024-06-01T12:30:00.000Z",
        description="Market",
    )


def test_create_posts_json_without_id(client, fake_service) -> None:
    record = asyncio.run(client.create_transaction(_draft()))

    request = fake_service.requests[-1]
    assert request.method == "POST"
    assert str(request.url) == client.base_url
    assert request.headers["content-type"] == "application/json"
    assert "id" not in json.loads(request.content)
    assert record.transaction_id == 2


def test_update_and_delete_target_item_urls(client, fake_service) -> None:
    updated = asyncio.run(client.update_transaction("1", _draft()))
    asyncio.run(client.delete_transaction(1))

    put_request, delete_request = fake_service.requests[-2:]
    assert (put_request.method, str(put_request.url)) == ("PUT", f"{client.base_url}/1")
    assert (delete_request.method, str(delete_request.url)) == ("DELETE", f"{client.base_url}/1")
    assert updated.category == "groceries"
    assert fake_service.transactions == []


def test_network_failure_raises_transport_error(client, fake_service) -> None:
    fake_service.fail_methods.add("GET")
    with pytest.raises(TransportError):
        asyncio.run(client.list_transactions())


def test_non_success_status_raises_status_error(client, fake_service) -> None:
    fake_service.status_override = 503
    with pytest.raises(ServiceStatusError) as excinfo:
        asyncio.run(client.list_transactions())
    assert excinfo.value.status_code == 503


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"not": "a list"}),
        httpx.Response(200, json=[{"type": "income"}]),
    ],
)
def test_malformed_collection_raises(response) -> None:
    client = TransactionServiceClient("https://budget.test/budgettransaction", transport=httpx.MockTransport(lambda request: response))
    with pytest.raises(MalformedResponseError):
        asyncio.run(client.list_transactions())
