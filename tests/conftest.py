"""Mini README: Shared fixtures simulating the remote transaction service.

Structure:
    * FakeTransactionService - in-memory collection answering the REST calls.
    * fake_service / client / controller - fixtures wired through
      ``httpx.MockTransport`` so no test touches the network.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

import httpx
import pytest

from budgetview.interface import TransactionViewController
from budgetview.service import TransactionServiceClient

BASE_URL = "https://budget.test/budgettransaction"
FIXED_NOW = datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc)


class FakeTransactionService:
    """Minimal stand-in for the transaction REST endpoint."""

    def __init__(self, transactions: Optional[List[Dict[str, object]]] = None) -> None:
        self.transactions: List[Dict[str, object]] = [dict(item) for item in transactions or []]
        self.next_id = max((int(item["id"]) for item in self.transactions), default=0) + 1
        self.requests: List[httpx.Request] = []
        self.fail_methods: Set[str] = set()
        self.status_override: Optional[int] = None

    def ids(self) -> Set[str]:
        return {str(item["id"]) for item in self.transactions}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method in self.fail_methods:
            raise httpx.ConnectError("simulated network failure", request=request)
        if self.status_override is not None:
            return httpx.Response(self.status_override, json={"error": "unavailable"})

        parts = request.url.path.rstrip("/").split("/")
        item_id = parts[2] if len(parts) > 2 else None

        if request.method == "GET" and item_id is None:
            return httpx.Response(200, json=self.transactions)
        if request.method == "POST" and item_id is None:
            record = dict(json.loads(request.content), id=self.next_id)
            self.next_id += 1
            self.transactions.append(record)
            return httpx.Response(201, json=record)
        index = next(
            (position for position, item in enumerate(self.transactions) if str(item["id"]) == item_id),
            None,
        )
        if index is None:
            return httpx.Response(404, json={"error": "not found"})
        if request.method == "PUT":
            record = dict(json.loads(request.content), id=self.transactions[index]["id"])
            self.transactions[index] = record
            return httpx.Response(200, json=record)
        if request.method == "DELETE":
            del self.transactions[index]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def fake_service() -> FakeTransactionService:
    return FakeTransactionService(
        [
            {
                "id": 1,
                "type": "income",
                "category": "salary",
                "amount": 100,
                "date": "2024-05-01T09:00:00.000Z",
                "description": "May salary",
            }
        ]
    )


@pytest.fixture
def client(fake_service: FakeTransactionService) -> TransactionServiceClient:
    return TransactionServiceClient(BASE_URL, transport=httpx.MockTransport(fake_service))


@pytest.fixture
def controller(client: TransactionServiceClient) -> TransactionViewController:
    return TransactionViewController(client, clock=lambda: FIXED_NOW)
