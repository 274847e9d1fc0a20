"""Mini README: Async HTTP client for the remote transaction collection.

Structure:
    * TransactionServiceClient - list/create/update/delete against
      ``{base}`` and ``{base}/{id}``.

Every call opens a short-lived ``httpx.AsyncClient`` so the client holds no
connection state between user actions and can be shared freely by the web
interface. Failures are translated into the ``TransactionServiceError``
hierarchy; callers decide how to surface them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..finance.ledger import Transaction, TransactionDraft
from ..logging_utils import get_logger
from .errors import MalformedResponseError, ServiceStatusError, TransportError

LOGGER = get_logger(__name__)


class TransactionServiceClient:
    """Talk to the REST endpoint that owns the transaction collection."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self._transport = transport

    def item_url(self, transaction_id: object) -> str:
        return f"{self.base_url}/{quote(str(transaction_id), safe='')}"

    async def _request(self, method: str, url: str, json_body: Optional[Dict[str, Any]] = None) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout, verify=self.verify, transport=self._transport
        ) as client:
            try:
                response = await client.request(method, url, json=json_body)
            except httpx.HTTPError as error:
                raise TransportError(f"{method} {url} failed: {error}") from error
        if not response.is_success:
            raise ServiceStatusError(response.status_code, f"{method} {url} returned HTTP {response.status_code}")
        LOGGER.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as error:
            raise MalformedResponseError("Response body is not valid JSON") from error

    @classmethod
    def _record(cls, response: httpx.Response) -> Transaction:
        payload = cls._decode(response)
        try:
            return Transaction.from_payload(payload)
        except ValueError as error:
            raise MalformedResponseError(str(error)) from error

    async def list_transactions(self) -> List[Transaction]:
        """GET the whole collection."""

        payload = self._decode(await self._request("GET", self.base_url))
        if not isinstance(payload, list):
            raise MalformedResponseError("Expected a JSON array of transactions")
        try:
            return [Transaction.from_payload(item) for item in payload]
        except ValueError as error:
            raise MalformedResponseError(str(error)) from error

    async def create_transaction(self, draft: TransactionDraft) -> Transaction:
        """POST a draft and return the canonical record with its new id."""

        return self._record(await self._request("POST", self.base_url, draft.as_payload()))

    async def update_transaction(self, transaction_id: object, draft: TransactionDraft) -> Transaction:
        """PUT a draft over ``transaction_id`` and return the canonical record."""

        return self._record(
            await self._request("PUT", self.item_url(transaction_id), draft.as_payload())
        )

    async def delete_transaction(self, transaction_id: object) -> None:
        """DELETE ``transaction_id``; any response body is ignored."""

        await self._request("DELETE", self.item_url(transaction_id))
