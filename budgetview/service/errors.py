"""Mini README: Failure taxonomy for calls to the transaction service.

Structure:
    * TransactionServiceError - base class carrying a human readable detail.
    * TransportError - the request never produced a response.
    * ServiceStatusError - the service answered with a non-2xx status.
    * MalformedResponseError - the body was not the expected JSON shape.
"""

from __future__ import annotations

from typing import Optional


class TransactionServiceError(Exception):
    detail: str = "The transaction service request failed"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail or self.detail
        super().__init__(self.detail)


class TransportError(TransactionServiceError):
    detail = "Could not reach the transaction service"


class ServiceStatusError(TransactionServiceError):
    detail = "The transaction service rejected the request"

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        self.status_code = status_code
        super().__init__(detail or f"{self.detail} (HTTP {status_code})")


class MalformedResponseError(TransactionServiceError):
    detail = "The transaction service returned an unexpected response"
