"""Mini README: Remote transaction service integration.

Exposes the async REST client and its failure taxonomy. The service itself
is an external collaborator; only the request/response shapes consumed by
the view live here.
"""

from .client import TransactionServiceClient
from .errors import (
    MalformedResponseError,
    ServiceStatusError,
    TransactionServiceError,
    TransportError,
)

__all__ = [
    "MalformedResponseError",
    "ServiceStatusError",
    "TransactionServiceClient",
    "TransactionServiceError",
    "TransportError",
]
