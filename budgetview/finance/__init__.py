"""Mini README: Finance model for the Budget View client.

This package groups the transaction records mirrored from the remote
service, the command reducer and state container that keep them, the
static category lookup used by the form, and the balance calculator.
Nothing here performs I/O, so every rule can be tested in isolation from
the network and the web interface.
"""

from .balance import BalanceDisplay, compute_balance, describe_balance
from .categories import CATEGORY_LABELS, CategoryOption, category_options, category_value
from .ledger import (
    RowOrdering,
    Transaction,
    TransactionDraft,
    TransactionRemoved,
    TransactionSaved,
    TransactionStore,
    TransactionType,
    TransactionsLoaded,
    reduce,
)

__all__ = [
    "BalanceDisplay",
    "CATEGORY_LABELS",
    "CategoryOption",
    "RowOrdering",
    "Transaction",
    "TransactionDraft",
    "TransactionRemoved",
    "TransactionSaved",
    "TransactionStore",
    "TransactionType",
    "TransactionsLoaded",
    "category_options",
    "category_value",
    "compute_balance",
    "describe_balance",
    "reduce",
]
