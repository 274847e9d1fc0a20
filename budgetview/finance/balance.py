"""Mini README: Signed balance over the local transaction sequence.

Structure:
    * BalanceDisplay - formatted balance plus the negative indicator.
    * compute_balance - fold income and expense amounts into one figure.
    * describe_balance - format a balance for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .ledger import Transaction, TransactionType


@dataclass(frozen=True)
class BalanceDisplay:
    """Balance as shown to the user."""

    amount: float
    text: str
    negative: bool

    def as_dict(self) -> Dict[str, object]:
        return {"amount": self.amount, "text": self.text, "negative": self.negative}


def compute_balance(transactions: Iterable[Transaction]) -> float:
    """Add income, subtract expenses, ignore entries of any other type."""

    balance = 0.0
    for transaction in transactions:
        kind = transaction.kind
        if kind is TransactionType.INCOME:
            balance += transaction.numeric_amount
        elif kind is TransactionType.EXPENSE:
            balance -= transaction.numeric_amount
    return balance


def describe_balance(balance: float) -> BalanceDisplay:
    """Fix the balance to two decimals and flag values below zero."""

    text = f"{balance:.2f}"
    if text == "-0.00":
        text = "0.00"
    return BalanceDisplay(amount=balance, text=text, negative=balance < 0)
