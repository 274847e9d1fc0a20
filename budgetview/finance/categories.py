"""Mini README: Static category lookup used by the transaction form.

Structure:
    * CATEGORY_LABELS - labels offered for each transaction type.
    * CategoryOption - value/label pair for a single form choice.
    * category_value - normalise a label into its stored value.
    * category_options - choices for a given transaction type.

Stored category values are the label lowercased with all whitespace
removed (``"Side Hustle"`` becomes ``"sidehustle"``); the label itself is
what the form displays.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .ledger import TransactionType

CATEGORY_LABELS: Dict[TransactionType, Tuple[str, ...]] = {
    TransactionType.INCOME: ("Salary", "Sales", "Allowance", "Side Hustle"),
    TransactionType.EXPENSE: ("Entertainment", "Groceries", "Subscriptions"),
}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CategoryOption:
    """A single category choice."""

    value: str
    label: str

    def as_dict(self) -> Dict[str, str]:
        return {"value": self.value, "label": self.label}


def category_value(label: str) -> str:
    return _WHITESPACE.sub("", label.lower())


def category_options(transaction_type: Union[str, TransactionType]) -> List[CategoryOption]:
    """Return the category choices for ``transaction_type`` in display order."""

    kind = (
        transaction_type
        if isinstance(transaction_type, TransactionType)
        else TransactionType.from_str(transaction_type)
    )
    return [CategoryOption(value=category_value(label), label=label) for label in CATEGORY_LABELS[kind]]
