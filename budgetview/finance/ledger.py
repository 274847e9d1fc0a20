"""Mini README: In-memory transaction ledger mirroring the remote service.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * RowOrdering - named policy deciding which entries count as "recent".
    * Transaction - canonical record as returned by the remote service.
    * TransactionDraft - payload sent when creating or updating a record.
    * TransactionsLoaded / TransactionSaved / TransactionRemoved - commands.
    * reduce - pure function applying a command to a transaction sequence.
    * TransactionStore - state container owned by the view controller.

The store never talks to the network. The view controller confirms every
mutation with the remote service first and then dispatches a command, so
failed requests never reach this module and local state stays intact.
Identifiers are opaque: they are compared by their string form because the
service returns them as JSON values while form fields carry strings.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_KNOWN_FIELDS = {"id", "type", "category", "amount", "date", "description"}


class TransactionType(str, Enum):
    """Enumerate the supported transaction types."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


class RowOrdering(str, Enum):
    """Ordering applied to the sequence before the table tail is taken."""

    INSERTION = "insertion"
    DATE = "date"


def parse_float(value: object) -> Optional[float]:
    """Parse the leading number of ``value`` the way a lenient form field does.

    ``"12.5kg"`` yields ``12.5``; empty strings, booleans and anything
    without a numeric prefix yield ``None``.
    """

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    match = _LEADING_FLOAT.match(str(value).strip())
    if not match:
        return None
    return float(match.group(0))


def _normalise_iso(text: str) -> str:
    """Rewrite ``Z`` suffixes and fractions to forms every supported Python parses."""

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return _FRACTION.sub(lambda match: "." + (match.group(1) + "000000")[:6], text, count=1)


def _parse_iso(value: object) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(_normalise_iso(value.strip()))
    except ValueError:
        return None


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, assuming UTC for naive values."""

    parsed = _parse_iso(value)
    if parsed is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def local_date(value: object) -> Optional[date]:
    """Calendar date of ``value`` in local time, as a browser would show it.

    Date-only strings are read as UTC midnight; date-times without an offset
    are already local wall-clock time.
    """

    parsed = _parse_iso(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        if isinstance(value, str) and _DATE_ONLY.match(value.strip()):
            parsed = parsed.replace(tzinfo=timezone.utc)
        else:
            return parsed.date()
    return parsed.astimezone().date()


def format_literal(value: object) -> str:
    """Render a field verbatim for tables and exports.

    Missing values become empty strings and integral floats drop their
    trailing ``.0`` so ``100.0`` prints as ``100`` like the service sent it.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def same_id(left: object, right: object) -> bool:
    """Compare opaque identifiers regardless of JSON number/string encoding."""

    if left is None or right is None:
        return False
    return str(left) == str(right)


@dataclass(slots=True)
class Transaction:
    """Canonical transaction record with server-assigned identity."""

    transaction_id: Union[int, str]
    transaction_type: Optional[str] = None
    category: Optional[str] = None
    amount: object = None
    date: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: object) -> "Transaction":
        """Build a record from a decoded JSON object returned by the service."""

        if not isinstance(payload, Mapping):
            raise ValueError(f"Transaction payload must be an object, got {type(payload).__name__}")
        if payload.get("id") is None:
            raise ValueError("Transaction payload is missing its server-assigned id")
        return cls(
            transaction_id=payload["id"],
            transaction_type=payload.get("type"),
            category=payload.get("category"),
            amount=payload.get("amount"),
            date=payload.get("date"),
            description=payload.get("description"),
            extra={key: value for key, value in payload.items() if key not in _KNOWN_FIELDS},
        )

    @property
    def kind(self) -> Optional[TransactionType]:
        """Return the case-insensitive type, or ``None`` when unrecognised."""

        if not isinstance(self.transaction_type, str):
            return None
        try:
            return TransactionType.from_str(self.transaction_type)
        except ValueError:
            return None

    @property
    def numeric_amount(self) -> float:
        """Amount as a float; non-numeric values count as zero."""

        return parse_float(self.amount) or 0.0

    @property
    def occurred_at(self) -> Optional[datetime]:
        return parse_timestamp(self.date)

    def matches(self, transaction_id: object) -> bool:
        return same_id(self.transaction_id, transaction_id)

    def as_dict(self) -> Dict[str, object]:
        """Export the record using the service's field names."""

        payload: Dict[str, object] = dict(self.extra)
        payload.update(
            {
                "id": self.transaction_id,
                "type": self.transaction_type,
                "category": self.category,
                "amount": self.amount,
                "date": self.date,
                "description": self.description,
            }
        )
        return payload


@dataclass(slots=True)
class TransactionDraft:
    """Locally constructed payload for create and update requests."""

    transaction_type: str
    category: str
    amount: Optional[float]
    date: str
    description: str

    def as_payload(self) -> Dict[str, object]:
        return {
            "type": self.transaction_type,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "description": self.description,
        }


@dataclass(frozen=True)
class TransactionsLoaded:
    """The full collection was fetched and replaces local state."""

    transactions: Tuple[Transaction, ...]


@dataclass(frozen=True)
class TransactionSaved:
    """A canonical record came back from a create or update request."""

    record: Transaction
    target_id: Optional[object] = None


@dataclass(frozen=True)
class TransactionRemoved:
    """The service confirmed deletion of ``transaction_id``."""

    transaction_id: object


Command = Union[TransactionsLoaded, TransactionSaved, TransactionRemoved]


def _without_duplicates(transactions: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    seen: set = set()
    unique: List[Transaction] = []
    for transaction in transactions:
        key = str(transaction.transaction_id)
        if key in seen:
            LOGGER.warning("Dropping duplicate transaction id %s from fetched collection", key)
            continue
        seen.add(key)
        unique.append(transaction)
    return tuple(unique)


def reduce(transactions: Tuple[Transaction, ...], command: Command) -> Tuple[Transaction, ...]:
    """Return the sequence that results from applying ``command``."""

    if isinstance(command, TransactionsLoaded):
        return _without_duplicates(command.transactions)

    if isinstance(command, TransactionSaved):
        record = command.record
        target = command.target_id if command.target_id is not None else record.transaction_id
        updated = list(transactions)
        index = next(
            (position for position, entry in enumerate(updated) if entry.matches(target)),
            None,
        )
        if index is None:
            updated.append(record)
            index = len(updated) - 1
        else:
            updated[index] = record
        return tuple(
            entry
            for position, entry in enumerate(updated)
            if position == index or not entry.matches(record.transaction_id)
        )

    if isinstance(command, TransactionRemoved):
        return tuple(entry for entry in transactions if not entry.matches(command.transaction_id))

    raise TypeError(f"Unsupported command: {command!r}")


def _date_sort_key(transaction: Transaction) -> Tuple[bool, datetime]:
    occurred_at = transaction.occurred_at
    return (occurred_at is not None, occurred_at or datetime.min.replace(tzinfo=timezone.utc))


class TransactionStore:
    """Own the local transaction sequence behind accessors and ``dispatch``."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None) -> None:
        self._transactions: Tuple[Transaction, ...] = ()
        if transactions:
            self.dispatch(TransactionsLoaded(tuple(transactions)))

    def __len__(self) -> int:
        return len(self._transactions)

    def dispatch(self, command: Command) -> Tuple[Transaction, ...]:
        """Apply a command and return the new sequence."""

        self._transactions = reduce(self._transactions, command)
        LOGGER.debug(
            "Applied %s; store now holds %s transactions",
            type(command).__name__,
            len(self._transactions),
        )
        return self._transactions

    def snapshot(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def ids(self) -> List[str]:
        return [str(transaction.transaction_id) for transaction in self._transactions]

    def find(self, transaction_id: object) -> Optional[Transaction]:
        """Return the entry with ``transaction_id`` or ``None``."""

        for transaction in self._transactions:
            if transaction.matches(transaction_id):
                return transaction
        return None

    def tail(self, limit: int, ordering: RowOrdering = RowOrdering.INSERTION) -> List[Transaction]:
        """Return the last ``limit`` entries under the given ordering policy."""

        if limit <= 0:
            return []
        ordered: List[Transaction] = list(self._transactions)
        if ordering is RowOrdering.DATE:
            ordered.sort(key=_date_sort_key)
        return ordered[-limit:]
