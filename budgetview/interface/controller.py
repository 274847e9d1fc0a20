"""Mini README: Transaction view controller.

Structure:
    * FormMode - create versus edit, decided by the edit target id.
    * FormState - current values of the create/edit form.
    * TableRow - one rendered table line with its edit/delete actions.
    * ViewError - banner shown after a failed remote call.
    * TransactionViewController - owns the store, talks to the service and
      produces everything the interface displays.

Every remote call is awaited before state changes: a success is turned into
a ledger command and dispatched to the store, a failure is logged, kept as
a retryable banner and leaves the store untouched. Operations run on the
event loop that awaits them and are not serialised against each other, so
when two requests overlap the last response to arrive wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..configuration import BudgetViewSettings
from ..export import TransactionCsvExporter
from ..finance import (
    BalanceDisplay,
    CategoryOption,
    RowOrdering,
    Transaction,
    TransactionDraft,
    TransactionRemoved,
    TransactionSaved,
    TransactionStore,
    TransactionType,
    TransactionsLoaded,
    category_options,
    compute_balance,
    describe_balance,
)
from ..finance.ledger import format_literal, local_date, parse_float
from ..logging_utils import get_logger
from ..service import TransactionServiceClient, TransactionServiceError

LOGGER = get_logger(__name__)

DEFAULT_TYPE = TransactionType.INCOME.value


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(slots=True)
class FormState:
    """Values currently held by the create/edit form."""

    transaction_type: str = DEFAULT_TYPE
    category: str = ""
    amount: str = ""
    description: str = ""
    transaction_id: Optional[str] = None
    options: List[CategoryOption] = field(default_factory=list)

    @property
    def mode(self) -> FormMode:
        return FormMode.EDIT if self.transaction_id else FormMode.CREATE

    def as_dict(self) -> Dict[str, object]:
        return {
            "mode": self.mode.value,
            "type": self.transaction_type,
            "category": self.category,
            "amount": self.amount,
            "description": self.description,
            "transaction_id": self.transaction_id,
            "category_options": [option.as_dict() for option in self.options],
        }


@dataclass(frozen=True)
class TableRow:
    """A rendered transaction row keyed by its id."""

    transaction_id: str
    amount: str
    category: str
    date: str
    description: str

    def as_dict(self) -> Dict[str, object]:
        path_id = quote(self.transaction_id, safe="")
        return {
            "id": self.transaction_id,
            "amount": self.amount,
            "category": self.category,
            "date": self.date,
            "description": self.description,
            "actions": {
                "edit": f"/api/transactions/{path_id}/edit",
                "delete": f"/api/transactions/{path_id}/delete",
            },
        }


@dataclass(frozen=True)
class ViewError:
    """User-visible failure banner."""

    operation: str
    message: str
    retryable: bool = True

    def as_dict(self) -> Dict[str, object]:
        return {"operation": self.operation, "message": self.message, "retryable": self.retryable}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    """Format like a browser ``toISOString``: UTC, milliseconds, ``Z`` suffix."""

    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _locale_date(transaction: Transaction) -> str:
    shown = local_date(transaction.date)
    return shown.strftime("%x") if shown is not None else ""


class TransactionViewController:
    """Keep the table, balance and form in step with the remote collection."""

    def __init__(
        self,
        client: TransactionServiceClient,
        *,
        row_limit: int = 10,
        ordering: RowOrdering = RowOrdering.INSERTION,
        preserve_date_on_edit: bool = False,
        store: Optional[TransactionStore] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.client = client
        self.row_limit = row_limit
        self.ordering = ordering
        self.preserve_date_on_edit = preserve_date_on_edit
        self.store = store or TransactionStore()
        self._clock = clock
        self.form = FormState()
        self.rows: List[TableRow] = []
        self.balance: BalanceDisplay = describe_balance(0.0)
        self.error: Optional[ViewError] = None
        self._pending_retry: Optional[Callable[[], Awaitable[bool]]] = None
        self.select_type(DEFAULT_TYPE)
        self._refresh()

    @classmethod
    def from_settings(
        cls,
        settings: BudgetViewSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TransactionViewController":
        """Build a controller wired to the configured transaction service."""

        client = TransactionServiceClient(
            settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            verify=settings.verify_tls,
            transport=transport,
        )
        return cls(
            client,
            row_limit=settings.table_row_limit,
            ordering=settings.table_ordering,
            preserve_date_on_edit=settings.preserve_date_on_edit,
        )

    # -- category selector -------------------------------------------------

    def select_type(self, transaction_type: str) -> List[CategoryOption]:
        """Switch the form type and repopulate its category choices.

        Raises ``ValueError`` for types outside the static lookup.
        """

        options = category_options(transaction_type)
        self.form.transaction_type = TransactionType.from_str(transaction_type).value
        self.form.options = options
        self.form.category = options[0].value
        return options

    # -- rendering ---------------------------------------------------------

    def render_transactions(self) -> List[TableRow]:
        """Rebuild the table from the tail of the local sequence."""

        self.rows = [
            TableRow(
                transaction_id=format_literal(transaction.transaction_id),
                amount=format_literal(transaction.amount),
                category=format_literal(transaction.category),
                date=_locale_date(transaction),
                description=format_literal(transaction.description),
            )
            for transaction in self.store.tail(self.row_limit, self.ordering)
        ]
        return self.rows

    def update_balance(self) -> BalanceDisplay:
        balance = compute_balance(self.store.snapshot())
        LOGGER.debug("Calculated balance: %.2f", balance)
        self.balance = describe_balance(balance)
        return self.balance

    def _refresh(self) -> None:
        self.render_transactions()
        self.update_balance()

    # -- failure bookkeeping -----------------------------------------------

    def _record_failure(
        self,
        operation: str,
        error: TransactionServiceError,
        retry: Callable[[], Awaitable[bool]],
    ) -> bool:
        LOGGER.error("Failed to %s: %s", operation, error.detail)
        self.error = ViewError(operation=operation, message=error.detail)
        self._pending_retry = retry
        return False

    def _record_success(self) -> None:
        self.error = None
        self._pending_retry = None

    async def retry(self) -> bool:
        """Re-issue the last failed remote operation, if any."""

        pending = self._pending_retry
        if pending is None:
            return True
        LOGGER.info("Retrying %s", self.error.operation if self.error else "last operation")
        self._pending_retry = None
        return await pending()

    # -- remote operations -------------------------------------------------

    async def fetch_transactions(self) -> bool:
        """Replace local state with the remote collection."""

        try:
            transactions = await self.client.list_transactions()
        except TransactionServiceError as error:
            return self._record_failure("fetch transactions", error, self.fetch_transactions)
        self.store.dispatch(TransactionsLoaded(tuple(transactions)))
        LOGGER.info("Fetched %s transactions", len(transactions))
        self._record_success()
        self._refresh()
        return True

    def _build_draft(self, target_id: Optional[str]) -> TransactionDraft:
        date = _iso_timestamp(self._clock())
        if target_id and self.preserve_date_on_edit:
            existing = self.store.find(target_id)
            if existing is not None and existing.date:
                date = existing.date
        return TransactionDraft(
            transaction_type=self.form.transaction_type,
            category=self.form.category,
            amount=parse_float(self.form.amount),
            date=date,
            description=self.form.description,
        )

    async def submit_form(
        self,
        *,
        transaction_type: Optional[str] = None,
        category: Optional[str] = None,
        amount: Optional[str] = None,
        description: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> bool:
        """Create or update a transaction from the form.

        Supplied values overwrite the corresponding form fields first. A
        present edit target routes the draft to an update, otherwise it is
        created. The form resets only after the service confirms.
        """

        if transaction_type is not None and transaction_type.strip().lower() != self.form.transaction_type:
            self.select_type(transaction_type)
        if category is not None:
            self.form.category = category
        if amount is not None:
            self.form.amount = amount
        if description is not None:
            self.form.description = description
        if transaction_id is not None:
            self.form.transaction_id = transaction_id or None

        target_id = self.form.transaction_id
        draft = self._build_draft(target_id)
        return await self._save(draft, target_id)

    async def _save(self, draft: TransactionDraft, target_id: Optional[str]) -> bool:
        operation = "update transaction" if target_id else "add transaction"
        try:
            if target_id:
                record = await self.client.update_transaction(target_id, draft)
            else:
                record = await self.client.create_transaction(draft)
        except TransactionServiceError as error:
            return self._record_failure(operation, error, partial(self._save, draft, target_id))
        self.store.dispatch(TransactionSaved(record=record, target_id=target_id))
        LOGGER.info("%s transaction %s", "Updated" if target_id else "Added", record.transaction_id)
        self._record_success()
        self._refresh()
        self.reset_form()
        return True

    async def delete_transaction(self, transaction_id: str) -> bool:
        """Delete ``transaction_id`` remotely, then drop it locally."""

        try:
            await self.client.delete_transaction(transaction_id)
        except TransactionServiceError as error:
            return self._record_failure(
                "delete transaction", error, partial(self.delete_transaction, transaction_id)
            )
        self.store.dispatch(TransactionRemoved(transaction_id))
        LOGGER.info("Deleted transaction with ID: %s", transaction_id)
        self._record_success()
        self._refresh()
        return True

    # -- form handling -----------------------------------------------------

    def edit_transaction(self, transaction_id: str) -> bool:
        """Load ``transaction_id`` into the form and switch to edit mode."""

        transaction = self.store.find(transaction_id)
        if transaction is None:
            LOGGER.warning("Cannot edit unknown transaction %s", transaction_id)
            return False
        LOGGER.debug("Editing transaction with ID: %s", transaction_id)
        kind = transaction.kind
        if kind is None:
            LOGGER.warning(
                "Transaction %s has unrecognised type %r; category choices cleared",
                transaction_id,
                transaction.transaction_type,
            )
            self.form.transaction_type = format_literal(transaction.transaction_type)
            self.form.options = []
        else:
            self.select_type(kind.value)
        self.form.category = format_literal(transaction.category)
        self.form.amount = format_literal(transaction.amount)
        self.form.description = format_literal(transaction.description)
        self.form.transaction_id = format_literal(transaction.transaction_id)
        return True

    def reset_form(self) -> None:
        """Return the form to create mode with default category options."""

        self.form = FormState()
        self.select_type(DEFAULT_TYPE)

    # -- export ------------------------------------------------------------

    def export_csv(self, *, raw: bool = False) -> str:
        """Render the full local sequence as CSV text."""

        return TransactionCsvExporter(raw=raw).render(self.store.snapshot())

    def view(self) -> Dict[str, object]:
        """Snapshot of everything the interface displays."""

        return {
            "rows": [row.as_dict() for row in self.rows],
            "balance": self.balance.as_dict(),
            "form": self.form.as_dict(),
            "error": self.error.as_dict() if self.error else None,
            "transaction_count": len(self.store),
        }
