"""Mini README: Export the local transaction sequence as CSV.

Structure:
    * CSV_HEADER - fixed column order of every export.
    * TransactionCsvExporter - renders and writes CSV text.

The exporter always covers the full sequence, not the table slice. By
default fields are encoded with the ``csv`` module so separators, quotes
and newlines inside descriptions survive a round trip. ``raw=True``
reproduces the legacy plain interpolation for consumers that expect it;
such files break when a field contains a comma or newline.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List, Sequence

from ..finance.ledger import Transaction, format_literal
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CSV_HEADER = ("ID", "Type", "Category", "Amount", "Date", "Description")
LINE_TERMINATOR = "\r\n"


def _row(transaction: Transaction) -> List[str]:
    return [
        format_literal(transaction.transaction_id),
        format_literal(transaction.transaction_type),
        format_literal(transaction.category),
        format_literal(transaction.amount),
        format_literal(transaction.date),
        format_literal(transaction.description),
    ]


class TransactionCsvExporter:
    """Serialise transactions into ``ID,Type,Category,Amount,Date,Description`` rows."""

    def __init__(self, *, raw: bool = False) -> None:
        self.raw = raw

    def render(self, transactions: Iterable[Transaction]) -> str:
        """Return the CSV document, header first.

        Quoted output ends every line with CRLF; raw output ends the header
        with LF and the data rows with CRLF.
        """

        rows: Sequence[List[str]] = [_row(transaction) for transaction in transactions]
        if self.raw:
            document = ",".join(CSV_HEADER) + "\n" + "".join(",".join(row) + LINE_TERMINATOR for row in rows)
        else:
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR)
            writer.writerow(CSV_HEADER)
            writer.writerows(rows)
            document = buffer.getvalue()
        LOGGER.info("Rendered CSV export with %s transactions (raw=%s)", len(rows), self.raw)
        return document

    def export(self, transactions: Iterable[Transaction], destination: Path) -> Path:
        """Write the CSV document to ``destination`` and return the path."""

        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("w", encoding="utf-8", newline="") as csv_file:
            csv_file.write(self.render(transactions))
        LOGGER.info("Exported transactions to %s", destination)
        return destination
