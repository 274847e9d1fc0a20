"""Mini README: Tests for the CSV exporter."""

from __future__ import annotations

import csv
import io

from budgetview.export import CSV_HEADER, TransactionCsvExporter
from budgetview.finance import Transaction


def _transactions():
    return [
        Transaction(1, "income", "salary", 100, "2024-05-01T09:00:00.000Z", "May salary"),
        Transaction(2, "expense", "groceries", 30.5, "2024-05-02T09:00:00.000Z", "Milk, eggs"),
    ]


def test_header_and_one_line_per_transaction() -> None:
    document = TransactionCsvExporter().render(_transactions())
    lines = document.split("\r\n")
    assert lines[0] == "ID,Type,Category,Amount,Date,Description"
    assert lines[-1] == ""
    assert len(lines) - 1 == len(_transactions()) + 1


def test_quoted_export_round_trips_embedded_commas() -> None:
    document = TransactionCsvExporter().render(_transactions())
    rows = list(csv.reader(io.StringIO(document)))
    assert tuple(rows[0]) == CSV_HEADER
    assert rows[2] == ["2", "expense", "groceries", "30.5", "2024-05-02T09:00:00.000Z", "Milk, eggs"]


def test_raw_export_interpolates_fields_verbatim() -> None:
    """Raw output keeps the legacy line endings: LF after the header, CRLF after rows."""

    document = TransactionCsvExporter(raw=True).render(_transactions())
    assert document.startswith("ID,Type,Category,Amount,Date,Description\n1,income,")
    assert document.endswith(",Milk, eggs\r\n")
    assert document.splitlines()[2] == "2,expense,groceries,30.5,2024-05-02T09:00:00.000Z,Milk, eggs"
    assert document.count("\r\n") == len(_transactions())


def test_empty_sequence_exports_header_only(tmp_path) -> None:
    destination = TransactionCsvExporter().export([], tmp_path / "out" / "transactions.csv")
    assert destination.read_bytes() == b"ID,Type,Category,Amount,Date,Description\r\n"
