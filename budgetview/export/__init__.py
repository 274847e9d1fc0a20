"""Mini README: Export utilities for Budget View.

Exposes the CSV exporter used by the download action and the CLI. Future
formats can be registered alongside it.
"""

from .csv_exporter import CSV_HEADER, TransactionCsvExporter

__all__ = ["CSV_HEADER", "TransactionCsvExporter"]
