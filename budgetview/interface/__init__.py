"""Mini README: Interactive interfaces for Budget View.

Exports the view controller that owns transaction state and the FastAPI
application factory that exposes it. The CLI entry point lives at the
repository root in ``main_budget_view.py``.
"""

from .controller import FormMode, FormState, TableRow, TransactionViewController, ViewError
from .web_app import create_application

__all__ = [
    "FormMode",
    "FormState",
    "TableRow",
    "TransactionViewController",
    "ViewError",
    "create_application",
]
