"""Mini README: Centralised configuration models and helpers for Budget View.

Structure:
    * BudgetViewSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to discover the remote transaction endpoint,
    request timeouts, table presentation policy and the interface port.
    Every field can be overridden with a ``BUDGETVIEW_`` prefixed
    environment variable or a ``.env`` file. The configuration is cached so
    validation happens once per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .finance.ledger import RowOrdering


class BudgetViewSettings(BaseSettings):
    """Runtime configuration for the Budget View client."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    api_base_url: str = Field(
        "https://localhost:7060/budgettransaction",
        description="Collection endpoint of the remote transaction service.",
    )
    request_timeout_seconds: float = Field(
        30.0,
        description="Timeout applied to every request against the transaction service.",
        gt=0,
    )
    verify_tls: bool = Field(
        True,
        description="Verify TLS certificates. Disable for self-signed development servers.",
    )
    table_row_limit: int = Field(
        10,
        description="Maximum number of rows shown in the transaction table.",
        ge=1,
    )
    table_ordering: RowOrdering = Field(
        RowOrdering.INSERTION,
        description=(
            "Order used before taking the table tail. 'insertion' keeps fetch/append"
            " order, 'date' sorts by transaction date so the newest entries are shown."
        ),
    )
    preserve_date_on_edit: bool = Field(
        False,
        description="Keep the original transaction date when submitting an edit.",
    )
    export_filename: str = Field(
        "transactions.csv",
        description="File name offered for CSV downloads.",
    )
    load_on_startup: bool = Field(
        True,
        description="Fetch the transaction collection when the interface starts.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the interactive service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the interactive service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "BUDGETVIEW_"
        env_file = ".env"
        case_sensitive = False

    @validator("api_base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        """Normalise the endpoint so ``{base}/{id}`` never doubles slashes."""

        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_base_url must not be empty")
        return value


@lru_cache()
def get_settings() -> BudgetViewSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetViewSettings()
