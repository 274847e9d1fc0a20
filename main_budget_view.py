"""Mini README: Entry point CLI for the Budget View client.

This script exposes a Typer CLI that starts the FastAPI interface and offers
headless commands for printing the balance, printing the transaction table
and exporting CSV files. Settings come from ``BUDGETVIEW_`` environment
variables when available.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from budgetview.configuration import BudgetViewSettings, get_settings
from budgetview.export import TransactionCsvExporter
from budgetview.interface import TransactionViewController
from budgetview.logging_utils import configure_root_logger, level_for_environment

cli = typer.Typer(help="Browse, export and serve your budget transactions.")


def _load_controller(api_base_url: Optional[str]) -> TransactionViewController:
    """Fetch the collection once, exiting non-zero when the service fails."""

    settings = get_settings()
    if api_base_url:
        settings = BudgetViewSettings(**{**settings.model_dump(), "api_base_url": api_base_url})
    configure_root_logger(level_for_environment(settings.environment))
    controller = TransactionViewController.from_settings(settings)
    if not asyncio.run(controller.fetch_transactions()):
        message = controller.error.message if controller.error else "unknown error"
        typer.echo(f"Could not load transactions: {message}", err=True)
        raise typer.Exit(code=1)
    return controller


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Budget View on {effective_host}:{effective_port} "
        f"against {settings.api_base_url}.\n"
        f"Open http://{browser_host}:{effective_port}/api/view"
    )
    uvicorn.run(
        "budgetview.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def balance(
    api_base_url: str = typer.Option(None, help="Override the transaction service endpoint."),
) -> None:
    """Print the signed balance of every transaction."""

    controller = _load_controller(api_base_url)
    display = controller.balance
    typer.echo(f"Balance: {display.text}" + (" (negative)" if display.negative else ""))


@cli.command()
def table(
    api_base_url: str = typer.Option(None, help="Override the transaction service endpoint."),
) -> None:
    """Print the rows the transaction table shows."""

    controller = _load_controller(api_base_url)
    typer.echo("ID\tAmount\tCategory\tDate\tDescription")
    for row in controller.rows:
        typer.echo(f"{row.transaction_id}\t{row.amount}\t{row.category}\t{row.date}\t{row.description}")


@cli.command()
def export(
    output: Path = typer.Option(None, help="Destination file; defaults to the configured export name."),
    raw: bool = typer.Option(False, help="Join fields with commas without quoting."),
    api_base_url: str = typer.Option(None, help="Override the transaction service endpoint."),
) -> None:
    """Fetch the collection and write it to a CSV file."""

    controller = _load_controller(api_base_url)
    destination = output or Path(get_settings().export_filename)
    TransactionCsvExporter(raw=raw).export(controller.store.snapshot(), destination)
    typer.echo(f"Exported {len(controller.store)} transactions to {destination}")


if __name__ == "__main__":
    cli()
