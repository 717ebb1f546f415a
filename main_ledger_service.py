"""Mini README: Entry point CLI for the Momo Ledger service.

This script exposes a Typer CLI to start the FastAPI application and to
inspect a merchant's stored ledger from the terminal. Settings come from
``MOMO_LEDGER_*`` environment variables unless overridden by options.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from momo_ledger.configuration import get_settings
from momo_ledger.ledger import LedgerEngine, LedgerError
from momo_ledger.logging_utils import configure_root_logger
from momo_ledger.storage import build_store
from momo_ledger.utils import format_amount, format_time

cli = typer.Typer(help="Run and inspect the Momo Ledger merchant service.")


def _open_engine(user_id: str) -> LedgerEngine:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        return LedgerEngine(user_id, build_store(settings), date_policy=settings.date_policy)
    except LedgerError as error:
        typer.echo(f"Could not open ledger for {user_id}: {error}", err=True)
        raise typer.Exit(code=1) from error


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
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Momo Ledger on {effective_host}:{effective_port} "
        f"({settings.store_backend} store, {settings.date_policy.value} days).\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "momo_ledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    user_id: str = typer.Argument(..., help="Merchant user id."),
    on: Optional[str] = typer.Option(None, help="Day as YYYY-MM-DD; defaults to today."),
) -> None:
    """Print the day's money in, money out, airtime and balance."""

    engine = _open_engine(user_id)
    try:
        day = engine.summarise_day(on)
    except LedgerError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=2) from error
    typer.echo(f"Summary for {user_id} on {day.day.isoformat()}")
    typer.echo(f"  Money in:  {format_amount(day.received)}")
    typer.echo(f"  Money out: {format_amount(day.sent)}")
    typer.echo(f"  Airtime:   {format_amount(day.airtime)}")
    typer.echo(f"  Balance:   {format_amount(day.balance)}")
    typer.echo(f"  Active: {day.active_count}  Cancelled: {day.cancelled_count}")


@cli.command()
def history(
    user_id: str = typer.Argument(..., help="Merchant user id."),
    on: Optional[str] = typer.Option(None, help="Day as YYYY-MM-DD; defaults to today."),
) -> None:
    """List the day's transactions, newest first."""

    engine = _open_engine(user_id)
    try:
        entries = engine.list_for_date(on or engine.today())
    except LedgerError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=2) from error
    if not entries:
        typer.echo("No transactions recorded.")
        return
    for entry in entries:
        line = (
            f"{format_time(entry.timestamp)}  {entry.transaction_type.value:<10} "
            f"{format_amount(entry.amount):>12}  {entry.customer_name} ({entry.customer_phone})"
        )
        if entry.reference:
            line += f"  ref {entry.reference}"
        if entry.is_cancelled:
            line += f"  [cancelled: {entry.cancel_reason}]"
        typer.echo(line)


if __name__ == "__main__":
    cli()
