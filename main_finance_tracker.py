"""Mini README: Entry point CLI for Pocket Ledger.

This script exposes a Typer CLI that starts the FastAPI dashboard, prints
totals for the persisted ledger and exports it as CSV. Every command honours
the same ``--search``/``--type``/``--month`` filters as the dashboard and
reads its storage location from ``POCKETLEDGER_*`` settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.errors import ValidationError
from pocketledger.export import to_csv, write_csv
from pocketledger.finance import FilterCriteria, LedgerView, MoneyFormat, build_view
from pocketledger.logging_utils import configure_root_logger
from pocketledger.storage import open_store

cli = typer.Typer(help="Run and inspect the Pocket Ledger personal finance tracker.")


def _load_view(search: str, type_filter: str, month: str) -> LedgerView:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        criteria = FilterCriteria.build(search, type_filter, month)
    except ValidationError as error:
        raise typer.BadParameter(str(error)) from error
    store = open_store(settings)
    return build_view(store.all(), criteria, MoneyFormat.from_settings(settings))


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot navigate to the wildcard address, so point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Pocket Ledger on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.is_production),
    )


@cli.command()
def summary(
    search: str = typer.Option("", help="Case-insensitive description filter."),
    type_filter: str = typer.Option("all", "--type", help="all, income or expense."),
    month: str = typer.Option("", help="Month key in YYYY-MM form."),
) -> None:
    """Print balance, income and expense totals for the filtered ledger."""

    view = _load_view(search, type_filter, month)
    money = MoneyFormat.from_settings(get_settings())
    typer.echo(f"Transactions: {view.summary.count}")
    typer.echo(f"Income:       {view.income_display}")
    typer.echo(f"Expenses:     {view.expense_display}")
    typer.echo(f"Balance:      {view.balance_display}")
    for category, amount in view.summary.expense_by_category.items():
        typer.echo(f"  {category}: {money.format(amount)}")


@cli.command()
def export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write CSV here instead of stdout."),
    search: str = typer.Option("", help="Case-insensitive description filter."),
    type_filter: str = typer.Option("all", "--type", help="all, income or expense."),
    month: str = typer.Option("", help="Month key in YYYY-MM form."),
) -> None:
    """Export the filtered ledger as CSV."""

    view = _load_view(search, type_filter, month)
    if output is None:
        typer.echo(to_csv(view.transactions), nl=False)
        return
    write_csv(view.transactions, output)
    typer.echo(f"Wrote {len(view.transactions)} transactions to {output}")


if __name__ == "__main__":
    cli()
