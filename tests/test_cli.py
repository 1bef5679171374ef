"""Mini README: Tests for the Typer command line entry point."""

from __future__ import annotations

from datetime import date

from typer.testing import CliRunner

from main_finance_tracker import cli
from pocketledger.configuration import get_settings
from pocketledger.storage import open_store

runner = CliRunner()


def _seed() -> None:
    store = open_store(get_settings())
    store.add({"description": "Salary", "amount": "1000", "type": "income", "date": date(2024, 1, 5)})
    store.add({"description": "Rent", "amount": "400", "type": "expense", "date": date(2024, 1, 10)})
    store.add({"description": "Market", "amount": "75", "type": "expense", "date": date(2024, 2, 2), "category": "Food"})


def test_summary_prints_filtered_totals() -> None:
    _seed()
    result = runner.invoke(cli, ["summary", "--month", "2024-01"])

    assert result.exit_code == 0, result.output
    assert "Transactions: 2" in result.stdout
    assert "Balance:      R$ 600,00" in result.stdout


def test_export_writes_csv_to_stdout() -> None:
    _seed()
    result = runner.invoke(cli, ["export", "--type", "expense"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "Description,Category,Amount,Type,Date",
        "Rent,Other,-400.00,expense,10/01/2024",
        "Market,Food,-75.00,expense,02/02/2024",
    ]


def test_export_writes_file(tmp_path) -> None:
    _seed()
    destination = tmp_path / "out" / "ledger.csv"
    result = runner.invoke(cli, ["export", "--output", str(destination)])

    assert result.exit_code == 0, result.output
    assert destination.read_text(encoding="utf-8").count("\n") == 4


def test_invalid_filter_is_reported() -> None:
    result = runner.invoke(cli, ["summary", "--type", "transfers"])
    assert result.exit_code != 0
