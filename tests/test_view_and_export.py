"""Mini README: Tests for view-model derivation, currency formatting and CSV export."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pocketledger.configuration import LedgerSettings
from pocketledger.export import to_csv
from pocketledger.finance import Dashboard, FilterCriteria, MoneyFormat, TransactionStore, TransactionType, build_view


def _store() -> TransactionStore:
    store = TransactionStore(today=lambda: date(2024, 1, 20))
    store.add({"description": "Salary", "amount": "1000", "type": "income", "date": "2024-01-05"})
    store.add({"description": "Rent", "amount": "1234.5", "type": "expense", "date": "2024-01-10", "category": "Housing"})
    return store


def test_money_format_defaults_and_custom_separators() -> None:
    money = MoneyFormat()
    assert money.format(Decimal("1234.5")) == "R$ 1.234,50"
    assert money.format(Decimal("-234.5")) == "-R$ 234,50"
    assert money.format_signed(Decimal("1000"), TransactionType.INCOME) == "+ R$ 1.000,00"
    assert money.format_signed(Decimal("400"), TransactionType.EXPENSE) == "- R$ 400,00"

    dollars = MoneyFormat(symbol="$", decimal_separator=".", thousands_separator=",")
    assert dollars.format(Decimal("1234567.891")) == "$ 1,234,567.89"


def test_build_view_formats_rows_and_totals() -> None:
    view = build_view(_store().all())

    assert [row.amount for row in view.rows] == ["+ R$ 1.000,00", "- R$ 1.234,50"]
    assert view.rows[0].date == "05/01/2024"
    assert view.balance_display == "-R$ 234,50"
    assert view.as_dict()["chart"] == {"income": 1000.0, "expense": 1234.5, "has_data": True}


def test_build_view_without_matches_flags_empty_chart() -> None:
    view = build_view(_store().all(), FilterCriteria.build("", "all", "2023-12"))

    assert view.rows == []
    assert view.summary.chart.has_data is False
    assert view.income_display == "R$ 0,00"


def test_dashboard_refreshes_after_store_mutations_and_filter_changes() -> None:
    store = _store()
    dashboard = Dashboard(store)
    dashboard.apply_filters(FilterCriteria.build("", "expense", ""))
    assert [row.description for row in dashboard.view.rows] == ["Rent"]

    store.add({"description": "Market", "amount": "50", "type": "expense"})
    assert [row.description for row in dashboard.view.rows] == ["Rent", "Market"]
    assert dashboard.view.expense_display == "R$ 1.284,50"

    dashboard.close()
    store.add({"description": "Bus", "amount": "5", "type": "expense"})
    assert len(dashboard.view.rows) == 2


def test_csv_export_signs_expenses_and_quotes_commas() -> None:
    store = _store()
    store.add({"description": "Dinner, with friends", "amount": "80", "type": "expense", "date": "2024-01-12"})

    lines = to_csv(store.all()).splitlines()
    assert lines == [
        "Description,Category,Amount,Type,Date",
        "Salary,Other,1000.00,income,05/01/2024",
        "Rent,Housing,-1234.50,expense,10/01/2024",
        '"Dinner, with friends",Other,-80.00,expense,12/01/2024',
    ]


def test_csv_export_of_empty_ledger_is_header_only() -> None:
    assert to_csv([]) == "Description,Category,Amount,Type,Date\n"


def test_money_format_from_settings_uses_configured_separators() -> None:
    settings = LedgerSettings(currency_symbol="$", decimal_separator=".", thousands_separator=",")
    assert MoneyFormat.from_settings(settings).format(Decimal("1234.5")) == "$ 1,234.50"
