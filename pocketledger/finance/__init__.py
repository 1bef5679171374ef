"""Mini README: Ledger core for Pocket Ledger.

This package holds the transaction model and store, the pure filter and
aggregation functions, the edit-session controller and the display-independent
view model. Nothing in here knows about HTML or HTTP; the interface package
renders what ``build_view`` derives.
"""

from .aggregation import ChartSlices, LedgerSummary, balance, category_totals, chart_slices, summarise, total_expense, total_income
from .filters import FilterCriteria, TypeFilter, filter_transactions
from .formatting import MoneyFormat
from .ledger import Transaction, TransactionDraft, TransactionStore, TransactionType
from .session import EditSession, SessionMode
from .view import Dashboard, LedgerView, TransactionRow, build_view

__all__ = [
    "ChartSlices",
    "Dashboard",
    "EditSession",
    "FilterCriteria",
    "LedgerSummary",
    "LedgerView",
    "MoneyFormat",
    "SessionMode",
    "Transaction",
    "TransactionDraft",
    "TransactionRow",
    "TransactionStore",
    "TransactionType",
    "TypeFilter",
    "balance",
    "build_view",
    "category_totals",
    "chart_slices",
    "filter_transactions",
    "summarise",
    "total_expense",
    "total_income",
]
