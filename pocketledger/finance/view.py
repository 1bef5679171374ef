"""Mini README: Display-independent view model for the dashboard.

Structure:
    * TransactionRow - one table row with pre-formatted values.
    * LedgerView - rows, totals and chart feed for a set of filter criteria.
    * build_view - derive a ``LedgerView`` from transactions and criteria.
    * Dashboard - keeps store, edit session and criteria together and
      re-derives its view whenever the store changes.

Nothing here touches HTML; the web interface and the CLI both render from a
``LedgerView``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .aggregation import LedgerSummary, summarise
from .filters import FilterCriteria
from .formatting import MoneyFormat
from .ledger import Transaction, TransactionStore
from .session import EditSession

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class TransactionRow:
    transaction_id: int
    description: str
    amount: str
    date: str
    category: str
    transaction_type: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.transaction_id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "category": self.category,
            "type": self.transaction_type,
        }


@dataclass(frozen=True)
class LedgerView:
    criteria: FilterCriteria
    transactions: List[Transaction]
    rows: List[TransactionRow]
    summary: LedgerSummary
    balance_display: str
    income_display: str
    expense_display: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "filters": {
                "search": self.criteria.search_text,
                "type": self.criteria.type_filter.value,
                "month": self.criteria.month_filter,
            },
            "rows": [row.as_dict() for row in self.rows],
            "totals": {
                "balance": self.balance_display,
                "income": self.income_display,
                "expense": self.expense_display,
                "count": self.summary.count,
            },
            "chart": self.summary.chart.as_dict(),
        }


def build_view(
    transactions: Iterable[Transaction],
    criteria: Optional[FilterCriteria] = None,
    money: Optional[MoneyFormat] = None,
) -> LedgerView:
    """Filter ``transactions`` and compute every aggregate over that subset."""

    criteria = criteria or FilterCriteria()
    money = money or MoneyFormat()
    candidates = list(transactions)
    visible = criteria.apply(candidates)
    summary = summarise(visible)
    rows = [
        TransactionRow(
            transaction_id=transaction.transaction_id,
            description=transaction.description,
            amount=money.format_signed(transaction.amount, transaction.transaction_type),
            date=transaction.display_date,
            category=transaction.category,
            transaction_type=transaction.transaction_type.value,
        )
        for transaction in visible
    ]
    LOGGER.debug("Derived view with %s of %s rows visible", len(rows), len(candidates))
    return LedgerView(
        criteria=criteria,
        transactions=visible,
        rows=rows,
        summary=summary,
        balance_display=money.format(summary.balance),
        income_display=money.format(summary.income),
        expense_display=money.format(summary.expense),
    )


class Dashboard:
    """Hold the current filters and keep a fresh view of the ledger."""

    def __init__(self, store: TransactionStore, money: Optional[MoneyFormat] = None) -> None:
        self.store = store
        self.session = EditSession(store)
        self.money = money or MoneyFormat()
        self._criteria = FilterCriteria()
        self._view = build_view(store.all(), self._criteria, self.money)
        store.subscribe(self._on_store_change)

    def _on_store_change(self, store: TransactionStore) -> None:
        self._view = build_view(store.all(), self._criteria, self.money)

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def view(self) -> LedgerView:
        return self._view

    def apply_filters(self, criteria: FilterCriteria) -> LedgerView:
        if criteria != self._criteria:
            self._criteria = criteria
            self._view = build_view(self.store.all(), criteria, self.money)
        return self._view

    def close(self) -> None:
        self.store.unsubscribe(self._on_store_change)
