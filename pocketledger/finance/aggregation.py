"""Mini README: Aggregates derived from any subset of the ledger.

Structure:
    * total_income / total_expense / balance - decimal sums.
    * ChartSlices - income/expense pair plus an explicit ``has_data`` flag.
    * chart_slices - feed for the doughnut chart.
    * category_totals - per-category split in first-seen order.
    * LedgerSummary / summarise - everything the dashboard cards need.

Callers pass the *filtered* subset so the cards and chart follow the filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional, Sequence

from .ledger import Transaction, TransactionType

ZERO = Decimal("0")


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions if t.transaction_type is TransactionType.INCOME), ZERO)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions if t.transaction_type is TransactionType.EXPENSE), ZERO)


def balance(transactions: Sequence[Transaction]) -> Decimal:
    return total_income(transactions) - total_expense(transactions)


@dataclass(frozen=True)
class ChartSlices:
    """Non-negative chart values; ``has_data`` is false when both are zero."""

    income: Decimal
    expense: Decimal
    has_data: bool

    def as_dict(self) -> Dict[str, object]:
        return {"income": float(self.income), "expense": float(self.expense), "has_data": self.has_data}


def chart_slices(transactions: Sequence[Transaction]) -> ChartSlices:
    income = total_income(transactions)
    expense = total_expense(transactions)
    return ChartSlices(income=income, expense=expense, has_data=bool(income or expense))


def category_totals(
    transactions: Iterable[Transaction],
    transaction_type: Optional[TransactionType] = None,
) -> Dict[str, Decimal]:
    """Sum amounts per category, optionally restricted to one direction."""

    totals: Dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction_type is not None and transaction.transaction_type is not transaction_type:
            continue
        totals[transaction.category] = totals.get(transaction.category, ZERO) + transaction.amount
    return totals


@dataclass(frozen=True)
class LedgerSummary:
    income: Decimal
    expense: Decimal
    balance: Decimal
    count: int
    chart: ChartSlices
    expense_by_category: Dict[str, Decimal]


def summarise(transactions: Sequence[Transaction]) -> LedgerSummary:
    """Compute every dashboard aggregate for ``transactions``."""

    chart = chart_slices(transactions)
    return LedgerSummary(
        income=chart.income,
        expense=chart.expense,
        balance=chart.income - chart.expense,
        count=len(transactions),
        chart=chart,
        expense_by_category=category_totals(transactions, TransactionType.EXPENSE),
    )
