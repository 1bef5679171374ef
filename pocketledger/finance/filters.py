"""Mini README: Pure filtering over ledger snapshots.

Structure:
    * TypeFilter - ``all`` / ``income`` / ``expense`` selector.
    * FilterCriteria - the three user-facing filter inputs bundled together.
    * filter_transactions - order-preserving conjunctive filter.

Filtering never mutates its input and applying the same criteria twice yields
the same result, so the dashboard can recompute it after every change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

from ..errors import ValidationError
from .ledger import Transaction

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class TypeFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: Union[str, "TypeFilter", None]) -> "TypeFilter":
        if isinstance(value, cls):
            return value
        normalised = (value or "all").strip().lower()
        try:
            return cls(normalised)
        except ValueError as error:
            raise ValidationError(f"Unsupported type filter: {value}") from error


@dataclass(frozen=True)
class FilterCriteria:
    """Search text, type selector and ``YYYY-MM`` month key."""

    search_text: str = ""
    type_filter: TypeFilter = TypeFilter.ALL
    month_filter: str = ""

    @classmethod
    def build(
        cls,
        search_text: str | None = "",
        type_filter: Union[str, TypeFilter, None] = "all",
        month_filter: str | None = "",
    ) -> "FilterCriteria":
        """Normalise raw query values, rejecting malformed month keys."""

        month = (month_filter or "").strip()
        if month and not _MONTH_PATTERN.match(month):
            raise ValidationError(f"Month filter must look like YYYY-MM, got {month_filter!r}")
        return cls(
            search_text=(search_text or "").strip(),
            type_filter=TypeFilter.from_str(type_filter),
            month_filter=month,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.search_text or self.month_filter) or self.type_filter is not TypeFilter.ALL

    def apply(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        return filter_transactions(transactions, self.search_text, self.type_filter, self.month_filter)


def filter_transactions(
    transactions: Iterable[Transaction],
    search_text: str = "",
    type_filter: Union[str, TypeFilter] = TypeFilter.ALL,
    month_filter: str = "",
) -> List[Transaction]:
    """Return the transactions matching every supplied predicate, in input order."""

    needle = (search_text or "").casefold()
    selected_type = TypeFilter.from_str(type_filter)
    month = month_filter or ""

    return [
        transaction
        for transaction in transactions
        if (not needle or needle in transaction.description.casefold())
        and (selected_type is TypeFilter.ALL or transaction.transaction_type.value == selected_type.value)
        and (not month or transaction.date_month == month)
    ]
