"""Mini README: Fixed-locale currency formatting.

The ledger has a single denomination, so formatting is a symbol plus a pair of
separators rather than a full locale database. Defaults follow the Brazilian
real convention (``R$ 1.234,56``).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from ..configuration import LedgerSettings
from .ledger import TransactionType

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class MoneyFormat:
    symbol: str = "R$"
    decimal_separator: str = ","
    thousands_separator: str = "."

    @classmethod
    def from_settings(cls, settings: LedgerSettings) -> "MoneyFormat":
        return cls(
            symbol=settings.currency_symbol,
            decimal_separator=settings.decimal_separator,
            thousands_separator=settings.thousands_separator,
        )

    def number(self, amount: Union[Decimal, int, float]) -> str:
        """Format the magnitude with two decimals and grouping, without symbol."""

        quantised = Decimal(str(amount)).copy_abs().quantize(_CENT, rounding=ROUND_HALF_UP)
        grouped = f"{quantised:,.2f}"
        return (
            grouped.replace(",", "\0")
            .replace(".", self.decimal_separator)
            .replace("\0", self.thousands_separator)
        )

    def format(self, amount: Union[Decimal, int, float]) -> str:
        """Format ``amount`` with symbol; negatives get a leading minus."""

        sign = "-" if Decimal(str(amount)) < 0 else ""
        return f"{sign}{self.symbol} {self.number(amount)}"

    def format_signed(self, amount: Decimal, transaction_type: TransactionType) -> str:
        """Prefix ``+``/``-`` from the transaction direction, as shown in the table."""

        prefix = "+" if transaction_type is TransactionType.INCOME else "-"
        return f"{prefix} {self.symbol} {self.number(amount)}"
