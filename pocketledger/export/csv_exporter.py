"""Mini README: CSV export of ledger transactions.

Structure:
    * CSV_HEADER - column order of the export.
    * to_csv - render transactions as CSV text.
    * write_csv - write the same text to a file.

Expense amounts are written as negative numbers so spreadsheets can sum the
column directly.
"""

from __future__ import annotations

import csv
import io
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from ..finance.ledger import Transaction
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CSV_HEADER = ("Description", "Category", "Amount", "Type", "Date")
_CENT = Decimal("0.01")


def to_csv(transactions: Iterable[Transaction]) -> str:
    """Return CSV text with one header line and one row per transaction."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for transaction in transactions:
        writer.writerow(
            (
                transaction.description,
                transaction.category,
                f"{transaction.signed_amount.quantize(_CENT)}",
                transaction.transaction_type.value,
                transaction.display_date,
            )
        )
        count += 1
    LOGGER.debug("Rendered %s transactions as CSV", count)
    return buffer.getvalue()


def write_csv(transactions: Iterable[Transaction], destination: Path) -> Path:
    """Write the CSV export to ``destination``, creating parent directories."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(to_csv(transactions), encoding="utf-8")
    LOGGER.info("Exported ledger to %s", destination)
    return destination
