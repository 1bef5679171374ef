"""Mini README: Export helpers for Pocket Ledger.

Currently provides CSV export of any transaction sequence, typically the
filtered view the user is looking at.
"""

from .csv_exporter import CSV_HEADER, to_csv, write_csv

__all__ = ["CSV_HEADER", "to_csv", "write_csv"]
