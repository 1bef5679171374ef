"""Mini README: Core package initializer for Pocket Ledger.

Pocket Ledger is a small personal finance tracker: a persisted ledger of
income and expense entries with filters, totals, a chart feed and CSV export,
served through a FastAPI dashboard. This module only re-exports the logger
factory so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
