"""Mini README: Interactive interfaces for Pocket Ledger.

Exports the FastAPI application factory that powers the browser dashboard.
The command line entry point lives in ``main_finance_tracker.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
