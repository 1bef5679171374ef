"""Mini README: Exception taxonomy shared by the ledger, storage and interface.

Structure:
    * LedgerError - base class for every error raised deliberately by the package.
    * ValidationError - rejected user input; nothing was mutated.
    * NotFoundError - an identifier that the store does not hold (UI/state desync).
    * PersistenceError - the key/value backend refused to load or save.

The validation and lookup errors also inherit from ``ValueError`` and
``LookupError`` so callers that only know the builtin hierarchy still catch
them.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for Pocket Ledger errors."""


class ValidationError(LedgerError, ValueError):
    """Raised when a draft or patch fails validation."""


class NotFoundError(LedgerError, LookupError):
    """Raised when an operation references an unknown transaction id."""

    def __init__(self, transaction_id: object) -> None:
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class PersistenceError(LedgerError):
    """Raised when the persistence backend cannot complete a write."""
