"""Mini README: Edit-session controller deciding what a form submission does.

Structure:
    * SessionMode - ``adding`` or ``editing``.
    * EditSession - two-state machine wrapping a ``TransactionStore``.
    * Confirmer - async callback answering "really delete?" prompts.

The session starts in ``adding``. ``begin_edit`` switches to editing a given
id and returns the values to pre-fill the form with; the next ``submit``
updates that record and drops back to ``adding``. Destructive operations await
a confirmation callback and leave the store untouched unless it answers True.
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Dict, Optional

from ..errors import NotFoundError
from ..logging_utils import get_logger
from .ledger import PatchLike, Transaction, TransactionStore

LOGGER = get_logger(__name__)

Confirmer = Callable[[str], Awaitable[bool]]


class SessionMode(str, Enum):
    ADDING = "adding"
    EDITING = "editing"


class EditSession:
    """Mediate between form submissions and the store."""

    def __init__(self, store: TransactionStore) -> None:
        self.store = store
        self._editing_id: Optional[int] = None

    @property
    def mode(self) -> SessionMode:
        return SessionMode.ADDING if self._editing_id is None else SessionMode.EDITING

    @property
    def editing_id(self) -> Optional[int]:
        return self._editing_id

    def begin_edit(self, transaction_id: int) -> Dict[str, object]:
        """Enter edit mode for ``transaction_id`` and return form pre-fill values."""

        transaction = self.store.get(transaction_id)
        self._editing_id = transaction_id
        LOGGER.debug("Editing transaction %s", transaction_id)
        return {
            "id": transaction.transaction_id,
            "description": transaction.description,
            "amount": str(transaction.amount),
            "type": transaction.transaction_type.value,
            "category": transaction.category,
            "date": transaction.occurred_on.isoformat(),
        }

    def cancel_edit(self) -> None:
        if self._editing_id is not None:
            LOGGER.debug("Edit of transaction %s cancelled", self._editing_id)
        self._editing_id = None

    def submit(self, draft: PatchLike) -> Transaction:
        """Add or update depending on the current mode.

        Validation failures keep the current mode so the form can be corrected.
        """

        if self._editing_id is None:
            return self.store.add(draft)

        editing_id = self._editing_id
        try:
            updated = self.store.update(editing_id, draft)
        except NotFoundError:
            LOGGER.error("Edited transaction %s vanished; returning to add mode", editing_id)
            self._editing_id = None
            raise
        self._editing_id = None
        return updated

    async def remove(self, transaction_id: int, confirm: Confirmer) -> bool:
        """Delete after confirmation; returns whether the deletion happened."""

        transaction = self.store.get(transaction_id)
        if not await confirm(f"Delete '{transaction.description}'?"):
            LOGGER.debug("Deletion of transaction %s declined", transaction_id)
            return False
        self.store.remove(transaction_id)
        if self._editing_id == transaction_id:
            self._editing_id = None
        return True

    async def clear(self, confirm: Confirmer) -> bool:
        """Empty the ledger after confirmation; returns whether it happened."""

        if not await confirm(f"Delete all {len(self.store)} transactions?"):
            LOGGER.debug("Clearing the ledger declined")
            return False
        self.store.clear()
        self._editing_id = None
        return True
