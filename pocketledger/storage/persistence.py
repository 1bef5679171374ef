"""Mini README: Persistence adapter writing the whole ledger into one key/value slot.

Structure:
    * KeyValueStore - protocol for a string-valued slot store.
    * InMemoryKeyValueStore - dictionary backed store used in tests and demos.
    * JsonFileKeyValueStore - one file per slot inside a data directory.
    * PersistenceAdapter - serialises transactions to JSON text and back.

Writes always replace the entire slot value; the file backend writes to a
temporary sibling and swaps it into place so readers never see a partial list.
Loading never raises: a missing slot, unparseable text or any invalid record
yields an empty ledger and a logged warning.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from ..errors import LedgerError, PersistenceError
from ..finance.ledger import DEFAULT_CATEGORY, Transaction
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class KeyValueStore(Protocol):
    """Minimal slot storage mirroring a browser's local storage API."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Keep slot values in a dictionary for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileKeyValueStore:
    """Store each slot as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not key or any(separator in key for separator in ("/", "\\", "..")):
            raise ValueError(f"Invalid storage slot name: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        descriptor, temp_name = tempfile.mkstemp(dir=str(self.directory), prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise


class PersistenceAdapter:
    """Load and save the ledger as a JSON array held in a single slot."""

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        slot: str = "transactions",
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self.backend = backend
        self.slot = slot
        self.default_category = default_category

    def load(self) -> List[Transaction]:
        """Return the persisted ledger, or an empty list when nothing usable is stored."""

        try:
            raw = self.backend.get_item(self.slot)
        except (OSError, ValueError) as error:
            LOGGER.warning("Could not read ledger slot '%s': %s", self.slot, error)
            return []
        if raw is None or not raw.strip():
            LOGGER.debug("Ledger slot '%s' is empty; starting with no transactions", self.slot)
            return []

        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("ledger slot does not hold a list")
            transactions = [
                Transaction.from_dict(record, default_category=self.default_category)
                for record in payload
                if _is_record(record)
            ]
            if len(transactions) != len(payload):
                raise ValueError("ledger slot holds non-object entries")
        except (ValueError, TypeError, LedgerError) as error:
            LOGGER.warning("Discarding malformed ledger in slot '%s': %s", self.slot, error)
            return []

        LOGGER.debug("Loaded %s transactions from slot '%s'", len(transactions), self.slot)
        return transactions

    def save(self, transactions: Sequence[Transaction]) -> None:
        """Serialise and write the full ledger, replacing the previous value."""

        text = json.dumps([transaction.as_dict() for transaction in transactions], ensure_ascii=False)
        try:
            self.backend.set_item(self.slot, text)
        except (OSError, ValueError) as error:
            raise PersistenceError(f"could not write slot '{self.slot}': {error}") from error
        LOGGER.debug("Saved %s transactions to slot '%s'", len(transactions), self.slot)


def _is_record(value: object) -> bool:
    return isinstance(value, dict)
