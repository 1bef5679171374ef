"""Mini README: Build a persisted ``TransactionStore`` from settings."""

from __future__ import annotations

from typing import Optional

from ..configuration import LedgerSettings, get_settings
from ..finance.ledger import TransactionStore
from ..logging_utils import get_logger
from .persistence import JsonFileKeyValueStore, PersistenceAdapter

LOGGER = get_logger(__name__)


def open_store(settings: Optional[LedgerSettings] = None) -> TransactionStore:
    """Load the ledger from the configured data directory."""

    settings = settings or get_settings()
    adapter = PersistenceAdapter(
        JsonFileKeyValueStore(settings.data_directory),
        slot=settings.storage_slot,
        default_category=settings.default_category,
    )
    store = TransactionStore(adapter, default_category=settings.default_category)
    LOGGER.info("Opened ledger '%s' in %s (%s transactions)", settings.storage_slot, settings.data_directory, len(store))
    return store
