"""Mini README: Storage backends for the ledger.

The ``persistence`` module exposes the slot-based key/value stores and the
adapter that turns the transaction list into JSON text. ``open_store`` wires
them together from settings so the CLI and the web interface share one code
path.
"""

from .persistence import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore, PersistenceAdapter
from .factory import open_store

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "PersistenceAdapter",
    "open_store",
]
