"""Mini README: Ledger persistence backends.

The ``base`` module defines the ``LedgerStore`` contract; ``memory`` and
``json_store`` implement it, and ``registry`` selects one by name from the
runtime settings.
"""

from .base import LedgerStore
from .json_store import JsonFileLedgerStore
from .memory import InMemoryLedgerStore
from .registry import STORE_REGISTRY, StoreRegistry, build_store

__all__ = [
    "InMemoryLedgerStore",
    "JsonFileLedgerStore",
    "LedgerStore",
    "STORE_REGISTRY",
    "StoreRegistry",
    "build_store",
]
