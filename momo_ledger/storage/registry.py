"""Mini README: Registry mapping backend names to ledger store classes.

Structure:
    * StoreRegistry - registration and instantiation of ``LedgerStore``
      implementations.
    * STORE_REGISTRY - process-wide registry preloaded with the bundled
      backends.

``build_store`` turns ``LedgerSettings`` into a ready store so entry points
only need the configured backend name.
"""

from __future__ import annotations

from typing import Dict, Iterable, Type

from ..configuration import LedgerSettings
from ..logging_utils import get_logger
from .base import LedgerStore
from .json_store import JsonFileLedgerStore
from .memory import InMemoryLedgerStore

LOGGER = get_logger(__name__)


class StoreRegistry:
    """Simple registry for mapping backend identifiers to store classes."""

    def __init__(self) -> None:
        self._stores: Dict[str, Type[LedgerStore]] = {}

    def register(self, store: Type[LedgerStore]) -> None:
        """Register a new store class with the registry."""

        identifier = store.backend_name.lower()
        LOGGER.debug("Registering ledger store '%s'", identifier)
        self._stores[identifier] = store

    def available_backends(self) -> Iterable[str]:
        """Return iterable of backend identifiers for display."""

        return sorted(self._stores.keys())

    def lookup(self, identifier: str) -> Type[LedgerStore]:
        """Return the store class registered under ``identifier``."""

        store_cls = self._stores.get(identifier.lower())
        if not store_cls:
            raise KeyError(f"Unknown ledger store '{identifier}'")
        return store_cls

    def create(self, identifier: str, **options: object) -> LedgerStore:
        """Instantiate the store matching the identifier."""

        LOGGER.info("Creating ledger store '%s'", identifier)
        return self.lookup(identifier)(**options)


STORE_REGISTRY = StoreRegistry()
STORE_REGISTRY.register(InMemoryLedgerStore)
STORE_REGISTRY.register(JsonFileLedgerStore)


def build_store(settings: LedgerSettings) -> LedgerStore:
    """Create the store selected by ``settings.store_backend``."""

    store_cls = STORE_REGISTRY.lookup(settings.store_backend)
    LOGGER.info("Building ledger store '%s' from settings", settings.store_backend)
    return store_cls.from_settings(settings)
