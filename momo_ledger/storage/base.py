"""Mini README: Abstract contract for per-user ledger persistence.

Structure:
    * LedgerStore - interface implemented by storage backends.

A store maps a user identifier to that user's complete, ordered transaction
list. ``save`` always overwrites the full list and must leave the previous
copy intact when it fails. ``load`` returns ``None`` when the user has no
stored ledger yet, which the engine treats as an empty start.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..ledger.models import Transaction

if TYPE_CHECKING:
    from ..configuration import LedgerSettings


class LedgerStore(ABC):
    """Base interface for ledger storage backends."""

    backend_name: str = "generic"

    @classmethod
    def from_settings(cls, settings: "LedgerSettings") -> "LedgerStore":
        """Build the store from runtime settings; backends override as needed."""

        return cls()

    @abstractmethod
    def load(self, user_id: str) -> Optional[List[Transaction]]:
        """Return the user's ordered ledger, or ``None`` when nothing is stored."""

    @abstractmethod
    def save(self, user_id: str, transactions: Sequence[Transaction]) -> None:
        """Persist the full ordered ledger, raising ``PersistenceFailure`` on error."""

    def metadata(self) -> dict:
        """Return diagnostic metadata for status displays."""

        return {"backend": self.backend_name}
