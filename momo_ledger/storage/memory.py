"""Mini README: Dictionary-backed ledger store for tests and demos.

Ledgers are kept in serialised form so that reads return fresh objects and
exercise the same codec as the JSON backend. ``fail_saves`` lets tests
simulate a storage fault.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..ledger.errors import PersistenceFailure
from ..ledger.models import Transaction
from ..logging_utils import get_logger
from .base import LedgerStore

LOGGER = get_logger(__name__)


class InMemoryLedgerStore(LedgerStore):
    """Keep every user's ledger in process memory."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._ledgers: Dict[str, List[Dict[str, object]]] = {}
        self.fail_saves = False
        self.save_calls = 0

    def load(self, user_id: str) -> Optional[List[Transaction]]:
        records = self._ledgers.get(user_id)
        if records is None:
            return None
        return [Transaction.from_dict(record) for record in records]

    def save(self, user_id: str, transactions: Sequence[Transaction]) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise PersistenceFailure(f"Simulated write failure for user {user_id}")
        self._ledgers[user_id] = [transaction.as_dict() for transaction in transactions]
        LOGGER.debug("Stored %s transactions for user %s in memory", len(transactions), user_id)
