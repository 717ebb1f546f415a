"""Mini README: Ledger engine owning one merchant's transaction list.

Structure:
    * LedgerEngine - add/cancel/delete state machine with write-through
      persistence and day partitioning.

The engine is bound to a single user identifier for its whole life; a new
user means a new engine (see ``momo_ledger.session``). The list is kept
newest first in insertion order and is only ever changed by ``add``,
``cancel`` and ``delete``. Records are frozen; cancelling replaces the entry
at the same position with a cancelled copy. After each change the full list
is written to the injected ``LedgerStore``. A failed write keeps the in-memory
change, emits a ``PersistenceWarning`` and is retried implicitly by the next
successful save.
"""

from __future__ import annotations

import uuid
import warnings
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Callable, List, Optional, Union

from ..configuration import DatePolicy
from ..logging_utils import get_logger
from .aggregator import DailySummary, summarise
from .errors import (
    PersistenceFailure,
    PersistenceWarning,
    TransactionAlreadyCancelled,
    TransactionNotFound,
    ValidationError,
)
from .models import (
    Transaction,
    TransactionStatus,
    TransactionType,
    derive_day,
    parse_amount,
    parse_day,
)

if TYPE_CHECKING:
    from ..storage.base import LedgerStore

LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_text(value: Optional[str], field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field_name} must not be empty")
    return text


class LedgerEngine:
    """Manage a single user's ordered ledger."""

    def __init__(
        self,
        user_id: str,
        store: "LedgerStore",
        *,
        clock: Clock = utc_now,
        date_policy: Union[DatePolicy, str] = DatePolicy.UTC,
    ) -> None:
        self.user_id = _require_text(user_id, "User id")
        self._store = store
        self._clock = clock
        self.date_policy = DatePolicy(date_policy)
        self.persistence_pending = False
        self.last_persistence_error: Optional[str] = None
        self._transactions: List[Transaction] = self._load()
        LOGGER.debug(
            "Ledger engine for user %s initialised with %s transactions",
            self.user_id,
            len(self._transactions),
        )

    def _load(self) -> List[Transaction]:
        # Read faults propagate: starting empty would overwrite the stored copy on the next save.
        stored = self._store.load(self.user_id)
        if stored is None:
            return []
        seen = set()
        for transaction in stored:
            if transaction.transaction_id in seen:
                raise PersistenceFailure(
                    f"Stored ledger for {self.user_id} repeats id {transaction.transaction_id}"
                )
            seen.add(transaction.transaction_id)
        return list(stored)

    def _persist(self) -> None:
        """Write the full ledger; failures are reported, never rolled back."""

        try:
            self._store.save(self.user_id, list(self._transactions))
        except PersistenceFailure as error:
            self.persistence_pending = True
            self.last_persistence_error = str(error)
            LOGGER.warning(
                "Ledger for user %s not persisted; in-memory state is ahead: %s",
                self.user_id,
                error,
            )
            warnings.warn(str(error), PersistenceWarning, stacklevel=3)
            return
        if self.persistence_pending:
            LOGGER.info("Ledger for user %s persisted again after earlier failure", self.user_id)
        self.persistence_pending = False
        self.last_persistence_error = None

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def _next_id(self) -> str:
        """Generate an identifier not already present in the ledger."""

        existing = {transaction.transaction_id for transaction in self._transactions}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in existing:
                return candidate

    def _find(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        return None

    @property
    def transactions(self) -> List[Transaction]:
        """Return the full ledger, newest first."""

        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        transaction = self._find(transaction_id)
        if transaction is None:
            raise TransactionNotFound(transaction_id)
        return transaction

    def add(
        self,
        transaction_type: Union[TransactionType, str],
        amount: object,
        customer_name: str,
        customer_phone: str,
        reference: Optional[str] = "",
    ) -> Transaction:
        """Record a new active transaction at the head of the ledger."""

        kind = TransactionType.from_str(transaction_type)
        value = parse_amount(amount)
        name = _require_text(customer_name, "Customer name")
        phone = _require_text(customer_phone, "Customer phone")

        now = self._now()
        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=kind,
            amount=value,
            customer_name=name,
            customer_phone=phone,
            reference=(reference or "").strip(),
            timestamp=now,
            occurred_on=derive_day(now, self.date_policy),
        )
        self._transactions.insert(0, transaction)
        LOGGER.info(
            "Recorded %s of %s for %s (%s)",
            kind.value,
            value,
            name,
            transaction.transaction_id,
        )
        self._persist()
        return transaction

    def cancel(self, transaction_id: str, reason: str) -> bool:
        """Mark a transaction cancelled; ``False`` when the id is unknown.

        Cancelling twice raises ``TransactionAlreadyCancelled`` so the first
        ``cancelled_at`` and ``cancel_reason`` stay as the audit record.
        """

        cleaned_reason = _require_text(reason, "Cancellation reason")
        transaction = self._find(transaction_id)
        if transaction is None:
            LOGGER.info("Cancel ignored: transaction %s not found", transaction_id)
            return False
        if transaction.status is TransactionStatus.CANCELLED:
            raise TransactionAlreadyCancelled(transaction_id)

        index = self._transactions.index(transaction)
        self._transactions[index] = transaction.cancelled(self._now(), cleaned_reason)
        LOGGER.info("Cancelled transaction %s: %s", transaction_id, cleaned_reason)
        self._persist()
        return True

    def delete(self, transaction_id: str) -> bool:
        """Remove a transaction permanently; ``False`` when the id is unknown."""

        transaction = self._find(transaction_id)
        if transaction is None:
            LOGGER.info("Delete ignored: transaction %s not found", transaction_id)
            return False
        self._transactions.remove(transaction)
        LOGGER.info("Deleted %s transaction %s", transaction.status.value, transaction_id)
        self._persist()
        return True

    def list_for_date(self, day: Union[date, datetime, str]) -> List[Transaction]:
        """Return the day's transactions, active and cancelled, in ledger order."""

        wanted = parse_day(day, self.date_policy)
        return [
            transaction for transaction in self._transactions if transaction.occurred_on == wanted
        ]

    def today(self) -> date:
        """Current day under this engine's date policy."""

        return derive_day(self._now(), self.date_policy)

    def summarise_day(self, day: Union[date, datetime, str, None] = None) -> DailySummary:
        """Aggregate totals for ``day`` (today when omitted)."""

        wanted = parse_day(day, self.date_policy) if day is not None else self.today()
        return summarise(self.list_for_date(wanted), wanted)
