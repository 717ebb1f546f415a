"""Mini README: Error kinds raised across the ledger core.

Validation and lookup errors also subclass ``ValueError`` and ``KeyError``
so callers that only know the builtin types keep working.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for every ledger failure."""


class ValidationError(LedgerError, ValueError):
    """Input rejected before any state change."""


class TransactionAlreadyCancelled(ValidationError):
    """A cancelled transaction cannot be cancelled again."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction {transaction_id} is already cancelled")
        self.transaction_id = transaction_id


class TransactionNotFound(LedgerError, KeyError):
    """No transaction with the requested identifier exists."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id

    def __str__(self) -> str:
        return str(self.args[0])


class PersistenceFailure(LedgerError):
    """The ledger store could not read or write a user's ledger."""


class PersistenceWarning(UserWarning):
    """In-memory state is ahead of the persisted copy."""


class NoActiveSession(LedgerError):
    """A ledger operation was requested while no user is signed in."""
