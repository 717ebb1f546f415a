"""Mini README: Core ledger package for mobile-money merchants.

Groups the transaction model, the ``LedgerEngine`` state machine, the pure
daily aggregation helpers and the error hierarchy shared by stores and the
HTTP interface.
"""

from .aggregator import (
    DailySummary,
    active_count,
    cancelled_count,
    net_balance,
    summarise,
    total_by_type,
)
from .engine import LedgerEngine
from .errors import (
    LedgerError,
    NoActiveSession,
    PersistenceFailure,
    PersistenceWarning,
    TransactionAlreadyCancelled,
    TransactionNotFound,
    ValidationError,
)
from .models import Transaction, TransactionStatus, TransactionType, derive_day

__all__ = [
    "DailySummary",
    "LedgerEngine",
    "LedgerError",
    "NoActiveSession",
    "PersistenceFailure",
    "PersistenceWarning",
    "Transaction",
    "TransactionAlreadyCancelled",
    "TransactionNotFound",
    "TransactionStatus",
    "TransactionType",
    "ValidationError",
    "active_count",
    "cancelled_count",
    "derive_day",
    "net_balance",
    "summarise",
    "total_by_type",
]
