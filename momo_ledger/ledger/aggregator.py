"""Mini README: Daily totals computed from a list of transactions.

Structure:
    * total_by_type / net_balance - monetary sums over active entries.
    * active_count / cancelled_count - status tallies.
    * DailySummary / summarise - dashboard snapshot bundling the above.

Every function is pure and recomputes from its input; callers pass the
partition for one day (``LedgerEngine.list_for_date``). Cancelled entries are
counted but never contribute to a monetary total, and airtime sales are a
separate revenue stream that the net balance ignores.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Union

from .models import Transaction, TransactionStatus, TransactionType


def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: Union[TransactionType, str],
) -> Decimal:
    """Sum the amounts of active transactions of ``transaction_type``."""

    wanted = TransactionType.from_str(transaction_type)
    return sum(
        (
            transaction.amount
            for transaction in transactions
            if transaction.status is TransactionStatus.ACTIVE
            and transaction.transaction_type is wanted
        ),
        Decimal("0"),
    )


def net_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Deposits minus withdrawals over active transactions."""

    transactions = list(transactions)
    return total_by_type(transactions, TransactionType.DEPOSIT) - total_by_type(
        transactions, TransactionType.WITHDRAWAL
    )


def active_count(transactions: Iterable[Transaction]) -> int:
    return sum(1 for transaction in transactions if transaction.is_active)


def cancelled_count(transactions: Iterable[Transaction]) -> int:
    return sum(1 for transaction in transactions if transaction.is_cancelled)


@dataclass(slots=True, frozen=True)
class DailySummary:
    """Totals and counts for one calendar day."""

    day: date
    received: Decimal
    sent: Decimal
    airtime: Decimal
    balance: Decimal
    active_count: int
    cancelled_count: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "date": self.day.isoformat(),
            "received": str(self.received),
            "sent": str(self.sent),
            "airtime": str(self.airtime),
            "balance": str(self.balance),
            "active_count": self.active_count,
            "cancelled_count": self.cancelled_count,
        }


def summarise(transactions: Iterable[Transaction], day: date) -> DailySummary:
    """Build the dashboard snapshot for ``day`` from its partition."""

    transactions = list(transactions)
    received = total_by_type(transactions, TransactionType.DEPOSIT)
    sent = total_by_type(transactions, TransactionType.WITHDRAWAL)
    return DailySummary(
        day=day,
        received=received,
        sent=sent,
        airtime=total_by_type(transactions, TransactionType.AIRTIME),
        balance=received - sent,
        active_count=active_count(transactions),
        cancelled_count=cancelled_count(transactions),
    )
