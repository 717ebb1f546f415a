"""Mini README: Tests for the daily aggregation helpers.

These tests confirm cancelled entries never reach a monetary total, airtime
stays out of the net balance, and the dashboard snapshot serialises cleanly.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from momo_ledger.ledger import (
    Transaction,
    TransactionStatus,
    TransactionType,
    active_count,
    cancelled_count,
    net_balance,
    summarise,
    total_by_type,
)
from momo_ledger.utils import format_amount

STAMP = datetime(2024, 6, 3, 10, 0, tzinfo=timezone.utc)


def _entry(
    transaction_id: str,
    kind: TransactionType,
    amount: str,
    status: TransactionStatus = TransactionStatus.ACTIVE,
) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        transaction_type=kind,
        amount=Decimal(amount),
        customer_name="Customer",
        customer_phone="555-0000",
        reference="",
        timestamp=STAMP,
        occurred_on=STAMP.date(),
        status=status,
        cancelled_at=STAMP if status is TransactionStatus.CANCELLED else None,
        cancel_reason="void" if status is TransactionStatus.CANCELLED else None,
    )


def test_cancelled_deposits_are_excluded_from_totals() -> None:
    transactions = [
        _entry("a", TransactionType.DEPOSIT, "100"),
        _entry("b", TransactionType.DEPOSIT, "50", TransactionStatus.CANCELLED),
    ]

    assert total_by_type(transactions, TransactionType.DEPOSIT) == Decimal("100")
    assert total_by_type(transactions, "deposit") == Decimal("100")
    assert net_balance(transactions) == Decimal("100")


def test_net_balance_ignores_airtime_and_cancelled_withdrawals() -> None:
    transactions = [
        _entry("a", TransactionType.DEPOSIT, "250.75"),
        _entry("b", TransactionType.WITHDRAWAL, "100.25"),
        _entry("c", TransactionType.WITHDRAWAL, "30", TransactionStatus.CANCELLED),
        _entry("d", TransactionType.AIRTIME, "20"),
    ]

    assert net_balance(transactions) == Decimal("150.50")
    assert total_by_type(transactions, TransactionType.AIRTIME) == Decimal("20")


def test_counts_ignore_type() -> None:
    transactions = [
        _entry("a", TransactionType.DEPOSIT, "1"),
        _entry("b", TransactionType.AIRTIME, "1", TransactionStatus.CANCELLED),
        _entry("c", TransactionType.WITHDRAWAL, "1", TransactionStatus.CANCELLED),
    ]

    assert active_count(transactions) == 1
    assert cancelled_count(transactions) == 2


def test_empty_day_is_all_zero() -> None:
    summary = summarise([], date(2024, 6, 3))

    assert summary.balance == Decimal("0")
    assert summary.as_dict() == {
        "date": "2024-06-03",
        "received": "0",
        "sent": "0",
        "airtime": "0",
        "balance": "0",
        "active_count": 0,
        "cancelled_count": 0,
    }


def test_summarise_accepts_generators() -> None:
    """Single-pass iterables must still feed every figure."""

    summary = summarise(
        (entry for entry in [
            _entry("a", TransactionType.DEPOSIT, "500"),
            _entry("b", TransactionType.WITHDRAWAL, "120"),
            _entry("c", TransactionType.AIRTIME, "15"),
        ]),
        date(2024, 6, 3),
    )

    assert summary.received == Decimal("500")
    assert summary.sent == Decimal("120")
    assert summary.airtime == Decimal("15")
    assert summary.balance == Decimal("380")
    assert summary.active_count == 3


def test_format_amount_uses_two_decimals_and_separators() -> None:
    assert format_amount(Decimal("1234.5")) == "1,234.50"
    assert format_amount(0) == "0.00"
    assert format_amount("-60") == "-60.00"
