"""Mini README: Transaction records kept by a merchant's ledger.

Structure:
    * TransactionType - deposit, withdrawal or airtime sale.
    * TransactionStatus - active or cancelled.
    * Transaction - dataclass storing one ledger entry plus (de)serialisation.
    * derive_day - map a creation instant to its calendar day.

Records use the camelCase wire shape of the mobile client when exported with
``as_dict`` so stored ledgers stay readable by both. Amounts are ``Decimal``
and serialised as strings, which keeps a save/load round trip exact.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..configuration import DatePolicy
from .errors import ValidationError


class TransactionType(str, Enum):
    """Enumerate the supported transaction categories."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    AIRTIME = "airtime"

    @classmethod
    def from_str(cls, value: Union[str, "TransactionType"]) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValidationError(f"Unsupported transaction type: {value}") from error


class TransactionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


def parse_amount(value: Any) -> Decimal:
    """Return ``value`` as a positive ``Decimal`` or raise ``ValidationError``."""

    if isinstance(value, bool):
        raise ValidationError(f"Amount must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValidationError(f"Amount must be a number, got {value!r}") from error
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {value!r}")
    return amount


def _as_instant(value: Any) -> datetime:
    if isinstance(value, str):
        # JavaScript's toISOString() ends in "Z", which fromisoformat rejects before 3.11.
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValidationError(f"Timestamps must be ISO strings or datetimes, got {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def derive_day(instant: datetime, policy: DatePolicy = DatePolicy.UTC) -> date:
    """Return the calendar day ``instant`` falls on under ``policy``."""

    if DatePolicy(policy) is DatePolicy.LOCAL:
        return instant.astimezone().date()
    return instant.astimezone(timezone.utc).date()


def parse_day(
    value: Union[str, date, datetime], policy: DatePolicy = DatePolicy.UTC
) -> date:
    """Parse ISO strings or dates; datetimes map to their day under ``policy``."""

    if isinstance(value, datetime):
        return derive_day(_as_instant(value), policy)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValidationError(f"Invalid date: {value!r}") from error
    raise ValidationError("Dates must be provided as ISO strings or date/datetime instances.")


def _required_text(payload: Mapping[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} must be a non-empty string")
    return value


@dataclass(slots=True, frozen=True)
class Transaction:
    """Represent a ledger entry; the engine swaps in a new copy to cancel it."""

    transaction_id: str
    transaction_type: TransactionType
    amount: Decimal
    customer_name: str
    customer_phone: str
    reference: str
    timestamp: datetime
    occurred_on: date
    status: TransactionStatus = TransactionStatus.ACTIVE
    cancelled_at: Optional[datetime] = None
    cancel_reason: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status is TransactionStatus.ACTIVE

    @property
    def is_cancelled(self) -> bool:
        return self.status is TransactionStatus.CANCELLED

    def cancelled(self, at: datetime, reason: str) -> "Transaction":
        """Return a cancelled copy carrying the audit fields."""

        return replace(
            self, status=TransactionStatus.CANCELLED, cancelled_at=at, cancel_reason=reason
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        payload: Dict[str, object] = {
            "id": self.transaction_id,
            "type": self.transaction_type.value,
            "amount": str(self.amount),
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "reference": self.reference,
            "timestamp": _format_instant(self.timestamp),
            "date": self.occurred_on.isoformat(),
            "status": self.status.value,
        }
        if self.is_cancelled:
            payload["cancelledAt"] = (
                _format_instant(self.cancelled_at) if self.cancelled_at else None
            )
            payload["cancelReason"] = self.cancel_reason
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Transaction":
        """Rebuild a transaction from ``as_dict`` output or the client's format."""

        if not isinstance(payload, Mapping):
            raise ValidationError(f"Malformed transaction record: {payload!r}")
        try:
            status = TransactionStatus(payload.get("status", TransactionStatus.ACTIVE.value))
            cancelled_at = payload.get("cancelledAt")
            cancel_reason = payload.get("cancelReason")
            if status is TransactionStatus.CANCELLED:
                if not cancelled_at or not isinstance(cancel_reason, str) or not cancel_reason.strip():
                    raise ValidationError("Cancelled records need cancelledAt and a cancelReason")
            elif cancelled_at is not None or cancel_reason is not None:
                raise ValidationError("Active records must not carry cancellation fields")
            return cls(
                transaction_id=str(payload["id"]),
                transaction_type=TransactionType.from_str(payload["type"]),
                amount=parse_amount(payload["amount"]),
                customer_name=_required_text(payload, "customerName"),
                customer_phone=_required_text(payload, "customerPhone"),
                reference=str(payload.get("reference") or ""),
                timestamp=_as_instant(payload["timestamp"]),
                occurred_on=parse_day(payload["date"]),
                status=status,
                cancelled_at=_as_instant(cancelled_at) if cancelled_at else None,
                cancel_reason=cancel_reason,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as error:
            raise ValidationError(f"Malformed transaction record: {error}") from error
