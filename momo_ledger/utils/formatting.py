"""Mini README: Display helpers shared by the CLI and HTTP responses.

Structure:
    * format_amount - two decimals with thousands separators.
    * format_time - 12-hour clock time in the host's local zone.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union


def format_amount(amount: Union[Decimal, int, float, str]) -> str:
    """Render ``amount`` like ``1,234.50``."""

    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:,.2f}"


def format_time(instant: datetime) -> str:
    """Render the wall-clock time of ``instant`` like ``09:05 AM``."""

    return instant.astimezone().strftime("%I:%M %p")
