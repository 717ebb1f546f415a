"""Mini README: Shared helper functions for Momo Ledger."""

from .formatting import format_amount, format_time

__all__ = ["format_amount", "format_time"]
