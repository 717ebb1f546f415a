"""Mini README: Core package initializer for the Momo Ledger service.

This module exposes convenience imports so callers can reach the ledger
engine, the session context and the logger factory without knowing the
exact module structure. Heavier pieces such as the HTTP interface are left
to their own subpackages.
"""

from .ledger import LedgerEngine
from .logging_utils import get_logger
from .session import LedgerSession

__all__ = ["LedgerEngine", "LedgerSession", "get_logger"]
