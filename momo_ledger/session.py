"""Mini README: Session context binding the signed-in user to a ledger.

Structure:
    * LedgerSession - owns the active ``LedgerEngine`` and swaps it whenever
      the signed-in user changes.

Authentication itself happens elsewhere; this module only receives the
opaque user identifier once a session exists and the signal that it ended.
Signing out drops the engine without saving so nothing can be written under
the wrong user's key.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from .configuration import DatePolicy
from .ledger.engine import Clock, LedgerEngine, utc_now
from .ledger.errors import NoActiveSession
from .logging_utils import get_logger
from .storage.base import LedgerStore

LOGGER = get_logger(__name__)


class LedgerSession:
    """Hold the ledger for whichever user is currently signed in."""

    def __init__(
        self,
        store: LedgerStore,
        *,
        clock: Clock = utc_now,
        date_policy: Union[DatePolicy, str] = DatePolicy.UTC,
        engine_factory: Callable[..., LedgerEngine] = LedgerEngine,
    ) -> None:
        self._store = store
        self._clock = clock
        self._date_policy = DatePolicy(date_policy)
        self._engine_factory = engine_factory
        self._engine: Optional[LedgerEngine] = None

    @property
    def user_id(self) -> Optional[str]:
        return self._engine.user_id if self._engine is not None else None

    @property
    def is_active(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> LedgerEngine:
        """Return the active engine or raise ``NoActiveSession``."""

        if self._engine is None:
            raise NoActiveSession("No user is signed in")
        return self._engine

    def sign_in(self, user_id: str) -> LedgerEngine:
        """Load ``user_id``'s ledger, replacing any previously active one."""

        if self._engine is not None and self._engine.user_id == (user_id or "").strip():
            return self._engine
        if self._engine is not None:
            LOGGER.info("Unloading ledger for user %s", self._engine.user_id)
        # A failed load leaves no user signed in.
        self._engine = None
        engine = self._engine_factory(
            user_id, self._store, clock=self._clock, date_policy=self._date_policy
        )
        self._engine = engine
        LOGGER.info("Session started for user %s", engine.user_id)
        return engine

    def sign_out(self) -> None:
        """Unload the active ledger without persisting it."""

        if self._engine is None:
            return
        LOGGER.info("Session ended for user %s", self._engine.user_id)
        self._engine = None
