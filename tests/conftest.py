"""Mini README: Shared fixtures for the ledger test-suite.

Structure:
    * SteppingClock - deterministic clock advancing one minute per call.
    * clock / store / engine fixtures used across modules.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from momo_ledger.ledger import LedgerEngine
from momo_ledger.storage import InMemoryLedgerStore

DAY_START = datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Return ``start`` then advance by ``step`` on every call."""

    def __init__(self, start: datetime = DAY_START, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def engine(store: InMemoryLedgerStore, clock: SteppingClock) -> LedgerEngine:
    return LedgerEngine("merchant-1", store, clock=clock)


@pytest.fixture
def make_clock():
    """Expose ``SteppingClock`` to tests that need a custom start or step."""

    return SteppingClock
