"""Mini README: Tests for the Typer commands that inspect a stored ledger."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from typer.testing import CliRunner

from main_ledger_service import cli
from momo_ledger.configuration import get_settings
from momo_ledger.ledger import LedgerEngine
from momo_ledger.storage import JsonFileLedgerStore

runner = CliRunner()


@pytest.fixture
def stored_ledger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clock) -> Iterator[Path]:
    monkeypatch.setenv("MOMO_LEDGER_DATA_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("MOMO_LEDGER_STORE_BACKEND", "json")
    monkeypatch.setenv("MOMO_LEDGER_DATE_POLICY", "utc")
    get_settings.cache_clear()

    engine = LedgerEngine("merchant-1", JsonFileLedgerStore(tmp_path), clock=clock)
    engine.add("deposit", "1500", "Alice", "555-0001", "INV-1")
    withdrawal = engine.add("withdrawal", "40", "Bob", "555-0002")
    engine.add("airtime", "20", "Carol", "555-0003")
    engine.cancel(withdrawal.transaction_id, "duplicate")
    yield tmp_path
    get_settings.cache_clear()


def test_summary_prints_day_totals(stored_ledger: Path) -> None:
    result = runner.invoke(cli, ["summary", "merchant-1", "--on", "2024-06-03"])

    assert result.exit_code == 0, result.output
    assert "Money in:  1,500.00" in result.output
    assert "Balance:   1,500.00" in result.output
    assert "Airtime:   20.00" in result.output
    assert "Active: 2  Cancelled: 1" in result.output


def test_history_lists_entries_newest_first(stored_ledger: Path) -> None:
    result = runner.invoke(cli, ["history", "merchant-1", "--on", "2024-06-03"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 3
    assert "airtime" in lines[0]
    assert "[cancelled: duplicate]" in lines[1]
    assert "ref INV-1" in lines[2]


def test_summary_rejects_bad_dates(stored_ledger: Path) -> None:
    result = runner.invoke(cli, ["summary", "merchant-1", "--on", "yesterday"])

    assert result.exit_code == 2


def test_history_for_empty_day(stored_ledger: Path) -> None:
    result = runner.invoke(cli, ["history", "merchant-1", "--on", "2020-01-01"])

    assert result.exit_code == 0
    assert "No transactions recorded." in result.output
