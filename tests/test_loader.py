"""Ordering, concurrency and failure semantics of the account loader."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from ledger_service.db.models import Wallet as WalletModel
from ledger_service.modules.wallets.exceptions import StoreError, WalletNotFoundError
from ledger_service.modules.wallets.loader import AccountPair, LoadFailure, load_accounts

pytestmark = pytest.mark.anyio


class FakeRepository:
    """In-memory stand-in exposing only ``get_wallet``."""

    def __init__(self, balances, *, failures=None, delays=None, barrier=False):
        self.wallets = {wallet_id: WalletModel(id=wallet_id, balance=Decimal(balance)) for wallet_id, balance in balances.items()}
        self.failures = failures or {}
        self.delays = delays or {}
        self.started: list[str] = []
        self.finished: list[str] = []
        self.cancelled: list[str] = []
        self._barrier = asyncio.Event() if barrier else None

    async def get_wallet(self, wallet_id):
        self.started.append(wallet_id)
        try:
            if self._barrier is not None:
                if len(self.started) == 2:
                    self._barrier.set()
                await asyncio.wait_for(self._barrier.wait(), timeout=1)
            await asyncio.sleep(self.delays.get(wallet_id, 0))
        except asyncio.CancelledError:
            self.cancelled.append(wallet_id)
            raise
        self.finished.append(wallet_id)
        if wallet_id in self.failures:
            raise self.failures[wallet_id]
        return self.wallets.get(wallet_id)


async def test_loads_both_wallets():
    repository = FakeRepository({"X": "100", "Y": "50"})

    outcome = await load_accounts(repository, "X", "Y")

    assert isinstance(outcome, AccountPair)
    assert (outcome.source.id, outcome.source.balance) == ("X", Decimal("100"))
    assert (outcome.destination.id, outcome.destination.balance) == ("Y", Decimal("50"))


async def test_fetches_run_concurrently():
    # Each fetch waits until the other one has started; sequential loading would time out.
    repository = FakeRepository({"X": "100", "Y": "50"}, barrier=True)

    outcome = await load_accounts(repository, "X", "Y")

    assert isinstance(outcome, AccountPair)
    assert sorted(repository.started) == ["X", "Y"]


async def test_same_id_for_both_sides():
    repository = FakeRepository({"X": "100"})

    outcome = await load_accounts(repository, "X", "X")

    assert isinstance(outcome, AccountPair)
    assert outcome.source == outcome.destination


async def test_source_error_wins_over_destination_error():
    repository = FakeRepository({})

    outcome = await load_accounts(repository, "missing-source", "missing-destination")

    assert isinstance(outcome, LoadFailure)
    assert outcome.side == "source"
    assert outcome.wallet_id == "missing-source"
    assert isinstance(outcome.error, WalletNotFoundError)


async def test_destination_error_reported_when_source_loads():
    repository = FakeRepository({"X": "100"})

    outcome = await load_accounts(repository, "X", "nope")

    assert isinstance(outcome, LoadFailure)
    assert outcome.side == "destination"
    assert isinstance(outcome.error, WalletNotFoundError)
    assert outcome.error.wallet_id == "nope"


async def test_store_failure_is_wrapped():
    failure = OperationalError("SELECT", {}, Exception("disk I/O error"))
    repository = FakeRepository({"Y": "10"}, failures={"X": failure})

    outcome = await load_accounts(repository, "X", "Y")

    assert isinstance(outcome, LoadFailure)
    assert outcome.side == "source"
    assert isinstance(outcome.error, StoreError)
    assert outcome.error.__cause__ is failure


async def test_abandoned_destination_fetch_completes_before_return():
    repository = FakeRepository({"Y": "10"}, delays={"Y": 0.05})

    outcome = await load_accounts(repository, "X", "Y")

    assert isinstance(outcome, LoadFailure)
    assert outcome.side == "source"
    # The slow destination fetch was never read but still ran to completion.
    assert repository.finished == ["X", "Y"]
    assert repository.cancelled == []


async def test_cancellation_cancels_both_fetches():
    repository = FakeRepository({"X": "1", "Y": "1"}, delays={"X": 10, "Y": 10})

    task = asyncio.create_task(load_accounts(repository, "X", "Y"))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert sorted(repository.cancelled) == ["X", "Y"]
