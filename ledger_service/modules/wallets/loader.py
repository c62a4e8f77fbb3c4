"""Concurrent loading of the two wallets taking part in a transfer."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from ledger_service.db.models import Wallet as WalletModel

from .exceptions import StoreError, WalletNotFoundError
from .models import Wallet
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LoadResult:
    wallet: Optional[Wallet] = None
    error: Optional[Exception] = None


@dataclass(slots=True, frozen=True)
class AccountPair:
    source: Wallet
    destination: Wallet


@dataclass(slots=True, frozen=True)
class LoadFailure:
    side: Literal["source", "destination"]
    wallet_id: str
    error: Exception


LoadOutcome = Union[AccountPair, LoadFailure]


async def _load_into(
    repository: WalletRepository,
    wallet_id: str,
    slot: asyncio.Queue[LoadResult],
) -> None:
    try:
        model = await repository.get_wallet(wallet_id)
    except SQLAlchemyError as exc:
        error = StoreError(f"failed to load wallet {wallet_id}")
        error.__cause__ = exc
        result = LoadResult(error=error)
    except Exception as exc:  # delivered to the caller, which re-raises it
        result = LoadResult(error=exc)
    else:
        if model is None:
            result = LoadResult(error=WalletNotFoundError(wallet_id))
        else:
            result = LoadResult(wallet=_to_wallet(model))
    # The slot holds exactly one result, so this never blocks even if nobody reads it.
    slot.put_nowait(result)


async def load_accounts(
    repository: WalletRepository,
    source_id: str,
    destination_id: str,
) -> LoadOutcome:
    """Fetch source and destination in parallel and join them in fixed order.

    The source result is awaited first. When it is an error the destination
    result is left unread and the source error wins, whatever happened to the
    destination. Both tasks are allowed to finish before returning so that no
    fetch is still running when the caller ends the transaction.
    """
    source_slot: asyncio.Queue[LoadResult] = asyncio.Queue(maxsize=1)
    destination_slot: asyncio.Queue[LoadResult] = asyncio.Queue(maxsize=1)
    tasks = [
        asyncio.create_task(_load_into(repository, source_id, source_slot)),
        asyncio.create_task(_load_into(repository, destination_id, destination_slot)),
    ]
    try:
        source = await source_slot.get()
        if source.error is not None:
            logger.debug("Source wallet %s failed to load: %s", source_id, source.error)
            return LoadFailure(side="source", wallet_id=source_id, error=source.error)

        destination = await destination_slot.get()
        if destination.error is not None:
            logger.debug("Destination wallet %s failed to load: %s", destination_id, destination.error)
            return LoadFailure(side="destination", wallet_id=destination_id, error=destination.error)

        return AccountPair(source=source.wallet, destination=destination.wallet)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise
    finally:
        await asyncio.wait(tasks)


def _to_wallet(model: WalletModel) -> Wallet:
    return Wallet(id=model.id, balance=model.balance)


__all__ = ["AccountPair", "LoadFailure", "LoadOutcome", "LoadResult", "load_accounts"]
