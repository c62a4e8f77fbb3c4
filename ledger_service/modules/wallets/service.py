"""Wallet domain service: creation, lookup, transfers and history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger_service.core.config import WalletSettings
from ledger_service.core.crypto import generate_wallet_id
from ledger_service.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel
from ledger_service.infrastructure.database.repositories import SqlWalletRepository

from .exceptions import (
    DestinationUnavailableError,
    InvalidTransferError,
    LedgerError,
    StoreError,
    WalletCreationError,
    WalletNotFoundError,
)
from .loader import LoadFailure, load_accounts
from .models import TransactionRecord, TransferRequest, Wallet
from .repository import WalletRepository
from .validator import validate_transfer

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class WalletService:
    session_factory: async_sessionmaker[AsyncSession]
    read_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
    settings: WalletSettings = field(default_factory=WalletSettings)
    repository_factory: Callable[[AsyncSession], WalletRepository] = SqlWalletRepository
    clock: Callable[[], datetime] = utcnow
    id_generator: Callable[[int], str] = generate_wallet_id

    async def create_wallet(self) -> Wallet:
        """Insert a wallet with the configured starting balance under a fresh random id.

        A primary-key collision regenerates the id, up to ``id_attempts`` tries.
        """
        balance = self.settings.initial_balance
        for attempt in range(1, self.settings.id_attempts + 1):
            wallet_id = self.id_generator(self.settings.id_length)
            try:
                async with self.session_factory() as session, session.begin():
                    model = await self.repository_factory(session).create_wallet(wallet_id, balance)
                    wallet = self._to_wallet(model)
            except IntegrityError:
                logger.warning("Wallet id collision on attempt %s/%s", attempt, self.settings.id_attempts)
                continue
            except SQLAlchemyError as exc:
                logger.error("Failed to create wallet: %s", exc)
                raise StoreError("failed to create wallet") from exc
            logger.info("Created wallet %s with balance %s", wallet.id, wallet.balance)
            return wallet
        raise WalletCreationError(f"no free wallet id after {self.settings.id_attempts} attempts")

    async def get_wallet(self, wallet_id: str) -> Wallet:
        try:
            async with self._reader() as session, session.begin():
                model = await self.repository_factory(session).get_wallet(wallet_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to load wallet {wallet_id}") from exc
        if model is None:
            raise WalletNotFoundError(wallet_id)
        return self._to_wallet(model)

    async def transfer(self, request: TransferRequest) -> TransactionRecord:
        """Move ``request.amount`` from source to destination as one transaction.

        Raises ``WalletNotFoundError`` for a missing source,
        ``DestinationUnavailableError`` when the destination cannot be loaded,
        ``InvalidTransferError`` when the rule rejects the transfer and
        ``StoreError`` for any database failure. Nothing is persisted unless
        the commit succeeds.
        """
        logger.info(
            "Transfer requested: %s -> %s amount=%s",
            request.source_id,
            request.destination_id,
            request.amount,
        )
        try:
            async with self.session_factory() as session, session.begin():
                repository = self.repository_factory(session)
                outcome = await load_accounts(repository, request.source_id, request.destination_id)
                if isinstance(outcome, LoadFailure):
                    raise self._load_failure_error(outcome)

                decision = validate_transfer(
                    outcome.source.balance,
                    outcome.destination.balance,
                    request.amount,
                )
                if not decision.approved:
                    logger.info(
                        "Transfer rejected: %s -> %s amount=%s (%s)",
                        request.source_id,
                        request.destination_id,
                        request.amount,
                        decision.reason,
                    )
                    raise InvalidTransferError(decision.reason)

                # Destination is written last: on a self-transfer its value is the one kept.
                await repository.set_balance(request.source_id, decision.new_source_balance)
                await repository.set_balance(request.destination_id, decision.new_destination_balance)
                model = await repository.add_transaction(
                    source_id=request.source_id,
                    destination_id=request.destination_id,
                    amount=request.amount,
                    created_at=self.clock(),
                )
                record = self._to_record(model)
        except LedgerError:
            raise
        except SQLAlchemyError as exc:
            logger.error("Transfer %s -> %s failed in store: %s", request.source_id, request.destination_id, exc)
            raise StoreError("transfer could not be applied") from exc

        logger.info("Transfer committed: %s -> %s amount=%s", record.source_id, record.destination_id, record.amount)
        return record

    async def history(self, wallet_id: str) -> list[TransactionRecord]:
        try:
            async with self._reader() as session, session.begin():
                repository = self.repository_factory(session)
                if await repository.get_wallet(wallet_id) is None:
                    raise WalletNotFoundError(wallet_id)
                rows: Sequence[WalletTransactionModel] = await repository.list_transactions(wallet_id)
                return [self._to_record(row) for row in rows]
        except LedgerError:
            raise
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to read history of {wallet_id}") from exc

    def _reader(self) -> AsyncSession:
        factory = self.read_session_factory or self.session_factory
        return factory()

    @staticmethod
    def _load_failure_error(failure: LoadFailure) -> Exception:
        if failure.side == "destination":
            return DestinationUnavailableError(failure.wallet_id, failure.error)
        return failure.error

    @staticmethod
    def _to_wallet(model: WalletModel) -> Wallet:
        return Wallet(id=model.id, balance=model.balance)

    @staticmethod
    def _to_record(model: WalletTransactionModel) -> TransactionRecord:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return TransactionRecord(
            source_id=model.source_id,
            destination_id=model.destination_id,
            amount=model.amount,
            created_at=created_at,
        )
