"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_service.db.models import Wallet, WalletTransaction


class SqlWalletRepository:
    """Wallet data access bound to one session.

    ``AsyncSession`` does not allow overlapping statements, so every call goes
    through a lock; tasks sharing this repository interleave their queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._lock = asyncio.Lock()

    async def _execute(self, stmt: Any) -> Any:
        async with self._lock:
            return await self.session.execute(stmt)

    async def get_wallet(self, wallet_id: str) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.id == wallet_id)
        result = await self._execute(stmt)
        return result.scalars().first()

    async def create_wallet(self, wallet_id: str, balance: Decimal) -> Wallet:
        wallet = Wallet(id=wallet_id, balance=balance)
        async with self._lock:
            self.session.add(wallet)
            await self.session.flush()
        return wallet

    async def set_balance(self, wallet_id: str, balance: Decimal) -> None:
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .values(balance=balance)
            .execution_options(synchronize_session=False)
        )
        await self._execute(stmt)

    async def add_transaction(
        self,
        *,
        source_id: str,
        destination_id: str,
        amount: Decimal,
        created_at: datetime,
    ) -> WalletTransaction:
        tx = WalletTransaction(
            source_id=source_id,
            destination_id=destination_id,
            amount=amount,
            created_at=created_at,
        )
        async with self._lock:
            self.session.add(tx)
            await self.session.flush()
        return tx

    async def list_transactions(self, wallet_id: str) -> Sequence[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(
                or_(
                    WalletTransaction.source_id == wallet_id,
                    WalletTransaction.destination_id == wallet_id,
                )
            )
            .order_by(WalletTransaction.id)
        )
        result = await self._execute(stmt)
        return result.scalars().all()
