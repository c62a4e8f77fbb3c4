"""Repository protocol for wallet operations."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence

from ledger_service.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel


class WalletRepository(Protocol):
    async def get_wallet(self, wallet_id: str) -> WalletModel | None:
        ...

    async def create_wallet(self, wallet_id: str, balance: Decimal) -> WalletModel:
        ...

    async def set_balance(self, wallet_id: str, balance: Decimal) -> None:
        ...

    async def add_transaction(
        self,
        *,
        source_id: str,
        destination_id: str,
        amount: Decimal,
        created_at: datetime,
    ) -> WalletTransactionModel:
        ...

    async def list_transactions(self, wallet_id: str) -> Sequence[WalletTransactionModel]:
        ...
