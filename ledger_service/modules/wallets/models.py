"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(slots=True, frozen=True)
class Wallet:
    id: str
    balance: Decimal


@dataclass(slots=True, frozen=True)
class TransactionRecord:
    """Audit entry for a committed transfer: funds left ``source_id`` for ``destination_id``."""

    source_id: str
    destination_id: str
    amount: Decimal
    created_at: datetime


@dataclass(slots=True, frozen=True)
class TransferRequest:
    source_id: str
    destination_id: str
    amount: Decimal
