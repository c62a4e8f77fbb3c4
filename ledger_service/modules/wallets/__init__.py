"""Wallet module exports"""

from .exceptions import (
    DestinationUnavailableError,
    InvalidTransferError,
    LedgerError,
    StoreError,
    WalletCreationError,
    WalletNotFoundError,
)
from .models import TransactionRecord, TransferRequest, Wallet
from .service import WalletService

__all__ = [
    "DestinationUnavailableError",
    "InvalidTransferError",
    "LedgerError",
    "StoreError",
    "WalletCreationError",
    "WalletNotFoundError",
    "TransactionRecord",
    "TransferRequest",
    "Wallet",
    "WalletService",
]
