"""ORM models for the ledger tables."""

from .models import Wallet, WalletTransaction

__all__ = ["Wallet", "WalletTransaction"]
