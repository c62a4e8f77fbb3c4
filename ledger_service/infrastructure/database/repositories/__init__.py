"""SQLAlchemy-backed repository implementations."""

from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlWalletRepository",
]
