"""Wallet ledger service with atomic funds transfers."""

__version__ = "0.1.0"
