"""Wallet domain specific exceptions."""


class LedgerError(Exception):
    """Base class for wallet domain errors."""


class WalletNotFoundError(LedgerError):
    """Raised when the requested wallet cannot be found."""

    def __init__(self, wallet_id: str) -> None:
        super().__init__(f"wallet not found: {wallet_id}")
        self.wallet_id = wallet_id


class DestinationUnavailableError(LedgerError):
    """Raised when the destination wallet of a transfer could not be loaded."""

    def __init__(self, wallet_id: str, cause: Exception) -> None:
        super().__init__(f"destination wallet unavailable: {wallet_id}")
        self.wallet_id = wallet_id
        self.cause = cause


class InvalidTransferError(LedgerError):
    """Raised when a transfer would leave either balance at or below zero."""


class StoreError(LedgerError):
    """Raised when the ledger store fails to read, write or commit."""


class WalletCreationError(StoreError):
    """Raised when no unused wallet id could be allocated."""
