"""Wallet related dependency providers."""

from fastapi import Request

from ledger_service.core.container import ApplicationContainer
from ledger_service.modules.wallets import WalletService


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_wallet_service(request: Request) -> WalletService:
    return get_container(request).wallet_service()


__all__ = [
    "get_container",
    "get_wallet_service",
]
