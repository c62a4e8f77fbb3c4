"""Reusable FastAPI dependencies."""

from .wallet import get_container, get_wallet_service

__all__ = [
    "get_container",
    "get_wallet_service",
]
