"""HTTP interface: routers, dependencies and middleware."""

from fastapi import APIRouter

from .routers import wallets


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(wallets.router, prefix="/wallet", tags=["wallets"])
    return router


__all__ = [
    "create_api_router",
]
