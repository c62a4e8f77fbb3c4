"""HTTP routers."""

from . import wallets

__all__ = ["wallets"]
