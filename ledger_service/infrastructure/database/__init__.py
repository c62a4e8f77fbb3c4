"""Database infrastructure helpers (engine, sessions, column types)."""

from .base import Base
from .session import Database
from .types import ExactDecimal

__all__ = ["Base", "Database", "ExactDecimal"]
