"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ledger_service.core.config import DatabaseSettings

from .base import Base

logger = logging.getLogger(__name__)


def _build_engine(settings: DatabaseSettings, debug: bool = False) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.echo or debug,
        "future": True,
    }
    if settings.pool_size is not None:
        engine_kwargs["pool_size"] = settings.pool_size
    if settings.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.max_overflow
    if settings.isolation_level is not None and not settings.url.startswith("sqlite"):
        engine_kwargs["isolation_level"] = settings.isolation_level

    engine = create_async_engine(settings.url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        _install_sqlite_hooks(engine, settings.sqlite_begin)
    return engine


def _install_sqlite_hooks(engine: AsyncEngine, begin_mode: str) -> None:
    """Let SQLAlchemy own transaction boundaries on SQLite.

    The driver's implicit BEGIN is only issued before the first write, which
    would leave the balance reads of a transfer outside the transaction.
    Connections carrying a ``sqlite_begin`` execution option start in that
    mode instead of ``begin_mode``.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ARG001
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(connection):
        mode = connection.get_execution_options().get("sqlite_begin", begin_mode)
        connection.exec_driver_sql(f"BEGIN {mode}")


class Database:
    """Owns the engine and session factories for one application instance.

    ``session_factory`` is for work that writes; on SQLite its transactions
    take the write lock up front. ``read_session_factory`` starts SQLite
    transactions ``DEFERRED`` so lookups do not queue behind transfers.
    """

    def __init__(self, settings: DatabaseSettings, debug: bool = False) -> None:
        self.settings = settings
        self.engine = _build_engine(settings, debug=debug)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.read_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine.execution_options(sqlite_begin="DEFERRED"),
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create database tables in development mode (migrations preferred)."""
        from ledger_service.db import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured for %s", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = ["Database"]
