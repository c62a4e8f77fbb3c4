"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ledger_service.core.config import Settings
from ledger_service.core.crypto import assert_entropy_available
from ledger_service.infrastructure.database import Database
from ledger_service.modules.wallets import WalletService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    database: Optional[Database] = None

    def init_infrastructure(self) -> Database:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        if self.database is None:
            self.database = Database(self.settings.database, debug=self.settings.debug)
        return self.database

    async def startup(self) -> None:
        assert_entropy_available()
        database = self.init_infrastructure()
        if self.settings.database.auto_create:
            await database.create_all()
        logger.info("%s started (%s)", self.settings.project_name, self.settings.environment)

    async def shutdown(self) -> None:
        if self.database is not None:
            await self.database.dispose()
            self.database = None
        logger.info("%s stopped", self.settings.project_name)

    def wallet_service(self) -> WalletService:
        database = self.init_infrastructure()
        return WalletService(
            session_factory=database.session_factory,
            read_session_factory=database.read_session_factory,
            settings=self.settings.wallet,
        )


__all__ = ["ApplicationContainer"]
