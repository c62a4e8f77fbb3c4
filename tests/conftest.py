"""
Pytest configuration for the ledger service.

Provides fixtures for:
- Settings pointing at a throwaway SQLite database per test
- A started application container and its wallet service
- An HTTP client bound to a fully started app
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from ledger_service.core.config import Settings, get_settings
from ledger_service.core.container import ApplicationContainer
from ledger_service.main import create_app
from ledger_service.modules.wallets import WalletService


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        environment="test",
        database={"url": database_url},
        logging={"level": "WARNING"},
    )


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def container(test_settings: Settings) -> AsyncGenerator[ApplicationContainer, None]:
    container = ApplicationContainer(settings=test_settings)
    await container.startup()
    try:
        yield container
    finally:
        await container.shutdown()


@pytest.fixture
def wallet_service(container: ApplicationContainer) -> WalletService:
    return container.wallet_service()


@pytest.fixture
async def app(test_settings: Settings):
    app = create_app(test_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
