from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ledger_service import __version__
from ledger_service.core.config import Settings, get_settings
from ledger_service.core.container import ApplicationContainer
from ledger_service.core.logging_config import configure_logging
from ledger_service.interfaces.http import create_api_router
from ledger_service.interfaces.http.middleware import log_requests


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await container.startup()
    try:
        yield
    finally:
        await container.shutdown()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)

    app = FastAPI(
        title=settings.project_name,
        description="Wallet ledger with atomic funds transfers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = ApplicationContainer(settings=settings)
    app.middleware("http")(log_requests)
    app.include_router(create_api_router(settings.api_prefix))
    return app


app = create_app()
