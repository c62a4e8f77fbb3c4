from __future__ import annotations

import asyncio
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Callable, TypeVar

import typer

from ledger_service.core.config import get_settings
from ledger_service.core.container import ApplicationContainer
from ledger_service.core.logging_config import configure_logging
from ledger_service.modules.wallets import LedgerError, TransferRequest
from ledger_service.schemas import format_rfc3339

app = typer.Typer(help="Wallet ledger service CLI.")

T = TypeVar("T")


def _run(operation: Callable[[ApplicationContainer], Awaitable[T]]) -> T:
    """Run ``operation`` against a started container and shut it down afterwards."""
    settings = get_settings()
    configure_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)
    container = ApplicationContainer(settings=settings)

    async def _main() -> T:
        await container.startup()
        try:
            return await operation(container)
        finally:
            await container.shutdown()

    try:
        return asyncio.run(_main())
    except LedgerError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def serve() -> None:
    """
    Run the HTTP API with uvicorn.
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ledger_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


@app.command("init-db")
def init_db() -> None:
    """
    Create the ledger tables if they do not exist.
    """
    _run(lambda container: container.init_infrastructure().create_all())
    typer.echo("Database initialised.")


@app.command("create-wallet")
def create_wallet() -> None:
    """
    Create a wallet with the configured starting balance.
    """
    wallet = _run(lambda container: container.wallet_service().create_wallet())
    typer.echo(json.dumps({"id": wallet.id, "balance": str(wallet.balance)}))


@app.command()
def show(wallet_id: str) -> None:
    """
    Print a wallet's balance.
    """
    wallet = _run(lambda container: container.wallet_service().get_wallet(wallet_id))
    typer.echo(json.dumps({"id": wallet.id, "balance": str(wallet.balance)}))


@app.command()
def send(source_id: str, destination_id: str, amount: str) -> None:
    """
    Transfer AMOUNT from SOURCE_ID to DESTINATION_ID.
    """
    try:
        value = Decimal(amount)
    except InvalidOperation as exc:
        typer.echo(f"error: invalid amount {amount!r}", err=True)
        raise typer.Exit(code=2) from exc
    if not value.is_finite():
        typer.echo(f"error: invalid amount {amount!r}", err=True)
        raise typer.Exit(code=2)

    request = TransferRequest(source_id=source_id, destination_id=destination_id, amount=value)
    _run(lambda container: container.wallet_service().transfer(request))
    typer.echo("ok")


@app.command()
def history(wallet_id: str) -> None:
    """
    Print the transactions touching a wallet as JSON.
    """
    records = _run(lambda container: container.wallet_service().history(wallet_id))
    typer.echo(
        json.dumps(
            [
                {
                    "from": record.source_id,
                    "to": record.destination_id,
                    "amount": str(record.amount),
                    "time": format_rfc3339(record.created_at),
                }
                for record in records
            ],
            indent=2,
        )
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
