"""Wallet endpoints: creation, lookup, transfers and history."""

from __future__ import annotations

import json
import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ledger_service.interfaces.http.deps import get_wallet_service
from ledger_service.modules.wallets import (
    DestinationUnavailableError,
    InvalidTransferError,
    StoreError,
    TransferRequest,
    WalletNotFoundError,
    WalletService,
)
from ledger_service.schemas import (
    ErrorResponse,
    SendRequest,
    TransactionResponse,
    WalletResponse,
    format_rfc3339,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "",
    response_model=WalletResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse}},
    summary="Create a wallet",
)
async def create_wallet(service: WalletService = Depends(get_wallet_service)):
    try:
        wallet = await service.create_wallet()
    except StoreError as exc:
        logger.error("Wallet creation failed: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to create wallet")
    return WalletResponse.model_validate(wallet)


@router.post(
    "/{wallet_id}/send",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SendRequest.model_json_schema()}},
        }
    },
    summary="Send funds to another wallet",
)
async def send(
    wallet_id: str,
    request: Request,
    service: WalletService = Depends(get_wallet_service),
) -> Response:
    # JSON numbers are read from their literal text, never through a float.
    body = await request.body()
    try:
        data = json.loads(body, parse_float=Decimal, parse_int=Decimal)
        payload = SendRequest.model_validate(data)
    except (ValueError, ValidationError) as exc:
        logger.info("Malformed send request for %s: %s", wallet_id, exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    transfer = TransferRequest(source_id=wallet_id, destination_id=payload.to, amount=payload.amount)
    try:
        await service.transfer(transfer)
    except WalletNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (DestinationUnavailableError, InvalidTransferError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="transfer failed") from exc
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/{wallet_id}/history",
    response_model=list[TransactionResponse],
    summary="List transactions touching a wallet",
)
async def history(wallet_id: str, service: WalletService = Depends(get_wallet_service)):
    try:
        records = await service.history(wallet_id)
    except WalletNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="history unavailable") from exc
    return [
        TransactionResponse(
            source=record.source_id,
            destination=record.destination_id,
            amount=record.amount,
            time=format_rfc3339(record.created_at),
        )
        for record in records
    ]


@router.get("/{wallet_id}", response_model=WalletResponse, summary="Get a wallet")
async def get_wallet(wallet_id: str, service: WalletService = Depends(get_wallet_service)):
    try:
        wallet = await service.get_wallet(wallet_id)
    except WalletNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="wallet unavailable") from exc
    return WalletResponse.model_validate(wallet)
