"""Pydantic schemas used by the HTTP interface."""
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class WalletResponse(BaseModel):
    id: str
    balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class SendRequest(BaseModel):
    to: str = Field(..., min_length=1)
    amount: Decimal = Field(..., allow_inf_nan=False)


class TransactionResponse(BaseModel):
    source: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    amount: Decimal
    time: str

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str


def format_rfc3339(value: datetime) -> str:
    """Render ``value`` as RFC 3339 in UTC with second precision, e.g. ``2024-01-02T03:04:05Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


__all__ = [
    "ErrorResponse",
    "SendRequest",
    "TransactionResponse",
    "WalletResponse",
    "format_rfc3339",
]
