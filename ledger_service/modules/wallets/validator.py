"""Business rule deciding whether a transfer may proceed."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, Inexact, localcontext
from typing import Optional

INSUFFICIENT_OR_INVALID = "insufficient_or_invalid"
PRECISION_EXCEEDED = "precision_exceeded"

# Significant digits available to a resulting balance.
BALANCE_PRECISION = 96


@dataclass(slots=True, frozen=True)
class TransferDecision:
    approved: bool
    new_source_balance: Decimal
    new_destination_balance: Decimal
    reason: Optional[str] = None


def validate_transfer(
    source_balance: Decimal,
    destination_balance: Decimal,
    amount: Decimal,
) -> TransferDecision:
    """Approve the transfer only if both resulting balances stay strictly positive.

    Zero or negative amounts and source == destination are accepted as input;
    a balance that would land exactly on zero is rejected. So is a transfer
    whose resulting balances cannot be represented exactly in
    ``BALANCE_PRECISION`` digits, so that no amount is ever rounded away.
    """
    with localcontext() as ctx:
        ctx.prec = BALANCE_PRECISION
        ctx.traps[Inexact] = True
        try:
            new_source = source_balance - amount
            new_destination = destination_balance + amount
        except Inexact:
            return TransferDecision(
                approved=False,
                new_source_balance=source_balance,
                new_destination_balance=destination_balance,
                reason=PRECISION_EXCEEDED,
            )

    approved = new_source > 0 and new_destination > 0
    return TransferDecision(
        approved=approved,
        new_source_balance=new_source,
        new_destination_balance=new_destination,
        reason=None if approved else INSUFFICIENT_OR_INVALID,
    )


__all__ = ["BALANCE_PRECISION", "INSUFFICIENT_OR_INVALID", "PRECISION_EXCEEDED", "TransferDecision", "validate_transfer"]
