"""Secure random helpers used for wallet identifiers."""

from __future__ import annotations

import os
import secrets

WALLET_ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-"


class EntropyUnavailableError(RuntimeError):
    """Raised when the operating system CSPRNG cannot be read."""


def assert_entropy_available() -> None:
    """Fail fast when no cryptographically secure random source is available.

    Called once at startup; the service must not accept requests without it.
    """
    try:
        sample = os.urandom(1)
    except (NotImplementedError, OSError) as exc:
        raise EntropyUnavailableError(f"os.urandom is unavailable: {exc!r}") from exc
    if len(sample) != 1:
        raise EntropyUnavailableError("os.urandom returned a short read")


def generate_wallet_id(length: int, alphabet: str = WALLET_ID_ALPHABET) -> str:
    """Return a random identifier of ``length`` characters drawn from ``alphabet``."""
    if length < 1:
        raise ValueError("wallet id length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))


__all__ = [
    "WALLET_ID_ALPHABET",
    "EntropyUnavailableError",
    "assert_entropy_available",
    "generate_wallet_id",
]
