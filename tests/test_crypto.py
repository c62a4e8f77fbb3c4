import pytest

from ledger_service.core import crypto
from ledger_service.core.container import ApplicationContainer
from ledger_service.core.crypto import (
    WALLET_ID_ALPHABET,
    EntropyUnavailableError,
    assert_entropy_available,
    generate_wallet_id,
)


def test_generate_wallet_id_length_and_alphabet():
    wallet_id = generate_wallet_id(32)

    assert len(wallet_id) == 32
    assert set(wallet_id) <= set(WALLET_ID_ALPHABET)


def test_generate_wallet_id_rejects_non_positive_length():
    with pytest.raises(ValueError):
        generate_wallet_id(0)


def test_entropy_check_passes_on_a_normal_host():
    assert_entropy_available()


def _broken_urandom(size):
    raise NotImplementedError("no randomness source")


def test_entropy_check_fails_without_urandom(monkeypatch):
    monkeypatch.setattr(crypto.os, "urandom", _broken_urandom)

    with pytest.raises(EntropyUnavailableError):
        assert_entropy_available()


@pytest.mark.anyio
async def test_container_refuses_to_start_without_entropy(monkeypatch, test_settings):
    monkeypatch.setattr(crypto.os, "urandom", _broken_urandom)
    container = ApplicationContainer(settings=test_settings)

    with pytest.raises(EntropyUnavailableError):
        await container.startup()
    assert container.database is None
