from decimal import Decimal

from ledger_service.core.config import Settings, get_settings


def test_get_settings_defaults():
    settings = get_settings()

    assert settings.api_prefix == "/api/v1"
    assert settings.database_url.startswith("sqlite+aiosqlite")
    assert settings.database.sqlite_begin == "IMMEDIATE"
    assert settings.wallet.initial_balance == Decimal("100")
    assert settings.wallet.id_attempts >= 1
    assert get_settings() is settings


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("WALLET__INITIAL_BALANCE", "250.50")
    monkeypatch.setenv("WALLET__ID_LENGTH", "6")
    monkeypatch.setenv("LOGGING__JSON", "true")

    settings = Settings()

    assert settings.database_url == "sqlite+aiosqlite:///./other.db"
    assert settings.wallet.initial_balance == Decimal("250.50")
    assert settings.wallet.id_length == 6
    assert settings.logging.json_logs is True
