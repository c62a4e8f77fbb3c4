from __future__ import annotations

import json
import logging

from ledger_service.core.logging_config import _json_formatter


def _record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord(
        name="ledger_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


def test_json_formatter_renders_message_and_level() -> None:
    payload = json.loads(_json_formatter(_record("Transfer committed: %s -> %s", "X", "Y")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "ledger_service.test"
    assert payload["message"] == "Transfer committed: X -> Y"


def test_json_formatter_promotes_extra_fields() -> None:
    record = _record("hello")
    record.wallet_id = "X"
    record.amount = "30"

    payload = json.loads(_json_formatter(record))

    assert payload["wallet_id"] == "X"
    assert payload["amount"] == "30"
    assert "args" not in payload
