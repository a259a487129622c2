from __future__ import annotations

import json
import logging

from common.logger import JsonFormatter, setup_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ledger_service.app.services.webhook_service",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="rejected webhook %s",
        args=("sig",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extra_keys() -> None:
    line = JsonFormatter().format(
        _record(event="webhook.invalid_signature", order_id="o-1", unrelated="skip")
    )

    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "rejected webhook sig"
    assert payload["event"] == "webhook.invalid_signature"
    assert payload["order_id"] == "o-1"
    assert "unrelated" not in payload


def test_setup_logger_uses_service_name_and_level(monkeypatch) -> None:
    monkeypatch.setenv("SERVICE_NAME", "ledger-test")

    logger = setup_logger(level="debug")

    assert logger.name == "ledger-test"
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
