"""Tests for structured logging configuration."""

import json
import logging

from farmledger.config import configure_logging, get_logger


def test_json_format_emits_key_values(capsys, monkeypatch):
    monkeypatch.delenv("FARMLEDGER_LOG_FORMAT", raising=False)
    configure_logging(level="INFO", format="json")

    get_logger("farmledger.tests").info("invoice_created", invoice_id=7, total="240.00")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "invoice_created"
    assert event["invoice_id"] == 7
    assert event["level"] == "info"
    assert event["logger"] == "farmledger.tests"
    assert "timestamp" in event


def test_level_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("FARMLEDGER_LOG_LEVEL", "error")
    configure_logging(format="console")

    assert logging.getLogger().level == logging.ERROR
    get_logger("farmledger.tests").warning("payment_applied", invoice_id=1)
    assert "payment_applied" not in capsys.readouterr().err


def test_default_level_is_warning(monkeypatch):
    monkeypatch.delenv("FARMLEDGER_LOG_LEVEL", raising=False)
    configure_logging()

    assert logging.getLogger().level == logging.WARNING
