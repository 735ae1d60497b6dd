"""Tests for logging configuration."""

import json
import logging
import warnings

from pythonjsonlogger.json import JsonFormatter

from balancebook.utils.logging_setup import BalancebookJsonFormatter, setup_logging


def test_setup_logging_level_and_handler():
    setup_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, BalancebookJsonFormatter)


def test_setup_logging_replaces_handlers():
    setup_logging()
    setup_logging()
    assert len(logging.getLogger().handlers) == 1


def test_json_formatter_fields():
    setup_logging("INFO", json_format=True)
    formatter = logging.getLogger().handlers[0].formatter
    assert isinstance(formatter, BalancebookJsonFormatter)

    record = logging.LogRecord(
        name="balancebook.domain.loan",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Loan %s settled",
        args=(7,),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Loan 7 settled"
    assert payload["level"] == "WARNING"
    assert payload["app"] == "balancebook"
    assert payload["name"] == "balancebook.domain.loan"
    assert "timestamp" in payload


def test_json_formatter_uses_current_module():
    assert issubclass(BalancebookJsonFormatter, JsonFormatter)

    formatter = BalancebookJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("balancebook", logging.INFO, __file__, 1, "ok", (), None)
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        assert json.loads(formatter.format(record))["message"] == "ok"
