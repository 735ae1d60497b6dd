"""Logging configuration for the command line."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class BalancebookJsonFormatter(JsonFormatter):
    """JSON formatter adding a UTC timestamp, the level and the app name."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["app"] = "balancebook"


def setup_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Configure the root logger to write to stderr.

    Args:
        level: Logging level name
        json_format: Emit one JSON object per line instead of plain text
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        formatter = BalancebookJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
