"""Logging configuration for patch-facts.

Log lines go to stderr; stdout carries only the ``--print-json`` record. With
``--log-format json`` each line is a JSON object carrying the host name, so
logs shipped from many hosts stay attributable.
"""

import json
import logging
import socket
import sys
from datetime import datetime
from typing import Any, Dict

LOGGER_NAME = "patch_facts"
TEXT_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes callers may attach with ``extra=`` that the JSON formatter keeps
CONTEXT_FIELDS = ("command", "returncode")


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Configure the ``patch_facts`` logger.

    The logger owns a single handler on the current ``sys.stderr``. Calling
    this again replaces that handler, so the CLI can apply ``--log-level``
    and ``--log-format`` after the module-level logger was created at
    import time.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Emit one JSON object per line instead of text

    Returns:
        The configured logger
    """
    numeric_level = getattr(logging, level.upper())
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(TEXT_FORMAT, TEXT_DATEFMT))
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON line formatter."""

    def __init__(self) -> None:
        super().__init__()
        self.hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "host": self.hostname,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


logger = setup_logging()
