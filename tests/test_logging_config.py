"""Tests for logging configuration."""

import json
import logging
import sys

from patch_facts.logging_config import StructuredFormatter, setup_logging


def _record(message, exc_info=None):
    return logging.LogRecord("patch_facts", logging.WARNING, __file__, 1, message, None, exc_info)


class TestSetupLogging:
    def test_reconfigures_single_handler(self):
        setup_logging("DEBUG")

        logger = setup_logging("WARNING", structured=True)

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_logs_go_to_stderr(self, capsys):
        logger = setup_logging("INFO")

        logger.info("rocky 9 EOL date 2032-05-31: supported")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "rocky 9 EOL date" in captured.err
        assert logger.handlers[0].stream is sys.stderr

    def test_text_format(self):
        logger = setup_logging("info")
        assert logger.level == logging.INFO
        assert not isinstance(logger.handlers[0].formatter, StructuredFormatter)


class TestStructuredFormatter:
    def test_json_line(self):
        entry = json.loads(StructuredFormatter().format(_record("yum check-update exited with code 1")))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "patch_facts"
        assert entry["message"] == "yum check-update exited with code 1"
        assert "timestamp" in entry
        assert entry["host"]
        assert "exception" not in entry
        assert "command" not in entry

    def test_command_context(self):
        record = _record("yum check-update exited with code 1")
        record.command = "yum check-update"
        record.returncode = 1

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["command"] == "yum check-update"
        assert entry["returncode"] == 1

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", exc_info=sys.exc_info())

        entry = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]
