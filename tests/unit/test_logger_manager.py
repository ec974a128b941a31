"""
Unit tests for serializer_logging/logger_manager.py.

Tests cover formatter output (structured extras, exceptions), per-module
file loggers, logger caching and log directory creation.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from unittest.mock import patch

from serializer_logging import logger_manager
from serializer_logging.logger_manager import (
    HumanReadableFormatter,
    JSONFormatter,
    create_module_log_directories,
    setup_module_logger,
)


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("abi_serializer", logging.WARNING, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_base_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "abi_serializer"
        assert entry["message"] == "hello"
        assert "timestamp" in entry

    def test_serializer_extras(self):
        record = _record(breadcrumbs="[0][a]", error_key="ABI_BAD_COMPONENT", trace_id="t", error_params={"component": "None"})
        entry = json.loads(JSONFormatter().format(record))
        assert entry["breadcrumbs"] == "[0][a]"
        assert entry["error_key"] == "ABI_BAD_COMPONENT"
        assert entry["trace_id"] == "t"
        assert entry["error_params"] == {"component": "None"}
        assert "formatting_mode" not in entry

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestHumanReadableFormatter:
    def test_layout(self):
        line = HumanReadableFormatter().format(_record("done"))
        assert "| WARNING  |" in line
        assert line.endswith("| done")

    def test_error_context_suffix(self):
        """Failure records end with their message key and breadcrumb path."""
        line = HumanReadableFormatter().format(
            _record("failed", error_key="ABI_VALUE_TYPE_MISMATCH", breadcrumbs="[0][amount]")
        )
        assert line.endswith("| failed [ABI_VALUE_TYPE_MISMATCH at [0][amount]]")

    def test_root_failure_suffix(self):
        line = HumanReadableFormatter().format(_record("failed", error_key="ABI_BAD_COMPONENT", breadcrumbs=""))
        assert line.endswith("[ABI_BAD_COMPONENT at root]")


class TestSetupModuleLogger:
    def test_writes_to_module_folder(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            logger = setup_module_logger(
                "test_writes", "writes.log", module_folder="Test_Logs", use_json_formatter=True
            )
            logger.info("payload", extra={"breadcrumbs": "[x]"})
            for handler in logger.handlers:
                handler.flush()
        lines = (tmp_path / "Test_Logs" / "writes.log").read_text().splitlines()
        assert json.loads(lines[-1])["breadcrumbs"] == "[x]"
        assert logger.propagate is False

    def test_cached(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            first = setup_module_logger("test_cached", "cached.log")
            second = setup_module_logger("test_cached", "cached.log")
        assert first is second
        assert len(first.handlers) == 1

    def test_console_handler(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            logger = setup_module_logger("test_console", "console.log", console=True)
        assert any(type(h) is logging.StreamHandler for h in logger.handlers)


class TestCreateModuleLogDirectories:
    def test_creates_configured_folders(self, tmp_path):
        folders = {"serializer": "Serializer_Logs", "cli": "CLI_Logs"}
        with (
            patch.object(logger_manager, "_LOG_DIR", str(tmp_path)),
            patch.object(logger_manager, "_MODULE_FOLDERS", folders),
        ):
            created = create_module_log_directories()
        assert set(created) == {"serializer", "cli"}
        for path in created.values():
            assert os.path.isdir(path)
