"""
Tests for logging_manager module.

Tests TaskiesLogger file output, the NullLogger/safe_logger pair and the
CLI error handler.
"""
import click
import pytest
from unittest.mock import MagicMock

from taskies.core.exceptions import ExportError
from taskies.core.logging_manager import (
    NullLogger,
    TaskiesLogger,
    handle_cli_error,
    safe_logger,
)


class TestTaskiesLogger:
    """Tests for the rotating file logger."""

    def test_writes_component_and_error_logs(self, tmp_path):
        logger = TaskiesLogger(tmp_path, "export")

        logger.log_operation("export_csv", {"rows": 2})
        logger.log_error(ExportError("boom"), {"operation": "export_csv"})

        component_log = (tmp_path / "export.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert 'OPERATION - export_csv: {"rows": 2}' in component_log
        assert "ERROR - ExportError: boom" in error_log
        assert "operation=export_csv" in error_log

    def test_debug_and_warning_share_component_log(self, tmp_path):
        logger = TaskiesLogger(tmp_path, "export")

        logger.log_debug("Built export query")
        logger.log_warning("Extra rows ignored", {"task_id": 42})

        component_log = (tmp_path / "export.log").read_text(encoding="utf-8")
        assert "DEBUG - Built export query\n" in component_log
        assert 'WARNING - Extra rows ignored: {"task_id": 42}' in component_log
        assert not (tmp_path / "errors.log").read_text(encoding="utf-8")

    def test_log_cli_error_message(self, tmp_path):
        logger = TaskiesLogger(tmp_path, "cli")
        message = logger.log_cli_error(ExportError("Failed to fetch export rows"))
        assert message == "Error: ExportError: Failed to fetch export rows"

    def test_log_cli_error_with_traceback(self, tmp_path):
        logger = TaskiesLogger(tmp_path, "cli")
        message = logger.log_cli_error(ValueError("bad"), show_traceback=True)
        assert message.startswith("Error: ValueError: bad\n\n")


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_no_op(self):
        """NullLogger methods should do nothing."""
        logger = NullLogger()
        logger.log_operation("test_op", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_warning("warning message", {"key": "value"})

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        result = NullLogger().log_cli_error(ValueError("test error"), {"context": "test"})
        assert result == "Error: ValueError: test error"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=TaskiesLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_when_none(self):
        assert isinstance(safe_logger(None), NullLogger)

    def test_safe_logger_null_logger_is_singleton(self):
        assert safe_logger(None) is safe_logger(None)

    def test_works_with_log_details(self):
        mock_logger = MagicMock(spec=TaskiesLogger)
        details = {"table": "tasks", "rows": 42}

        safe_logger(mock_logger).log_operation("fetch", details)
        mock_logger.log_operation.assert_called_once_with("fetch", details)


class TestHandleCliError:
    """Tests for the shared CLI error handler."""

    def test_echoes_message_and_exits(self, capsys):
        mock_logger = MagicMock(spec=TaskiesLogger)
        mock_logger.log_cli_error.return_value = "Error: ExportError: boom"
        ctx = click.Context(click.Command("csv"), obj={"logger": mock_logger})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ExportError("boom"), "export_csv", {"output": "x.csv"})

        assert exc_info.value.code == 1
        assert "Error: ExportError: boom" in capsys.readouterr().err
        context = mock_logger.log_cli_error.call_args[0][1]
        assert context == {"operation": "export_csv", "output": "x.csv"}

    def test_without_logger(self, capsys):
        ctx = click.Context(click.Command("csv"), obj={})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("bad"), "export_csv", exit_code=2)

        assert "Error: ValueError: bad" in capsys.readouterr().err
