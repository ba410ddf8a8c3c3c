"""Tests for database decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from taskies.core.exceptions import DatabaseError
from taskies.core.logging_manager import TaskiesLogger
from taskies.database.decorators import handle_db_errors, log_database_operation


class Worker:
    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("work")
    def work(self, value):
        return value * 2

    @log_database_operation("fail")
    def fail(self):
        raise ValueError("invalid value")


class TestLogDatabaseOperation:
    """Tests for the timing/logging decorator."""

    def test_success_logs_completion(self):
        mock_logger = MagicMock(spec=TaskiesLogger)

        assert Worker(mock_logger).work(21) == 42

        mock_logger.log_debug.assert_called_once()
        assert "Starting work" in mock_logger.log_debug.call_args[0][0]
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "work_completed"
        assert details["success"] is True

    def test_failure_logged_and_reraised(self):
        mock_logger = MagicMock(spec=TaskiesLogger)

        with pytest.raises(ValueError):
            Worker(mock_logger).fail()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "fail"
        mock_logger.log_operation.assert_not_called()

    def test_without_logger(self):
        assert Worker().work(1) == 2


class TestHandleDbErrors:
    """Tests for SQLAlchemy error translation."""

    def test_missing_table(self):
        @handle_db_errors
        def select_rows():
            raise OperationalError("SELECT", {}, Exception("no such table: tasks"))

        with pytest.raises(DatabaseError) as exc_info:
            select_rows()
        assert "no such table: tasks" in str(exc_info.value)

    def test_sqlalchemy_error(self):
        @handle_db_errors
        def query():
            raise SQLAlchemyError("connection failed")

        with pytest.raises(DatabaseError) as exc_info:
            query()
        assert "Database operation failed" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)

    def test_other_exceptions_propagate(self):
        @handle_db_errors
        def broken():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            broken()
