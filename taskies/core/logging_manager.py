#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for export runs and the database layer.

Each TaskiesLogger owns two rotating files in its log directory:
    <component>.log   every export step (debug and up)
    errors.log        failures with context and traceback

Warnings (e.g. an unexpected extra row from a single-row query) are also
echoed to the console.

Components take an optional logger and call it through `safe_logger`, so
library use without logging needs no special cases.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

_FILE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_CONSOLE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def _with_details(label: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    if details:
        return f"{label} - {message}: {json.dumps(details, default=str)}"
    return f"{label} - {message}"


class TaskiesLogger:
    """
    Rotating file logger for one component ('export', 'database').

    Attributes:
        log_dir: Directory holding the component log and errors.log
        component_name: Prefix for the logger names and the log file
    """

    def __init__(self, log_dir: Path, component_name: str = "taskies") -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._build_logger(
            "operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._build_logger("errors", "errors.log", logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(_CONSOLE_FORMAT)
        self.main_logger.addHandler(console)

    def _build_logger(self, suffix: str, filename: str, level: int) -> logging.Logger:
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Re-created loggers must not stack handlers
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(_FILE_FORMAT)
        logger.addHandler(handler)
        return logger

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a finished step, e.g. `export_csv_completed` with row counts."""
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details("DEBUG", message, details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(_with_details("WARNING", message, details))

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an error, its context and the current traceback to errors.log.

        Args:
            error: Exception that occurred
            context: Optional key/value context (operation, dates, output)
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error and return the one-line message shown in the terminal.

        Examples:
            >>> logger.log_cli_error(ExportError("Failed to fetch export rows"))
            'Error: ExportError: Failed to fetch export rows'
        """
        self.log_error(error, context or {"source": "cli"})
        message = _cli_message(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def _cli_message(error: Exception) -> str:
    return f"Error: {type(error).__name__}: {error}"


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed command through the context logger, echo it and exit.

    Args:
        ctx: Click context; `ctx.obj` may hold 'logger' and 'verbose'
        error: Exception that occurred
        operation: Name of the failed command (e.g. 'export_csv')
        additional_context: Extra context such as dates or output path
        exit_code: Process exit code (default: 1)

    Note:
        Never returns.
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Drop-in TaskiesLogger that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _cli_message(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[TaskiesLogger]) -> TaskiesLogger:
    """Return `logger`, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
