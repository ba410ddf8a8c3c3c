#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for Taskies commands.

Functions:
    setup_logger: Initialize TaskiesLogger for CLI operations
"""
from pathlib import Path

from taskies.core.logging_manager import TaskiesLogger


def setup_logger(log_dir: Path, component_name: str) -> TaskiesLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'export')

    Returns:
        Configured TaskiesLogger writing under <log_dir>/operations
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return TaskiesLogger(operations_log_dir, component_name=component_name)
