#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Taskies export tooling.

All paths are Path objects relative to the project root. Every one of them
can be overridden from the command line (see taskies.cli).

The project structure:
    ROOT/
    ├── taskies/       # Source package
    ├── data/          # Database and export presets
    ├── exports/       # Default destination for exported files
    ├── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from pathlib import Path
from typing import Optional


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/taskies/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> taskies/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# --- Database ---
DB_PATH = DATA_DIR / "taskies.db"

# --- Export ---
EXPORT_DIR = ROOT / "exports"
PRESETS_PATH = DATA_DIR / "export_presets.yaml"
EXPORT_FILE_PREFIX = "taskies-export"

# ---- Logs ----
LOG_DIR = ROOT / "logs"


def default_export_file(
    export_dir: Path = EXPORT_DIR, today: Optional[date] = None
) -> Path:
    """
    Build the default export file path for a given day.

    Args:
        export_dir: Directory the file is written to
        today: Date stamped into the name (default: today)

    Returns:
        Path such as exports/taskies-export-2024-01-31.csv
    """
    stamp = (today or date.today()).isoformat()
    return Path(export_dir) / f"{EXPORT_FILE_PREFIX}-{stamp}.csv"
