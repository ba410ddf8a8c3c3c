#!/usr/bin/env python3
"""
temporal_files.py
--------------------
Temporary file staging for export output.

Exported text is written to a tracked temporary file first and only moved
to its destination once fully written, so a failed export never leaves a
truncated file behind.

Classes:
    TemporalFileManager: Tracks staged files and removes leftovers on exit

Usage:
    from taskies.core.temporal_files import TemporalFileManager

    with TemporalFileManager() as temp_manager:
        temp_manager.write_atomic(text, Path("exports/taskies-export.csv"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

# --- Local imports ---
from .exceptions import TemporalFileError


class TemporalFileManager:
    """
    Manages staged temporary files with automatic cleanup.

    Usage:
        with TemporalFileManager() as temp_manager:
            temp_file = temp_manager.create_temp_file(suffix=".csv")
            # ... write temp_file ...
        # Leftover files removed on context exit
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        """
        Initialize temporal file manager.

        Args:
            base_dir: Base directory for temporary files. Uses system temp if None.
        """
        self.base_dir = Path(base_dir) if base_dir else Path(tempfile.gettempdir())
        self.active_files: List[Path] = []

    def create_temp_file(self, suffix: str = "", prefix: str = "taskies_") -> Path:
        """
        Create an empty temporary file and track it for cleanup.

        Args:
            suffix: File suffix/extension
            prefix: File prefix

        Returns:
            Path to the temporary file

        Raises:
            TemporalFileError: If file creation fails
        """
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            temp_file_obj = tempfile.NamedTemporaryFile(
                suffix=suffix, prefix=prefix, dir=self.base_dir, delete=False
            )
            temp_file_obj.close()
        except OSError as e:
            raise TemporalFileError(f"Failed to create temporary file: {e}") from e

        temp_path = Path(temp_file_obj.name)
        self.active_files.append(temp_path)
        return temp_path

    def write_atomic(
        self, text: str, destination: Path, encoding: str = "utf-8"
    ) -> Path:
        """
        Stage text in a temporary file, then move it to its destination.

        Line terminators inside text are written verbatim.

        Args:
            text: Complete file contents
            destination: Final file path (parent directories are created)
            encoding: Text encoding

        Returns:
            The destination path

        Raises:
            TemporalFileError: If staging or moving the file fails
        """
        destination = Path(destination)
        temp_file = self.create_temp_file(suffix=destination.suffix)

        try:
            with open(temp_file, "w", encoding=encoding, newline="") as handle:
                handle.write(text)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(temp_file), str(destination))
        except OSError as e:
            raise TemporalFileError(
                f"Failed to write {destination}: {e}"
            ) from e

        self.active_files.remove(temp_file)
        return destination

    def cleanup(self) -> Dict[str, int]:
        """
        Remove all tracked temporary files.

        Returns:
            Dictionary with cleanup statistics
        """
        cleanup_stats = {"files_removed": 0, "errors": 0}

        for temp_file in self.active_files[:]:
            try:
                if temp_file.exists():
                    temp_file.unlink()
                    cleanup_stats["files_removed"] += 1
                self.active_files.remove(temp_file)
            except OSError:
                cleanup_stats["errors"] += 1

        return cleanup_stats

    def __enter__(self) -> "TemporalFileManager":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Optional[Any],
    ) -> None:
        del exc_type, exc_val, exc_tb
        self.cleanup()
