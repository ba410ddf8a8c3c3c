"""Tests for TemporalFileManager staging and cleanup."""
import pytest

from taskies.core.exceptions import TemporalFileError
from taskies.core.temporal_files import TemporalFileManager


def test_create_temp_file_tracked(tmp_path):
    manager = TemporalFileManager(tmp_path)
    temp_file = manager.create_temp_file(suffix=".csv")

    assert temp_file.exists()
    assert temp_file.name.startswith("taskies_")
    assert temp_file in manager.active_files


def test_cleanup_removes_tracked_files(tmp_path):
    manager = TemporalFileManager(tmp_path)
    first = manager.create_temp_file()
    second = manager.create_temp_file()

    stats = manager.cleanup()

    assert stats == {"files_removed": 2, "errors": 0}
    assert not first.exists() and not second.exists()
    assert manager.active_files == []


def test_context_manager_cleans_up(tmp_path):
    with TemporalFileManager(tmp_path) as manager:
        temp_file = manager.create_temp_file()
    assert not temp_file.exists()


def test_write_atomic_keeps_line_endings(tmp_path):
    destination = tmp_path / "nested" / "out.csv"

    with TemporalFileManager(tmp_path / "staging") as manager:
        written = manager.write_atomic("a\r\nb\r", destination)

    assert written == destination
    assert destination.read_bytes() == b"a\r\nb\r"
    assert list((tmp_path / "staging").iterdir()) == []


def test_write_atomic_failure_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with TemporalFileManager(tmp_path / "staging") as manager:
        with pytest.raises(TemporalFileError):
            manager.write_atomic("text", blocker / "out.csv")

    assert list((tmp_path / "staging").iterdir()) == []
