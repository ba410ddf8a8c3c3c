"""Tests for TaskiesDB engine setup, schema and sessions."""
import pytest
from datetime import date

from sqlalchemy import inspect, select, text

from taskies.database import TaskiesDB, Workday


def test_initialize_schema_creates_tables(test_db):
    tables = set(inspect(test_db.engine).get_table_names())
    assert {
        "employers",
        "clients",
        "projects",
        "categories",
        "workdays",
        "tasks",
        "attributes",
        "task_attribute_values",
    } <= tables


def test_pragmas_applied(test_db):
    with test_db.engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
        assert connection.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        assert connection.execute(text("PRAGMA temp_store")).scalar() == 2


def test_session_scope_commits(test_db):
    with test_db.session_scope() as session:
        session.add(Workday(date=date(2024, 1, 1)))

    with test_db.session_scope() as session:
        assert session.scalars(select(Workday.date)).all() == [date(2024, 1, 1)]


def test_session_scope_rolls_back_on_error(test_db):
    with pytest.raises(RuntimeError):
        with test_db.session_scope() as session:
            session.add(Workday(date=date(2024, 1, 1)))
            session.flush()
            raise RuntimeError("abort")

    with test_db.session_scope() as session:
        assert session.scalars(select(Workday)).all() == []


def test_dates_stored_as_iso_text(test_db):
    with test_db.session_scope() as session:
        session.add(Workday(date=date(2024, 1, 31)))

    with test_db.engine.connect() as connection:
        stored = connection.execute(text("SELECT date FROM workdays")).scalar()
    assert stored == "2024-01-31"


def test_log_dir_creates_logger(tmp_path):
    db = TaskiesDB(tmp_path / "taskies.db", log_dir=tmp_path / "logs")
    try:
        assert db.logger is not None
        assert (tmp_path / "logs" / "system" / "database.log").exists()
    finally:
        db.dispose()
