#!/usr/bin/env python3
"""
manager.py
--------------------
Connection and session management for the Taskies SQLite database.

Provides the TaskiesDB class: it owns the SQLAlchemy engine, applies the
connection pragmas Taskies has always used, creates the schema for new
databases and hands out transactional sessions.

Pragmas applied on every new connection:
    - foreign_keys = ON
    - journal_mode = WAL
    - synchronous = normal
    - temp_store = memory

Usage:
    db = TaskiesDB("data/taskies.db", log_dir="logs")
    with db.session_scope() as session:
        exporter = CsvExporterService(session, options, logger=db.logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from taskies.core.exceptions import DatabaseError
from taskies.core.logging_manager import TaskiesLogger

from .models import Base


SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys = ON;",
    "PRAGMA journal_mode = WAL;",
    "PRAGMA synchronous = normal;",
    "PRAGMA temp_store = memory;",
)


def _apply_pragmas(dbapi_connection, connection_record) -> None:
    """Connection listener executing SQLITE_PRAGMAS."""
    del connection_record
    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


class TaskiesDB:
    """
    Database manager for the Taskies time tracking store.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
        logger: TaskiesLogger or None
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[TaskiesLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file
            log_dir: Directory for log files (ignored when logger is given)
            logger: Existing logger to reuse
        """
        self.db_path = Path(db_path).expanduser().resolve()

        if logger is not None:
            self.logger: Optional[TaskiesLogger] = logger
        elif log_dir:
            self.logger = TaskiesLogger(
                Path(log_dir).expanduser().resolve() / "system",
                component_name="database",
            )
        else:
            self.logger = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Create the engine, register the pragma listener and the session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_open", {"db_path": str(self.db_path)}
                )

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
            )
            event.listen(self.engine, "connect", _apply_pragmas)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )
        except (SQLAlchemyError, OSError) as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_open"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """
        Create any missing tables.

        Raises:
            DatabaseError: If the schema cannot be created
        """
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "initialize_schema"})
            raise DatabaseError(f"Schema creation failed: {e}") from e

        if self.logger:
            self.logger.log_operation(
                "schema_initialized", {"tables": sorted(Base.metadata.tables)}
            )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a series of operations.

        Usage:
            with db.session_scope() as session:
                session.add(task)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
