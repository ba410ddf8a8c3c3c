#!/usr/bin/env python3
"""
fetcher.py
----------
Executes built export queries and reads their results as text.

Every value leaves this module as a string: NULL becomes "", anything
else goes through str(). Results are assembled locally and returned only
once the whole result set has been read, so a failing query never yields
a partially filled structure.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import text
from sqlalchemy.orm import Session

# --- Local imports ---
from taskies.core.logging_manager import TaskiesLogger, safe_logger
from taskies.database.decorators import handle_db_errors

from .query_builder import BuiltQuery


@dataclass(frozen=True)
class AttributeEntry:
    """One attribute value of one task, read as text."""

    task_id: int
    name: str
    value: str


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class ExportDataFetcher:
    """Runs export statements on a session owned by the caller."""

    def __init__(self, session: Session, logger: Optional[TaskiesLogger] = None) -> None:
        self.session = session
        self.logger = logger

    def _execute(self, query: BuiltQuery):
        return self.session.execute(text(query.sql), query.bind_params)

    @handle_db_errors
    def fetch_rows(self, query: BuiltQuery, value_count: int) -> Dict[int, List[str]]:
        """
        Read main-query rows keyed by task id.

        Args:
            query: Main export query (column 0 is the task id)
            value_count: Number of projected columns after the id

        Returns:
            Insertion-ordered mapping of task id to text values
        """
        rows: Dict[int, List[str]] = {}
        for record in self._execute(query):
            task_id = int(record[0])
            rows[task_id] = [_as_text(record[i]) for i in range(1, value_count + 1)]

        safe_logger(self.logger).log_debug("Fetched export rows", {"rows": len(rows)})
        return rows

    @handle_db_errors
    def fetch_attribute_names(self, query: BuiltQuery) -> List[str]:
        """Read the single-column attribute names result in query order."""
        return [_as_text(record[0]) for record in self._execute(query)]

    @handle_db_errors
    def fetch_attribute_entries(
        self, query: BuiltQuery
    ) -> Dict[int, List[AttributeEntry]]:
        """Read (task id, name, value) triples grouped by task id."""
        entries: Dict[int, List[AttributeEntry]] = {}
        for task_id, name, value in self._execute(query):
            entry = AttributeEntry(int(task_id), _as_text(name), _as_text(value))
            entries.setdefault(entry.task_id, []).append(entry)
        return entries

    @handle_db_errors
    def fetch_single_id(self, query: BuiltQuery) -> Optional[int]:
        """
        Read the id from a query expected to return at most one row.

        Extra rows are logged and ignored; the first row wins.
        """
        records = self._execute(query).fetchall()
        if not records:
            return None

        if len(records) > 1:
            safe_logger(self.logger).log_warning(
                "Unexpected extra rows for single-row query",
                {"rows": len(records), "sql": query.sql},
            )
        return int(records[0][0])
