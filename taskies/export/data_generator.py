#!/usr/bin/env python3
"""
data_generator.py
-----------------
Assembles the headers and rows of an export.

Flow:
    1. Headers are the projection headers, in order index order
    2. The main query fills one row per task, keyed by task id
    3. With attributes enabled, the distinct attribute names in scope are
       appended as headers (sorted) and every row gets one value per name,
       "" where the task has none

Rows stay keyed by task id in query order (workday date, then task id).
The id itself is never part of a row.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from taskies.core.logging_manager import TaskiesLogger, safe_logger

from .columns import Projection
from .fetcher import AttributeEntry, ExportDataFetcher
from .query_builder import ExportQueryBuilder


@dataclass
class ExportData:
    """
    Headers plus rows of one export.

    Attributes:
        headers: Column headers in output order
        rows: Task id -> cell values, in emission order
    """

    headers: List[str] = field(default_factory=list)
    rows: Dict[int, List[str]] = field(default_factory=dict)


class AttributePivot:
    """Turns per-task attribute entries into fixed trailing columns."""

    @staticmethod
    def pivot(
        rows: Mapping[int, List[str]],
        attribute_names: Sequence[str],
        entries: Mapping[int, Sequence[AttributeEntry]],
    ) -> Dict[int, List[str]]:
        """
        Append one cell per attribute name to every row.

        Args:
            rows: Existing rows keyed by task id
            attribute_names: Sorted attribute names (the new headers)
            entries: Attribute entries grouped by task id

        Returns:
            New rows; the input rows are left untouched
        """
        pivoted: Dict[int, List[str]] = {}
        for task_id, values in rows.items():
            lookup = {entry.name: entry.value for entry in entries.get(task_id, ())}
            pivoted[task_id] = list(values) + [
                lookup.get(name, "") for name in attribute_names
            ]
        return pivoted


class DataGenerator:
    """
    Runs the export queries for a scope and builds ExportData.

    Attributes:
        session: Session the queries run on
        logger: Optional TaskiesLogger
        include_attributes: Whether attribute columns are appended
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[TaskiesLogger] = None,
        include_attributes: bool = False,
    ) -> None:
        self.session = session
        self.logger = logger
        self.include_attributes = include_attributes
        self.builder = ExportQueryBuilder(logger)
        self.fetcher = ExportDataFetcher(session, logger)

    def fill_data(
        self,
        projections: Sequence[Projection],
        from_date: str,
        to_date: str,
        is_preview: bool = False,
        task_id: Optional[int] = None,
    ) -> ExportData:
        """
        Fetch headers and rows for projections over a scope.

        Args:
            projections: Projections sorted by order index
            from_date: Inclusive start date, ignored in preview
            to_date: Inclusive end date, ignored in preview
            is_preview: Restrict to the single task task_id
            task_id: Task to preview

        Returns:
            ExportData with equal-length rows

        Raises:
            DatabaseError: If any query fails
        """
        data = ExportData(headers=[p.header_name for p in projections])

        query = self.builder.build_query(
            projections, from_date, to_date, is_preview, task_id
        )
        data.rows = self.fetcher.fetch_rows(query, len(projections))

        if is_preview and len(data.rows) > 1:
            safe_logger(self.logger).log_warning(
                "Preview query returned more than one task",
                {"task_id": task_id, "rows": len(data.rows)},
            )
            first_id = next(iter(data.rows))
            data.rows = {first_id: data.rows[first_id]}

        if self.include_attributes:
            self._fill_attributes(data, from_date, to_date, is_preview, task_id)

        return data

    def _fill_attributes(
        self,
        data: ExportData,
        from_date: str,
        to_date: str,
        is_preview: bool,
        task_id: Optional[int],
    ) -> None:
        names_query = self.builder.build_attribute_names_query(
            from_date, to_date, is_preview, task_id
        )
        attribute_names = self.fetcher.fetch_attribute_names(names_query)

        if not attribute_names:
            safe_logger(self.logger).log_warning(
                "No attributes found for export scope",
                {"from_date": from_date, "to_date": to_date, "task_id": task_id},
            )
            return

        values_query = self.builder.build_attribute_values_query(
            from_date, to_date, is_preview, task_id
        )
        entries = self.fetcher.fetch_attribute_entries(values_query)

        data.headers = data.headers + attribute_names
        data.rows = AttributePivot.pivot(data.rows, attribute_names, entries)
