#!/usr/bin/env python3
"""
query_builder.py
----------------
Parameterized SQL composition for task exports.

Builds three read-only statements from a list of projections:
    1. The main query: task id followed by one expression per projection,
       over `tasks` plus every table those projections need
    2. The attribute names query: distinct attribute names in scope,
       sorted ascending
    3. The attribute values query: (task id, attribute name, value) triples
       in scope

Scope is either a date range over `workdays.date` (full export) or a single
task id (preview). The mode is an argument of every build call; the builder
holds no per-export state and can be shared.

Joins are derived from the projections: each non-base table contributes
its catalog JoinSpec once, prerequisite tables first (e.g. `projects`
before `employers`). `workdays` is always joined because both scopes
and the emission order depend on it.

Building is pure string assembly. Nothing touches the database here;
errors surface when the statement is executed.

Usage:
    builder = ExportQueryBuilder()
    query = builder.build_query(projections, "2024-01-01", "2024-01-31")
    session.execute(text(query.sql), query.bind_params)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

# --- Local imports ---
from taskies.core.exceptions import ValidationError
from taskies.core.logging_manager import TaskiesLogger, safe_logger

from .columns import (
    BASE_ID_COLUMN,
    BASE_TABLE,
    DATE_TABLE,
    DURATION_IDENTIFIER,
    TABLE_JOINS,
    JoinSpec,
    Projection,
)
from .enums import FieldType


@dataclass(frozen=True)
class BuiltQuery:
    """
    SQL text plus its bind parameters.

    Attributes:
        sql: Statement using named placeholders (`:name`)
        parameters: (name, value) pairs in the order they appear in sql
    """

    sql: str
    parameters: Tuple[Tuple[str, Any], ...] = ()

    @property
    def bind_params(self) -> Dict[str, Any]:
        return dict(self.parameters)


def _quote_identifier(name: str) -> str:
    """Double-quote an SQL identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


class ExportQueryBuilder:
    """Composes export statements from projections and a scope."""

    def __init__(self, logger: Optional[TaskiesLogger] = None) -> None:
        self.logger = logger

    # ----- Joins -----
    def compute_joins(self, projections: Sequence[Projection]) -> List[JoinSpec]:
        """
        Derive the joins the projections require.

        Args:
            projections: Selected projections

        Returns:
            JoinSpecs deduplicated by table, prerequisites first

        Raises:
            ValidationError: If a projection's table has no join path
        """
        joins: Dict[str, JoinSpec] = {}
        self._add_join(DATE_TABLE, joins)

        for projection in projections:
            table = projection.column.source_table
            if table != BASE_TABLE:
                self._add_join(table, joins)

        return list(joins.values())

    def _add_join(self, table: str, joins: Dict[str, JoinSpec]) -> None:
        if table in joins:
            return

        join = TABLE_JOINS.get(table)
        if join is None:
            raise ValidationError(f"No join path from {BASE_TABLE} to '{table}'")

        if join.parent_table != BASE_TABLE:
            self._add_join(join.parent_table, joins)

        joins[table] = join

    # ----- Statements -----
    def build_query(
        self,
        projections: Sequence[Projection],
        from_date: str,
        to_date: str,
        is_preview: bool = False,
        task_id: Optional[int] = None,
    ) -> BuiltQuery:
        """
        Build the main export query.

        Column 0 of the result is always `tasks.task_id`; column i+1 is the
        value of projections[i]. Rows are ordered by workday date, then
        task id.

        Args:
            projections: Projections sorted by order index
            from_date: Inclusive start date (YYYY-MM-DD), ignored in preview
            to_date: Inclusive end date (YYYY-MM-DD), ignored in preview
            is_preview: Scope to task_id instead of the date range
            task_id: Task to preview (required when is_preview)

        Returns:
            BuiltQuery with the statement and its parameters
        """
        columns = [f"{BASE_TABLE}.{BASE_ID_COLUMN}"]
        columns.extend(self._compute_projection(p) for p in projections)

        joins = [join.render() for join in self.compute_joins(projections)]
        conditions, parameters = self._build_scope(
            from_date, to_date, is_preview, task_id
        )

        sql = " ".join(
            [
                f"SELECT {', '.join(columns)}",
                f"FROM {BASE_TABLE}",
                *joins,
                f"WHERE {' AND '.join(conditions)}",
                f"ORDER BY {DATE_TABLE}.date ASC, {BASE_TABLE}.{BASE_ID_COLUMN} ASC",
            ]
        )
        return self._finish("export_query", sql, parameters)

    def build_attribute_names_query(
        self,
        from_date: str,
        to_date: str,
        is_preview: bool = False,
        task_id: Optional[int] = None,
    ) -> BuiltQuery:
        """
        Build the query for distinct attribute names in scope, sorted ascending.
        """
        conditions, parameters = self._build_scope(
            from_date, to_date, is_preview, task_id
        )
        conditions.append("task_attribute_values.is_active = 1")

        sql = " ".join(
            [
                "SELECT DISTINCT attributes.name",
                *self._attribute_from_clause(),
                f"WHERE {' AND '.join(conditions)}",
                "ORDER BY attributes.name ASC",
            ]
        )
        return self._finish("attribute_names_query", sql, parameters)

    def build_attribute_values_query(
        self,
        from_date: str,
        to_date: str,
        is_preview: bool = False,
        task_id: Optional[int] = None,
    ) -> BuiltQuery:
        """
        Build the query for (task id, attribute name, value) triples in scope.

        The value is whichever typed column is set, read as text.
        """
        conditions, parameters = self._build_scope(
            from_date, to_date, is_preview, task_id
        )
        conditions.append("task_attribute_values.is_active = 1")

        sql = " ".join(
            [
                f"SELECT {BASE_TABLE}.{BASE_ID_COLUMN}, attributes.name, "
                "COALESCE(task_attribute_values.text_value, "
                "CAST(task_attribute_values.boolean_value AS TEXT), "
                "CAST(task_attribute_values.numeric_value AS TEXT))",
                *self._attribute_from_clause(),
                f"WHERE {' AND '.join(conditions)}",
                f"ORDER BY {BASE_TABLE}.{BASE_ID_COLUMN} ASC, attributes.name ASC",
            ]
        )
        return self._finish("attribute_values_query", sql, parameters)

    def build_preview_task_query(self, from_date: str, to_date: str) -> BuiltQuery:
        """
        Build the query for the first active task in a date range.

        Used to pick a sample task when a preview is requested without one.
        """
        conditions, parameters = self._build_scope(from_date, to_date, False, None)

        sql = " ".join(
            [
                f"SELECT {BASE_TABLE}.{BASE_ID_COLUMN}",
                f"FROM {BASE_TABLE}",
                TABLE_JOINS[DATE_TABLE].render(),
                f"WHERE {' AND '.join(conditions)}",
                f"ORDER BY {DATE_TABLE}.date ASC, {BASE_TABLE}.{BASE_ID_COLUMN} ASC",
                "LIMIT 1",
            ]
        )
        return self._finish("preview_task_query", sql, parameters)

    # ----- Fragments -----
    def _compute_projection(self, projection: Projection) -> str:
        column = projection.column
        alias = _quote_identifier(projection.header_name)

        if (
            column.field_type == FieldType.FORMATTED
            and column.disambiguation_identifier == DURATION_IDENTIFIER
        ):
            table = column.source_table
            return (
                f"(printf('%02d', {table}.hours) || ':' || "
                f"printf('%02d', {table}.minutes)) AS {alias}"
            )

        return f"{column.source_table}.{column.source_column} AS {alias}"

    def _attribute_from_clause(self) -> List[str]:
        return [
            f"FROM {BASE_TABLE}",
            TABLE_JOINS[DATE_TABLE].render(),
            "INNER JOIN task_attribute_values "
            f"ON {BASE_TABLE}.{BASE_ID_COLUMN} = task_attribute_values.{BASE_ID_COLUMN}",
            "INNER JOIN attributes "
            "ON task_attribute_values.attribute_id = attributes.attribute_id",
        ]

    def _build_scope(
        self,
        from_date: str,
        to_date: str,
        is_preview: bool,
        task_id: Optional[int],
    ) -> Tuple[List[str], List[Tuple[str, Any]]]:
        """Return WHERE conditions and their parameters for the export scope."""
        if is_preview:
            if task_id is None:
                raise ValueError("A task id is required to build a preview query")
            conditions = [f"{BASE_TABLE}.{BASE_ID_COLUMN} = :task_id"]
            parameters: List[Tuple[str, Any]] = [("task_id", int(task_id))]
        else:
            conditions = [
                f"{DATE_TABLE}.date >= :from_date",
                f"{DATE_TABLE}.date <= :to_date",
            ]
            parameters = [("from_date", from_date), ("to_date", to_date)]

        conditions.append(f"{BASE_TABLE}.is_active = 1")
        return conditions, parameters

    def _finish(
        self, name: str, sql: str, parameters: List[Tuple[str, Any]]
    ) -> BuiltQuery:
        safe_logger(self.logger).log_debug(
            f"Built {name}", {"sql": sql, "parameters": parameters}
        )
        return BuiltQuery(sql, tuple(parameters))
