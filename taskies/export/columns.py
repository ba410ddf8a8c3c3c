#!/usr/bin/env python3
"""
columns.py
----------
Static catalog of exportable columns and the projections built from it.

The catalog is the only schema knowledge the exporter has: which table and
column back each user-facing column name, and how each non-base table is
joined back to `tasks`.

Catalog:
    Employer, Client, Project, Display Name, Category, Date,
    Description, Billable, Unique ID, Duration

Join graph (base table `tasks`):
    tasks ── workdays    (INNER, workday_id)
          ├─ categories  (INNER, category_id)
          └─ projects    (INNER, project_id)
                ├─ employers (INNER, employer_id)
                └─ clients   (LEFT,  client_id)

Usage:
    builder = ProjectionBuilder(logger)
    projections = builder.build_projections([
        ColumnExportModel("Description", "description", 0),
        ColumnExportModel("Date", "date", 1),
    ])
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

# --- Local imports ---
from taskies.core.exceptions import ValidationError
from taskies.core.logging_manager import TaskiesLogger, safe_logger

from .enums import FieldType, JoinType

BASE_TABLE = "tasks"
BASE_ID_COLUMN = "task_id"
DATE_TABLE = "workdays"
DURATION_IDENTIFIER = "*time*"


@dataclass(frozen=True)
class ColumnProjection:
    """
    Descriptor of one exportable column.

    Attributes:
        source_table: Table the value is read from
        source_column: Column the value is read from
        display_name: Catalog name shown to users and used as default header
        disambiguation_identifier: Marks columns rendered from a computed
            expression rather than source_column (e.g. DURATION_IDENTIFIER)
        field_type: DEFAULT for plain columns, FORMATTED for expressions
    """

    source_table: str
    source_column: str
    display_name: str
    disambiguation_identifier: Optional[str] = None
    field_type: FieldType = FieldType.DEFAULT


@dataclass(frozen=True)
class JoinSpec:
    """
    A join from a parent table onto `table` through a shared id column.

    Renders as `<kind> JOIN <table> ON <parent_table>.<column> = <table>.<column>`.
    """

    table: str
    kind: JoinType
    column: str
    parent_table: str = BASE_TABLE

    def render(self) -> str:
        return (
            f"{self.kind.value} JOIN {self.table} "
            f"ON {self.parent_table}.{self.column} = {self.table}.{self.column}"
        )


@dataclass(frozen=True)
class Projection:
    """
    A selected column at a position in the export.

    Attributes:
        order_index: Output position (unique and contiguous per export)
        column: Catalog descriptor
        header: User-chosen header; falls back to the catalog display name
    """

    order_index: int
    column: ColumnProjection
    header: str = ""

    @property
    def header_name(self) -> str:
        return self.header or self.column.display_name


@dataclass(frozen=True)
class ColumnExportModel:
    """
    A user's column choice before it is matched against the catalog.

    Attributes:
        original_column: Catalog display name
        column: Header to write (empty keeps the display name)
        order: Requested output position
    """

    original_column: str
    column: str
    order: int


# ----- Catalog -----
TABLE_JOINS: Dict[str, JoinSpec] = {
    "workdays": JoinSpec("workdays", JoinType.INNER, "workday_id"),
    "projects": JoinSpec("projects", JoinType.INNER, "project_id"),
    "categories": JoinSpec("categories", JoinType.INNER, "category_id"),
    "employers": JoinSpec("employers", JoinType.INNER, "employer_id", "projects"),
    "clients": JoinSpec("clients", JoinType.LEFT, "client_id", "projects"),
}

AVAILABLE_COLUMNS: List[ColumnProjection] = [
    ColumnProjection("employers", "name", "Employer"),
    ColumnProjection("clients", "name", "Client"),
    ColumnProjection("projects", "name", "Project"),
    ColumnProjection("projects", "display_name", "Display Name"),
    ColumnProjection("categories", "name", "Category"),
    ColumnProjection("workdays", "date", "Date"),
    ColumnProjection("tasks", "description", "Description"),
    ColumnProjection("tasks", "billable", "Billable"),
    ColumnProjection("tasks", "unique_identifier", "Unique ID"),
    ColumnProjection(
        "tasks",
        "hours",
        "Duration",
        disambiguation_identifier=DURATION_IDENTIFIER,
        field_type=FieldType.FORMATTED,
    ),
]


def find_column(name: str) -> Optional[ColumnProjection]:
    """Case-insensitive catalog lookup by display name."""
    wanted = name.strip().lower()
    for column in AVAILABLE_COLUMNS:
        if column.display_name.lower() == wanted:
            return column
    return None


class ProjectionBuilder:
    """Matches user column choices against the catalog."""

    def __init__(self, logger: Optional[TaskiesLogger] = None) -> None:
        self.logger = logger

    def build_projections(
        self, columns: Sequence[ColumnExportModel]
    ) -> List[Projection]:
        """
        Build projections sorted by order index ascending.

        Args:
            columns: User column choices

        Returns:
            Projections in output order

        Raises:
            ValidationError: If a column is not in the catalog, or if the
                order indexes are not unique and contiguous from 0
        """
        projections: List[Projection] = []

        for choice in columns:
            column = find_column(choice.original_column)
            if column is None:
                raise ValidationError(
                    f"Unknown export column: '{choice.original_column}'"
                )

            safe_logger(self.logger).log_debug(
                "Matched export column",
                {
                    "column": choice.original_column,
                    "table": column.source_table,
                    "source_column": column.source_column,
                },
            )
            projections.append(
                Projection(choice.order, column, choice.column.strip())
            )

        projections.sort(key=lambda projection: projection.order_index)
        validate_order_indexes(projections)
        return projections


def validate_order_indexes(projections: Sequence[Projection]) -> None:
    """
    Ensure order indexes are exactly 0..n-1.

    Raises:
        ValidationError: On duplicates or gaps
    """
    indexes = sorted(projection.order_index for projection in projections)
    if indexes != list(range(len(indexes))):
        raise ValidationError(
            f"Column order indexes must be unique and contiguous from 0, got {indexes}"
        )
