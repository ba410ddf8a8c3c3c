#!/usr/bin/env python3
"""
Taskies Export Package
----------------------
Task data export to delimited text.

This package turns a user's column selection into delimited text:
- Column catalog and projections
- Parameterized query building with derived joins
- Row fetching and attribute pivoting
- Per-cell value processing
- CSV emission, previews and file output
- Named export presets
"""

from .columns import (
    AVAILABLE_COLUMNS,
    ColumnExportModel,
    ColumnProjection,
    JoinSpec,
    Projection,
    ProjectionBuilder,
    find_column,
)
from .csv_exporter import CsvEmitter, CsvExporterService
from .data_generator import AttributePivot, DataGenerator, ExportData
from .enums import (
    BooleanHandler,
    Delimiter,
    EmptyValues,
    FieldType,
    JoinType,
    LineTerminator,
    NewLines,
    TextQualifier,
)
from .fetcher import AttributeEntry, ExportDataFetcher
from .options import ExportOptions, ExportPreset, PresetStore
from .processor import CsvExportProcessor
from .query_builder import BuiltQuery, ExportQueryBuilder

__all__ = [
    # Catalog
    "AVAILABLE_COLUMNS",
    "ColumnExportModel",
    "ColumnProjection",
    "JoinSpec",
    "Projection",
    "ProjectionBuilder",
    "find_column",
    # Options
    "BooleanHandler",
    "Delimiter",
    "EmptyValues",
    "FieldType",
    "JoinType",
    "LineTerminator",
    "NewLines",
    "TextQualifier",
    "ExportOptions",
    "ExportPreset",
    "PresetStore",
    # Pipeline
    "BuiltQuery",
    "ExportQueryBuilder",
    "AttributeEntry",
    "ExportDataFetcher",
    "AttributePivot",
    "DataGenerator",
    "ExportData",
    "CsvExportProcessor",
    "CsvEmitter",
    "CsvExporterService",
]
