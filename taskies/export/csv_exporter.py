#!/usr/bin/env python3
"""
csv_exporter.py
---------------
Delimited text output for task exports.

Classes:
    CsvEmitter: Renders ExportData as one text buffer
    CsvExporterService: Runs a complete export (fetch, pivot, emit) for a
        date range or a single-task preview, returning text or writing a file

Output format:
    - Optional header line, then one line per task in query order
    - Fields joined by the configured delimiter
    - Every line, the last one included, ends with the configured terminator
    - No task yields either the header line alone or an empty buffer

An export is all-or-nothing. When any stage fails an ExportError is raised,
no text is returned and no output file is left behind.

Usage:
    with db.session_scope() as session:
        exporter = CsvExporterService(session, ExportOptions(), logger=logger)
        text = exporter.export_to_csv(projections, "2024-01-01", "2024-01-31")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from itertools import islice
from pathlib import Path
from typing import List, Optional, Sequence, Union

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from taskies.core.exceptions import DatabaseError, ExportError, TemporalFileError
from taskies.core.logging_manager import TaskiesLogger, safe_logger
from taskies.core.temporal_files import TemporalFileManager
from taskies.database.decorators import log_database_operation

from .columns import Projection
from .data_generator import DataGenerator, ExportData
from .date_ranges import validate_range
from .options import ExportOptions
from .processor import CsvExportProcessor


PREVIEW_MAX_ROWS = 1


class CsvEmitter:
    """Formats ExportData according to ExportOptions."""

    def __init__(self, options: ExportOptions) -> None:
        self.options = options
        self.processor = CsvExportProcessor(options)

    def emit(self, data: ExportData, max_rows: Optional[int] = None) -> str:
        """
        Render headers and rows as delimited text.

        Args:
            data: Headers and rows to render
            max_rows: Emit at most this many rows (None for all)

        Returns:
            The complete text buffer
        """
        delimiter = self.options.delimiter.value
        terminator = self.options.line_terminator.value
        lines: List[str] = []

        if not self.options.exclude_headers:
            lines.append(
                delimiter.join(self.processor.process_header(h) for h in data.headers)
            )

        for values in islice(data.rows.values(), max_rows):
            lines.append(delimiter.join(self.processor.process(v) for v in values))

        return "".join(line + terminator for line in lines)


class CsvExporterService:
    """
    Runs exports on a session owned by the caller.

    Attributes:
        session: SQLAlchemy session the export queries run on
        options: Formatting options
        logger: Optional TaskiesLogger
        temp_dir: Staging directory for file output (system temp if None)
    """

    def __init__(
        self,
        session: Session,
        options: ExportOptions,
        logger: Optional[TaskiesLogger] = None,
        temp_dir: Optional[Path] = None,
    ) -> None:
        self.session = session
        self.options = options
        self.logger = logger
        self.temp_dir = temp_dir
        self.generator = DataGenerator(session, logger, options.include_attributes)
        self.emitter = CsvEmitter(options)

    @log_database_operation("export_csv")
    def export_to_csv(
        self, projections: Sequence[Projection], from_date: str, to_date: str
    ) -> str:
        """
        Export every active task in an inclusive date range.

        Returns:
            The delimited text

        Raises:
            ValidationError: On malformed or inverted dates
            ExportError: If any query fails
        """
        from_date, to_date = validate_range(from_date, to_date)

        try:
            data = self.generator.fill_data(projections, from_date, to_date)
        except DatabaseError as e:
            raise ExportError(f"Failed to fetch export data: {e}") from e

        text = self.emitter.emit(data)
        safe_logger(self.logger).log_operation(
            "csv_export_generated",
            {
                "from_date": from_date,
                "to_date": to_date,
                "rows": len(data.rows),
                "columns": len(data.headers),
            },
        )
        return text

    @log_database_operation("export_preview")
    def preview(
        self,
        projections: Sequence[Projection],
        from_date: str,
        to_date: str,
        task_id: Optional[int] = None,
    ) -> str:
        """
        Export a single task to show what the output will look like.

        Without task_id the first active task in the date range is used.
        When there is none, only the header line is produced.

        Raises:
            ValidationError: On malformed dates when task_id is omitted
            ExportError: If any query fails
        """
        try:
            if task_id is None:
                from_date, to_date = validate_range(from_date, to_date)
                task_id = self.generator.fetcher.fetch_single_id(
                    self.generator.builder.build_preview_task_query(from_date, to_date)
                )

            if task_id is None:
                data = ExportData(headers=[p.header_name for p in projections])
            else:
                data = self.generator.fill_data(
                    projections, from_date, to_date, is_preview=True, task_id=task_id
                )
        except DatabaseError as e:
            raise ExportError(f"Failed to fetch preview data: {e}") from e

        return self.emitter.emit(data, max_rows=PREVIEW_MAX_ROWS)

    @log_database_operation("export_file")
    def export_to_file(
        self,
        projections: Sequence[Projection],
        from_date: str,
        to_date: str,
        output_path: Union[str, Path],
    ) -> Path:
        """
        Export a date range and write it to output_path.

        The text is staged in a temporary file and moved into place.

        Returns:
            The written file path

        Raises:
            ValidationError: On malformed or inverted dates
            ExportError: If fetching or writing fails
        """
        text = self.export_to_csv(projections, from_date, to_date)

        try:
            with TemporalFileManager(self.temp_dir) as temp_manager:
                written = temp_manager.write_atomic(text, Path(output_path))
        except TemporalFileError as e:
            raise ExportError(f"Failed to write export file: {e}") from e

        safe_logger(self.logger).log_operation(
            "export_file_written", {"path": str(written), "bytes": len(text)}
        )
        return written

