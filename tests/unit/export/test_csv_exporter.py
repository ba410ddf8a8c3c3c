"""Tests for CsvEmitter and CsvExporterService."""
import pytest

from taskies.core.exceptions import ExportError, ValidationError
from taskies.database import TaskiesDB
from taskies.export.columns import ColumnExportModel, ProjectionBuilder
from taskies.export.csv_exporter import CsvEmitter, CsvExporterService
from taskies.export.data_generator import ExportData
from taskies.export.enums import BooleanHandler, Delimiter, LineTerminator
from taskies.export.options import ExportOptions


def columns(*specs):
    """Build projections from (name, header) pairs."""
    return ProjectionBuilder().build_projections(
        [ColumnExportModel(name, header, order) for order, (name, header) in enumerate(specs)]
    )


class TestCsvEmitter:
    """Tests for rendering ExportData."""

    @pytest.fixture
    def data(self):
        return ExportData(headers=["a", "b"], rows={1: ["1", "x"], 2: ["", "y"]})

    def test_every_line_terminated(self, data):
        text = CsvEmitter(ExportOptions(line_terminator=LineTerminator.WINDOWS)).emit(data)
        assert text == "a,b\r\n1,x\r\n,y\r\n"

    def test_exclude_headers(self, data):
        text = CsvEmitter(ExportOptions(exclude_headers=True)).emit(data)
        assert text == "1,x\n,y\n"

    def test_max_rows(self, data):
        assert CsvEmitter(ExportOptions()).emit(data, max_rows=1) == "a,b\n1,x\n"

    def test_empty_rows_header_only(self):
        text = CsvEmitter(ExportOptions()).emit(ExportData(headers=["a", "b"]))
        assert text == "a,b\n"

    def test_empty_rows_without_headers(self):
        text = CsvEmitter(ExportOptions(exclude_headers=True)).emit(ExportData(headers=["a"]))
        assert text == ""

    def test_tab_delimiter(self, data):
        text = CsvEmitter(ExportOptions(delimiter=Delimiter.TAB)).emit(data)
        assert text.splitlines()[0] == "a\tb"


class TestCsvExporterService:
    """End-to-end exports against the seeded database."""

    def test_two_task_export(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        text = exporter.export_to_csv(
            columns(("Description", "description"), ("Date", "date")),
            "2024-01-01",
            "2024-01-02",
        )
        assert text == 'description,date\n"task one, comma",2024-01-01\ntask two,2024-01-02\n'

    def test_header_count_matches_projections(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        text = exporter.export_to_csv(
            columns(("Project", ""), ("Category", ""), ("Duration", "Time")),
            "2024-01-01",
            "2024-01-31",
        )
        lines = text.splitlines()
        assert lines[0] == "Project,Category,Time"
        assert lines[1:] == ["Website,Dev,01:30", "Internal,Admin,00:45", "Website,Dev,02:00"]

    def test_booleans_relabeled(self, seeded_session):
        options = ExportOptions(boolean_handler=BooleanHandler.YES_NO_TITLE)
        text = CsvExporterService(seeded_session, options).export_to_csv(
            columns(("Billable", "")), "2024-01-01", "2024-01-02"
        )
        assert text == "Billable\nYes\nNo\n"

    def test_attribute_columns_appended(self, seeded_session):
        options = ExportOptions(include_attributes=True)
        text = CsvExporterService(seeded_session, options).export_to_csv(
            columns(("Unique ID", "")), "2024-01-01", "2024-01-03"
        )
        assert text == "Unique ID,Priority,Reviewed,Ticket\nT-1,high,,101\n,,,\n,low,1,\n"

    def test_empty_range_yields_header_only(self, seeded_session):
        text = CsvExporterService(seeded_session, ExportOptions()).export_to_csv(
            columns(("Description", "")), "2023-01-01", "2023-01-31"
        )
        assert text == "Description\n"

    def test_inverted_range_raises(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        with pytest.raises(ValidationError):
            exporter.export_to_csv(columns(("Date", "")), "2024-02-01", "2024-01-01")

    def test_preview_single_task(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        text = exporter.preview(
            columns(("Description", ""), ("Date", "")), "", "", task_id=42
        )
        assert text == "Description,Date\ntask three,2024-01-03\n"

    def test_preview_picks_first_task_in_range(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        text = exporter.preview(columns(("Description", "")), "2024-01-02", "2024-01-31")
        assert text == "Description\ntask two\n"

    def test_preview_without_tasks(self, seeded_session):
        exporter = CsvExporterService(seeded_session, ExportOptions())
        text = exporter.preview(columns(("Description", "")), "2023-01-01", "2023-01-31")
        assert text == "Description\n"

    def test_export_to_file(self, seeded_session, tmp_path):
        exporter = CsvExporterService(
            seeded_session,
            ExportOptions(line_terminator=LineTerminator.WINDOWS),
            temp_dir=tmp_path / "staging",
        )
        output = tmp_path / "out" / "export.csv"

        written = exporter.export_to_file(
            columns(("Date", "")), "2024-01-01", "2024-01-01", output
        )

        assert written == output
        assert output.read_bytes() == b"Date\r\n2024-01-01\r\n"
        assert list((tmp_path / "staging").iterdir()) == []

    def test_query_failure_raises_export_error(self, tmp_path):
        db = TaskiesDB(tmp_path / "empty.db")
        try:
            with db.session_scope() as session:
                exporter = CsvExporterService(session, ExportOptions())
                with pytest.raises(ExportError) as exc_info:
                    exporter.export_to_csv(columns(("Date", "")), "2024-01-01", "2024-01-31")
            assert "Failed to fetch export data" in str(exc_info.value)
        finally:
            db.dispose()

    def test_failed_export_writes_no_file(self, tmp_path):
        db = TaskiesDB(tmp_path / "empty.db")
        output = tmp_path / "export.csv"
        try:
            with db.session_scope() as session:
                exporter = CsvExporterService(session, ExportOptions())
                with pytest.raises(ExportError):
                    exporter.export_to_file(
                        columns(("Date", "")), "2024-01-01", "2024-01-31", output
                    )
        finally:
            db.dispose()
        assert not output.exists()
