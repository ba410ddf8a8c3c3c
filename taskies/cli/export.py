"""
Export Commands
---------------

Task export to delimited text.

Commands:
    - csv: Export tasks in a date range to stdout or a file
    - preview: Export a single task to check columns and formatting

Column selection:
    -c/--column NAME[=HEADER] picks a catalog column (see `columns`) and
    optionally renames its header. Repeat it to add columns; output order
    follows the order given. Without any column, a preset's columns are
    used, or else every catalog column.

Date selection:
    --from/--to for an inclusive range (either alone selects one day),
    --today, or --work-week (Monday to Sunday). Defaults to today.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import click

from taskies.core.logging_manager import handle_cli_error
from taskies.core.exceptions import (
    DatabaseError,
    PresetError,
    ValidationError,
)
from taskies.core.paths import EXPORT_DIR, default_export_file
from taskies.export import (
    AVAILABLE_COLUMNS,
    BooleanHandler,
    ColumnExportModel,
    CsvExporterService,
    Delimiter,
    EmptyValues,
    ExportOptions,
    LineTerminator,
    NewLines,
    Projection,
    ProjectionBuilder,
    TextQualifier,
)
from taskies.export.date_ranges import today_range, validate_range, work_week_range
from . import get_db, get_presets


# ----- Shared options -----
def column_options(function):
    """Attach column selection options to a command."""
    function = click.option(
        "--column",
        "-c",
        "column_specs",
        multiple=True,
        metavar="NAME[=HEADER]",
        help="Column to export, optionally with a custom header (repeatable)",
    )(function)
    return function


def format_options(function):
    """Attach ExportOptions flags to a command. Unset flags keep preset values."""
    options = [
        click.option(
            "--delimiter", type=click.Choice(Delimiter.choices()), default=None,
            help="Field separator (default: comma)",
        ),
        click.option(
            "--qualifier", "text_qualifier",
            type=click.Choice(TextQualifier.choices()), default=None,
            help="Text qualifier (default: double_quote)",
        ),
        click.option(
            "--line-terminator", type=click.Choice(LineTerminator.choices()),
            default=None, help="Line ending (default: unix)",
        ),
        click.option(
            "--empty-values", type=click.Choice(EmptyValues.choices()),
            default=None, help="Empty cell handling (default: blank)",
        ),
        click.option(
            "--new-lines", type=click.Choice(NewLines.choices()), default=None,
            help="Line breaks inside cells (default: merge)",
        ),
        click.option(
            "--booleans", "boolean_handler",
            type=click.Choice(BooleanHandler.choices()), default=None,
            help="Labels for 0/1 cells (default: one_zero)",
        ),
        click.option(
            "--attributes/--no-attributes", "include_attributes", default=None,
            help="Append task attribute columns",
        ),
        click.option(
            "--headers/--no-headers", "include_headers", default=None,
            help="Write the header line",
        ),
    ]
    for option in reversed(options):
        function = option(function)
    return function


def date_options(function):
    """Attach date range options to a command."""
    options = [
        click.option("--from", "from_date", default=None, help="Start date (YYYY-MM-DD)"),
        click.option("--to", "to_date", default=None, help="End date (YYYY-MM-DD)"),
        click.option("--today", is_flag=True, help="Export today's tasks"),
        click.option("--work-week", is_flag=True, help="Export this week's tasks"),
    ]
    for option in reversed(options):
        function = option(function)
    return function


# ----- Helpers -----
def parse_column_specs(specs: Sequence[str]) -> List[ColumnExportModel]:
    """
    Turn NAME[=HEADER] strings into column choices, in the order given.

    Raises:
        ValidationError: On an empty column name
    """
    columns: List[ColumnExportModel] = []
    for order, spec in enumerate(specs):
        name, _, header = spec.partition("=")
        if not name.strip():
            raise ValidationError(f"Invalid column: {spec!r}")
        columns.append(ColumnExportModel(name.strip(), header.strip(), order))
    return columns


def default_columns() -> List[ColumnExportModel]:
    """Every catalog column under its display name."""
    return [
        ColumnExportModel(column.display_name, "", order)
        for order, column in enumerate(AVAILABLE_COLUMNS)
    ]


def build_options(
    base: Optional[ExportOptions], overrides: Dict[str, Any]
) -> ExportOptions:
    """
    Merge command-line flags over base options (or the defaults).

    Raises:
        ValidationError: If the merged options are inconsistent
    """
    data = base.to_dict() if base else {}
    include_headers = overrides.pop("include_headers", None)
    if include_headers is not None:
        data["exclude_headers"] = not include_headers
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ExportOptions.from_dict(data)


def resolve_dates(
    from_date: Optional[str], to_date: Optional[str], today: bool, work_week: bool
) -> Tuple[str, str]:
    """
    Pick the export date range from the date options.

    Raises:
        click.UsageError: When more than one kind of range is given
        ValidationError: On malformed or inverted dates
    """
    chosen = sum([bool(from_date or to_date), today, work_week])
    if chosen > 1:
        raise click.UsageError("Use only one of --from/--to, --today or --work-week")

    if today:
        return today_range()
    if work_week:
        return work_week_range()
    if from_date or to_date:
        return validate_range(from_date or to_date, to_date or from_date)
    return today_range()


def resolve_selection(
    ctx: click.Context,
    preset_name: Optional[str],
    column_specs: Sequence[str],
    format_kwargs: Dict[str, Any],
) -> Tuple[List[Projection], ExportOptions]:
    """
    Combine preset, column flags and format flags into projections and options.

    Raises:
        PresetError: If the preset cannot be loaded
        ValidationError: On unknown columns or inconsistent options
    """
    preset = get_presets(ctx).get(preset_name) if preset_name else None

    if column_specs:
        choices = parse_column_specs(column_specs)
    elif preset and preset.columns:
        choices = preset.columns
    else:
        choices = default_columns()

    options = build_options(preset.options if preset else None, format_kwargs)
    projections = ProjectionBuilder(ctx.obj["logger"]).build_projections(choices)
    return projections, options


# ----- Commands -----
@click.command()
@column_options
@format_options
@date_options
@click.option("--preset", "preset_name", default=None, help="Named export preset")
@click.option(
    "--output", "-o", type=click.Path(), default=None,
    help="Write to this file instead of stdout",
)
@click.option(
    "--save", is_flag=True,
    help="Write to the export directory as taskies-export-<date>.csv",
)
@click.option(
    "--export-dir", type=click.Path(), default=str(EXPORT_DIR),
    help="Directory used by --save",
)
@click.pass_context
def csv(
    ctx, column_specs, from_date, to_date, today, work_week,
    preset_name, output, save, export_dir, **format_kwargs,
):
    """Export tasks in a date range as delimited text."""
    try:
        start, end = resolve_dates(from_date, to_date, today, work_week)
        projections, options = resolve_selection(
            ctx, preset_name, column_specs, format_kwargs
        )

        if save and not output:
            output = default_export_file(Path(export_dir))

        db = get_db(ctx)
        with db.session_scope() as session:
            exporter = CsvExporterService(
                session, options, logger=ctx.obj["logger"]
            )
            if output:
                written = exporter.export_to_file(projections, start, end, output)
            else:
                click.echo(exporter.export_to_csv(projections, start, end), nl=False)
                return

        click.echo(f"✅ Exported {start} to {end}: {written}", err=True)

    except (DatabaseError, PresetError, ValidationError) as e:
        handle_cli_error(
            ctx,
            e,
            "export_csv",
            additional_context={
                "from_date": from_date,
                "to_date": to_date,
                "output": str(output) if output else None,
            },
        )


@click.command()
@column_options
@format_options
@date_options
@click.option("--preset", "preset_name", default=None, help="Named export preset")
@click.option(
    "--task-id", type=int, default=None,
    help="Task to preview (default: first task in the date range)",
)
@click.pass_context
def preview(
    ctx, column_specs, from_date, to_date, today, work_week,
    preset_name, task_id, **format_kwargs,
):
    """Preview the export of a single task."""
    try:
        start, end = resolve_dates(from_date, to_date, today, work_week)
        projections, options = resolve_selection(
            ctx, preset_name, column_specs, format_kwargs
        )

        db = get_db(ctx)
        with db.session_scope() as session:
            exporter = CsvExporterService(session, options, logger=ctx.obj["logger"])
            text = exporter.preview(projections, start, end, task_id=task_id)

        click.echo(text, nl=False)

    except (DatabaseError, PresetError, ValidationError) as e:
        handle_cli_error(
            ctx, e, "export_preview", additional_context={"task_id": task_id}
        )
