"""
Preset Commands
---------------

Manage named export presets.

Commands:
    - list: List saved presets
    - show: Display a preset's options and columns
    - save: Save columns and format flags under a name
    - remove: Delete a preset

Usage:
    taskies-export presets save weekly -c Date -c Project -c Duration=Time \\
        --delimiter semicolon --booleans yes_no_title
    taskies-export csv --work-week --preset weekly
"""
import click

from taskies.core.logging_manager import handle_cli_error
from taskies.core.exceptions import PresetError, ValidationError
from taskies.export import ExportPreset, ProjectionBuilder
from . import get_presets
from .export import build_options, column_options, format_options, parse_column_specs


@click.group()
@click.pass_context
def presets(ctx: click.Context) -> None:
    """Manage named export presets."""
    pass


@presets.command("list")
@click.pass_context
def list_presets(ctx):
    """List saved presets."""
    try:
        names = get_presets(ctx).list()
        if not names:
            click.echo("No presets saved.")
            return

        click.echo(f"📋 Presets ({len(names)}):")
        for name in names:
            click.echo(f"  • {name}")

    except PresetError as e:
        handle_cli_error(ctx, e, "presets_list")


@presets.command("show")
@click.argument("name")
@click.pass_context
def show(ctx, name):
    """Display a preset."""
    try:
        preset = get_presets(ctx).get(name)

        click.echo(f"📋 {preset.name}")
        click.echo("\nOptions:")
        for key, value in preset.options.to_dict().items():
            click.echo(f"  {key}: {value}")

        click.echo("\nColumns:")
        for column in preset.columns:
            header = f" -> {column.column}" if column.column else ""
            click.echo(f"  {column.order}. {column.original_column}{header}")

    except PresetError as e:
        handle_cli_error(ctx, e, "presets_show", additional_context={"name": name})


@presets.command("save")
@click.argument("name")
@column_options
@format_options
@click.pass_context
def save(ctx, name, column_specs, **format_kwargs):
    """Save columns and format flags as a preset."""
    try:
        columns = parse_column_specs(column_specs)
        # Reject unknown columns now rather than at export time
        ProjectionBuilder(ctx.obj["logger"]).build_projections(columns)
        options = build_options(None, format_kwargs)

        get_presets(ctx).save(ExportPreset(name, options, columns))
        click.echo(f"✅ Preset saved: {name}")

    except (PresetError, ValidationError) as e:
        handle_cli_error(ctx, e, "presets_save", additional_context={"name": name})


@presets.command("remove")
@click.argument("name")
@click.pass_context
def remove(ctx, name):
    """Delete a preset."""
    try:
        get_presets(ctx).remove(name)
        click.echo(f"🗑️  Preset removed: {name}")

    except PresetError as e:
        handle_cli_error(ctx, e, "presets_remove", additional_context={"name": name})
