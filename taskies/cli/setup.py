"""
Setup Commands
--------------

Database initialization and catalog inspection.

Commands:
    - init: Create any missing tables in the database
    - columns: List the exportable columns
"""
import click

from taskies.core.logging_manager import handle_cli_error
from taskies.core.exceptions import DatabaseError
from taskies.export import AVAILABLE_COLUMNS
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the database schema."""
    try:
        db = get_db(ctx)
        click.echo(f"🗄️  Initializing database schema: {db.db_path}")
        db.initialize_schema()
        click.echo("✅ Database initialized!")

    except DatabaseError as e:
        handle_cli_error(
            ctx, e, "init", additional_context={"db_path": str(ctx.obj["db_path"])}
        )


@click.command()
def columns():
    """List the columns available for export."""
    width = max(len(column.display_name) for column in AVAILABLE_COLUMNS)
    for column in AVAILABLE_COLUMNS:
        if column.disambiguation_identifier:
            source = f"{column.source_table} (HH:MM)"
        else:
            source = f"{column.source_table}.{column.source_column}"
        click.echo(f"  • {column.display_name.ljust(width)}  {source}")
