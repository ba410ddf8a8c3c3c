#!/usr/bin/env python3
"""
Taskies Export CLI
------------------

Command-line interface for exporting Taskies time tracking data.

This module provides the main CLI group and shared context setup
for all export commands.

Command Structure:
    - Setup (init, columns)
    - Export (csv, preview)
    - Presets (presets list, presets show, presets save, presets remove)

Usage:
    # Export this week's tasks to stdout
    taskies-export csv --work-week -c Date -c Project -c Duration=Time

    # Export a date range to a file with semicolons
    taskies-export csv --from 2024-01-01 --to 2024-01-31 \\
        --delimiter semicolon -o january.csv

    # Preview the first task of today
    taskies-export preview --today
"""
import click
from pathlib import Path

from taskies.core.cli_utils import setup_logger
from taskies.core.paths import DB_PATH, LOG_DIR, PRESETS_PATH
from taskies.database import TaskiesDB
from taskies.export import PresetStore


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--presets-file",
    type=click.Path(),
    default=str(PRESETS_PATH),
    help="Path to export presets file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, presets_file, verbose):
    """Taskies Export CLI"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["presets_file"] = Path(presets_file)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "export")


def get_db(ctx) -> TaskiesDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = TaskiesDB(
            db_path=ctx.obj["db_path"],
            logger=ctx.obj["logger"],
        )
    return ctx.obj["db"]


def get_presets(ctx) -> PresetStore:
    """Get the preset store for the configured presets file."""
    return PresetStore(ctx.obj["presets_file"], logger=ctx.obj["logger"])


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init, columns  # noqa: E402
from .export import csv, preview  # noqa: E402
from .presets import presets  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(columns)
cli.add_command(csv)
cli.add_command(preview)

# Register command groups
cli.add_command(presets)


if __name__ == "__main__":
    cli(obj={})
