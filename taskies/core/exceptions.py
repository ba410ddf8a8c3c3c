#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Taskies export tooling.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    │   └── ExportError - Export query, fetch, pivot or emit failures
    ├── ValidationError - Invalid column selections, dates or export options
    ├── PresetError - Export preset file read/write failures
    └── TemporalFileError - Temporary file management errors

Usage:
    from taskies.core.exceptions import ExportError, ValidationError

    try:
        text = exporter.export_to_csv(projections, "2024-01-01", "2024-01-31")
    except ValidationError as e:
        logger.log_warning(f"Invalid export request: {e}")
    except ExportError as e:
        logger.log_error(e, {"operation": "export_csv"})
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail: the connection cannot be opened,
    a statement cannot be prepared, a parameter cannot be bound, or a step
    through the result set fails.

    This is the parent class for all database-specific exceptions.
    Catch this to handle any database error, or catch specific
    subclasses for more granular error handling.

    Examples:
        >>> raise DatabaseError("Database operation failed: no such table: tasks")
        >>> raise DatabaseError("Database initialization failed: unable to open file")

    See Also:
        ExportError
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for data export operation failures.

    Raised when any stage of an export fails:
    - Main task query fails
    - Attribute name or attribute value query fails
    - Writing the exported text to its destination fails

    An export is all-or-nothing: when this is raised no text buffer
    is returned and no output file is left behind.

    Examples:
        >>> raise ExportError("Failed to fetch export rows: no such column: tasks.hours")
        >>> raise ExportError("Failed to write export file: permission denied")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input fails validation checks:
    - Unknown export column names
    - Duplicate or non-contiguous column order indexes
    - Invalid date formats or inverted date ranges
    - Malformed export options (unknown choice names or raw values)

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
        >>> raise ValidationError("Unknown export column: 'Colour'")
    """

    pass


class PresetError(Exception):
    """
    Exception for export preset storage failures.

    Raised when the presets file cannot be read, parsed or written,
    or when a named preset does not exist.

    Examples:
        >>> raise PresetError("Preset not found: 'weekly'")
        >>> raise PresetError("Cannot parse presets file: invalid YAML")
    """

    pass


class TemporalFileError(Exception):
    """
    Exception for temporary file management errors.

    Raised when temporary file operations fail:
    - Unable to create temp files
    - Cleanup failures
    - Permission issues

    Examples:
        >>> raise TemporalFileError("Cannot create temp file: /tmp not writable")
    """

    pass
