"""
Taskies Export
==============

Export tooling for the Taskies time tracker.

Reads tasks logged against projects, clients, employers and categories from
the Taskies SQLite store and writes them as delimited text, with the
columns, headers and formatting the user chooses.

Packages:
    core: Exceptions, logging, paths and temporary files
    database: ORM models and connection management
    export: Query building, fetching, pivoting and CSV output
    cli: The `taskies-export` command line
"""

__version__ = "1.0.0"
