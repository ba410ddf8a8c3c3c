#!/usr/bin/env python3
"""
Taskies Database Package
------------------------
SQLite store access for the export tooling: ORM models, the connection
manager and shared decorators for database operations.
"""

from .manager import TaskiesDB
from .models import (
    Attribute,
    Base,
    Category,
    Client,
    Employer,
    Project,
    Task,
    TaskAttributeValue,
    Workday,
)
from .decorators import handle_db_errors, log_database_operation

__all__ = [
    "TaskiesDB",
    # Models
    "Base",
    "Employer",
    "Client",
    "Project",
    "Category",
    "Workday",
    "Task",
    "Attribute",
    "TaskAttributeValue",
    # Decorators
    "handle_db_errors",
    "log_database_operation",
]
