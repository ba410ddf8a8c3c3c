"""
Taskies Models
--------------

SQLAlchemy ORM models for the Taskies time tracking database.

Models:
    - Employer: Organisation work is done for
    - Client: Optional customer of an employer
    - Project: Unit of work tasks are logged against
    - Category: Classification of tasks
    - Workday: A calendar day with logged tasks
    - Task: Time logged on a workday
    - Attribute: User-defined extra field name
    - TaskAttributeValue: Value of an attribute on a task

Every entity carries an `is_active` soft-delete flag; exports only read
active rows. Column names follow the `<entity>_id` convention that the
export query builder joins on.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from typing import List, Optional

# --- Third party ---
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for all Taskies models."""

    pass


class AuditMixin:
    """Creation/modification timestamps and the soft-delete flag."""

    date_created: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False
    )
    date_modified: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Employer(AuditMixin, Base):
    __tablename__ = "employers"

    employer_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    projects: Mapped[List["Project"]] = relationship(back_populates="employer")


class Client(AuditMixin, Base):
    __tablename__ = "clients"

    client_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    employer_id: Mapped[int] = mapped_column(
        ForeignKey("employers.employer_id"), nullable=False
    )


class Project(AuditMixin, Base):
    """
    A project tasks are logged against.

    Projects always belong to an employer; the client is optional, which is
    why exports LEFT JOIN the clients table.
    """

    __tablename__ = "projects"

    project_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    employer_id: Mapped[int] = mapped_column(
        ForeignKey("employers.employer_id"), nullable=False
    )
    client_id: Mapped[Optional[int]] = mapped_column(ForeignKey("clients.client_id"))

    employer: Mapped["Employer"] = relationship(back_populates="projects")
    client: Mapped[Optional["Client"]] = relationship()


class Category(AuditMixin, Base):
    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    billable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    project_id: Mapped[Optional[int]] = mapped_column(ForeignKey("projects.project_id"))


class Workday(Base):
    """A calendar day; `date` is stored as ISO text (YYYY-MM-DD)."""

    __tablename__ = "workdays"

    workday_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)
    date_created: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False
    )

    tasks: Mapped[List["Task"]] = relationship(back_populates="workday")


class Task(AuditMixin, Base):
    """
    Time logged against a project and category on a workday.

    Duration is split into `hours` and `minutes` columns.
    """

    __tablename__ = "tasks"

    task_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    billable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    unique_identifier: Mapped[Optional[str]] = mapped_column(String(255))
    hours: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    minutes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.project_id"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.category_id"), nullable=False
    )
    workday_id: Mapped[int] = mapped_column(
        ForeignKey("workdays.workday_id"), nullable=False
    )

    workday: Mapped["Workday"] = relationship(back_populates="tasks")
    project: Mapped["Project"] = relationship()
    category: Mapped["Category"] = relationship()
    attribute_values: Mapped[List["TaskAttributeValue"]] = relationship(
        back_populates="task"
    )


class Attribute(AuditMixin, Base):
    __tablename__ = "attributes"

    attribute_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)


class TaskAttributeValue(AuditMixin, Base):
    """
    Value of one attribute on one task.

    Exactly one of the typed value columns is expected to be set.
    """

    __tablename__ = "task_attribute_values"

    task_attribute_value_id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True
    )
    text_value: Mapped[Optional[str]] = mapped_column(Text)
    boolean_value: Mapped[Optional[bool]] = mapped_column(Boolean)
    numeric_value: Mapped[Optional[int]] = mapped_column(Integer)
    task_id: Mapped[int] = mapped_column(ForeignKey("tasks.task_id"), nullable=False)
    attribute_id: Mapped[int] = mapped_column(
        ForeignKey("attributes.attribute_id"), nullable=False
    )

    task: Mapped["Task"] = relationship(back_populates="attribute_values")
    attribute: Mapped["Attribute"] = relationship()
