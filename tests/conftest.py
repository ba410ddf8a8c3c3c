"""
conftest.py
-----------
Shared pytest fixtures for Taskies export tests.

Provides fixtures for:
- Temporary directories and database paths
- A TaskiesDB with an initialized schema
- Sessions on a database seeded with a small, known set of tasks

Seeded data:
    2024-01-01  task 1   "task one, comma"  Website / Dev     01:30  billable
    2024-01-02  task 2   "task two"         Internal / Admin  00:45
    2024-01-02  task 3   "deleted task"     (inactive)
    2024-01-03  task 42  "task three"       Website / Dev     02:00  billable

    Attributes (active values only):
        task 1:  Priority=high, Ticket=101
        task 42: Priority=low, Reviewed=1
    Task 2 has an inactive Ticket value; task 3 an active Priority value.
"""
import pytest
from pathlib import Path
from datetime import date
from tempfile import TemporaryDirectory

from taskies.database import (
    Attribute,
    Category,
    Client,
    Employer,
    Project,
    Task,
    TaskAttributeValue,
    TaskiesDB,
    Workday,
)


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Temporary test database path."""
    return tmp_dir / "test.db"


# ----- Test Database Fixtures -----

def seed_tasks(session):
    """Insert the seeded data described in the module docstring."""
    acme = Employer(employer_id=1, name="Acme")
    globex = Client(client_id=1, name="Globex", employer_id=1)
    website = Project(
        project_id=1, name="Website", display_name="WEB", employer_id=1, client_id=1
    )
    internal = Project(project_id=2, name="Internal", display_name="INT", employer_id=1)
    dev = Category(category_id=1, name="Dev", billable=True)
    admin = Category(category_id=2, name="Admin")
    session.add(acme)
    session.flush()
    session.add(globex)
    session.flush()
    session.add_all([website, internal])
    session.flush()
    session.add_all([dev, admin])

    jan1 = Workday(workday_id=1, date=date(2024, 1, 1))
    jan2 = Workday(workday_id=2, date=date(2024, 1, 2))
    jan3 = Workday(workday_id=3, date=date(2024, 1, 3))
    session.add_all([jan1, jan2, jan3])
    session.flush()

    session.add_all(
        [
            Task(
                task_id=1, description="task one, comma", billable=True,
                unique_identifier="T-1", hours=1, minutes=30,
                project_id=1, category_id=1, workday_id=1,
            ),
            Task(
                task_id=2, description="task two", billable=False,
                hours=0, minutes=45, project_id=2, category_id=2, workday_id=2,
            ),
            Task(
                task_id=3, description="deleted task", hours=3, minutes=0,
                project_id=2, category_id=2, workday_id=2, is_active=False,
            ),
            Task(
                task_id=42, description="task three", billable=True,
                hours=2, minutes=0, project_id=1, category_id=1, workday_id=3,
            ),
        ]
    )
    session.flush()

    session.add_all(
        [
            Attribute(attribute_id=1, name="Priority"),
            Attribute(attribute_id=2, name="Ticket"),
            Attribute(attribute_id=3, name="Reviewed"),
        ]
    )
    session.flush()
    session.add_all(
        [
            TaskAttributeValue(task_id=1, attribute_id=1, text_value="high"),
            TaskAttributeValue(task_id=1, attribute_id=2, numeric_value=101),
            TaskAttributeValue(
                task_id=2, attribute_id=2, numeric_value=999, is_active=False
            ),
            TaskAttributeValue(task_id=3, attribute_id=1, text_value="gone"),
            TaskAttributeValue(task_id=42, attribute_id=1, text_value="low"),
            TaskAttributeValue(task_id=42, attribute_id=3, boolean_value=True),
        ]
    )
    session.flush()


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Database is disposed after the test.
    """
    db = TaskiesDB(db_path=test_db_path)
    db.initialize_schema()

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """Session on an empty schema, rolled back after the test."""
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def seeded_session(db_session):
    """Session with the seeded tasks flushed (not committed)."""
    seed_tasks(db_session)
    return db_session


@pytest.fixture
def seeded_db_path(test_db):
    """Path of a database file with the seeded tasks committed."""
    with test_db.session_scope() as session:
        seed_tasks(session)
    test_db.dispose()
    return test_db.db_path
