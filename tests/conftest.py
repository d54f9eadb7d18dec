"""
Shared pytest fixtures for the Task Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Routing a requests-style client through the Flask test client
"""

import os
import pytest
from datetime import datetime, timedelta, timezone
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db
from app.client import TaskApiClient
from app.models import Task


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and drops them afterwards,
    so ids and rows never leak between tests.

    Yields:
        The SQLAlchemy extension with an active app context.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for inserting Task rows directly.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        completed: bool = False,
        created_at: datetime | None = None
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            completed=completed,
        )
        if created_at is not None:
            task.created_at = created_at
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single incomplete task."""
    return task_factory(title="Sample Task")


@pytest.fixture
def dated_tasks(task_factory) -> list[Task]:
    """Create three tasks an hour apart, oldest first."""
    base = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
    return [
        task_factory(title="Oldest", created_at=base),
        task_factory(title="Middle", created_at=base + timedelta(hours=1)),
        task_factory(title="Newest", created_at=base + timedelta(hours=2)),
    ]


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }


class FlaskTestResponse:
    """Expose a Flask test response through the requests.Response surface."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        payload = self._response.get_json(silent=True)
        if payload is None:
            raise ValueError("Response body is not JSON")
        return payload


class FlaskTestSession:
    """Minimal requests.Session stand-in backed by a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method: str, url: str, timeout=None, **kwargs):
        path = "/" + url.split("://", 1)[-1].split("/", 1)[-1]
        self.calls.append((method, path))
        response = self.test_client.open(path, method=method, json=kwargs.get("json"))
        return FlaskTestResponse(response)


@pytest.fixture
def api_client(client, db_session) -> TaskApiClient:
    """TaskApiClient whose requests are served in-process by the app."""
    return TaskApiClient("http://task-api", session=FlaskTestSession(client))
