"""
Shared pytest fixtures for the task manager test suite.

Provides the Flask application, test client, database session, token
minting helpers and data factories used by the unit, integration,
security and smoke suites.

Key SDET Concepts Demonstrated:
- Session-scoped vs function-scoped fixtures for performance and isolation
- Factory fixtures (user_factory, task_factory) for flexible test data
- Fixture teardown that drops every table between tests
- Environment variable overrides set before the app is imported
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_SECRET_KEY"] = "test-jwt-secret-key-for-local-tests-123456"
os.environ["TEST_DATABASE_URL"] = "sqlite:///:memory:"

from task_app import create_app, db
from task_app.jwt import TokenService
from task_app.models import Task, TaskStatus, User

fake = Faker()

DEFAULT_PASSWORD = "password1"


def auth_headers(token: str) -> dict[str, str]:
    """Build JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Created once with the 'testing' config; each test gets fresh tables
    through ``db_session``.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test function.

    Creates all tables before the test, then rolls back any uncommitted
    changes and drops every table afterwards.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def token_service(app) -> TokenService:
    """The token service configured on the test application."""
    return app.extensions["token_service"]


@pytest.fixture
def user_factory(app, db_session) -> Callable[..., User]:
    """
    Factory that creates and persists User records.

    Emails default to unique Faker addresses; the password defaults to
    ``DEFAULT_PASSWORD``.
    """

    def _create_user(email: str | None = None, password: str = DEFAULT_PASSWORD) -> User:
        user = User(email=email or fake.unique.email())
        user.set_password(password, method=app.config["PASSWORD_HASH_METHOD"])
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """Factory that inserts Task rows owned by the given user."""

    def _create_task(
        author: User,
        *,
        title: str | None = None,
        description: str | None = None,
        status: str = TaskStatus.PENDING.value,
    ) -> Task:
        task = Task(
            author_id=author.id,
            title=title or fake.sentence(nb_words=4)[:100],
            description=description if description is not None else fake.sentence(),
            status=status,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def user(user_factory) -> User:
    """A registered user owning the requests made in most tests."""
    return user_factory(email="owner@mail.com")


@pytest.fixture
def other_user(user_factory) -> User:
    """A second user, used for cross-user isolation checks."""
    return user_factory(email="intruder@mail.com")


@pytest.fixture
def api_headers(user, token_service) -> dict[str, str]:
    """Authorization + JSON headers for ``user``."""
    return auth_headers(token_service.issue(user.id))


@pytest.fixture
def other_user_headers(other_user, token_service) -> dict[str, str]:
    """Authorization + JSON headers for ``other_user``."""
    return auth_headers(token_service.issue(other_user.id))
