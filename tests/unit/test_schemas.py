"""
Unit tests for request schemas and their error messages.

Key SDET Concepts Demonstrated:
- Equivalence partitioning via @pytest.mark.parametrize
- Boundary-value analysis on length limits
- Asserting exact client-facing messages
"""

from __future__ import annotations

import pytest

from task_app.errors import ValidationError
from task_app.models import TaskStatus
from task_app.schemas import CredentialsIn, TaskIn, TaskListQuery, parse

pytestmark = pytest.mark.unit


def _details(schema, data) -> dict[str, list[str]]:
    with pytest.raises(ValidationError) as exc_info:
        parse(schema, data)
    return exc_info.value.details


def test_credentials_accepts_valid_input():
    """Test that a valid email and password pass unchanged."""
    # Act
    body = parse(CredentialsIn, {"email": "user@mail.com", "password": "password1"})

    # Assert
    assert body.email == "user@mail.com"
    assert body.password == "password1"


@pytest.mark.parametrize("email", ["", "not-an-email", "user@", "@mail.com", None, 42])
def test_credentials_rejects_bad_email(email):
    """Test that malformed or missing emails report one message."""
    # Act
    details = _details(CredentialsIn, {"email": email, "password": "password1"})

    # Assert
    assert details == {"email": ["Invalid email format"]}


def test_credentials_missing_fields_report_each_field():
    """Test that an empty body lists errors for both fields."""
    # Act
    details = _details(CredentialsIn, {})

    # Assert
    assert details == {
        "email": ["Invalid email format"],
        "password": ["Password is required"],
    }


@pytest.mark.parametrize("password", ["", "pass", "12345"])
def test_credentials_rejects_short_password(password):
    """Test the six-character minimum."""
    # Act
    details = _details(CredentialsIn, {"email": "user@mail.com", "password": password})

    # Assert
    assert details == {"password": ["Password must be at least 6 characters long"]}


def test_credentials_accepts_six_character_password():
    """Test the lower boundary of the password length."""
    # Act
    body = parse(CredentialsIn, {"email": "user@mail.com", "password": "123456"})

    # Assert
    assert body.password == "123456"


@pytest.mark.parametrize("data", [None, [], "text", 7])
def test_parse_rejects_non_object_body(data):
    """Test that a body that is not a JSON object is a validation error."""
    # Act
    details = _details(CredentialsIn, data)

    # Assert
    assert details == {"body": ["Request body must be a JSON object"]}


def test_task_defaults_status_to_pending():
    """Test that status falls back to pending."""
    # Act
    body = parse(TaskIn, {"title": "Task 1"})

    # Assert
    assert body.status is TaskStatus.PENDING
    assert body.description is None
    assert body.model_fields_set == {"title"}


@pytest.mark.parametrize(
    ("title", "message"),
    [
        (None, "Title is required"),
        (123, "Title is required"),
        ("ab", "Title must be at least 3 characters long"),
        ("x" * 101, "Title must be at most 100 characters long"),
    ],
)
def test_task_title_rules(title, message):
    """Test each title rule and its message."""
    # Act
    details = _details(TaskIn, {"title": title})

    # Assert
    assert details == {"title": [message]}


@pytest.mark.parametrize("title", ["abc", "x" * 100])
def test_task_title_boundaries_are_inclusive(title):
    """Test that 3 and 100 characters are both allowed."""
    # Act & Assert
    assert parse(TaskIn, {"title": title}).title == title


def test_task_description_max_length():
    """Test that descriptions longer than 500 characters are rejected."""
    # Act
    details = _details(TaskIn, {"title": "Task 1", "description": "d" * 501})

    # Assert
    assert details == {"description": ["Description must be at most 500 characters long"]}


def test_task_status_must_be_known():
    """Test that an unknown status lists the allowed values."""
    # Act
    details = _details(TaskIn, {"title": "Task 1", "status": "done"})

    # Assert
    assert details == {"status": ["Status must be one of: pending, in_progress, completed"]}


def test_task_ignores_unknown_fields():
    """Test that protected or unknown keys never reach the model."""
    # Act
    body = parse(TaskIn, {"title": "Task 1", "authorId": "x", "id": "y"})

    # Assert
    assert not hasattr(body, "authorId")
    assert body.model_fields_set == {"title"}


def test_list_query_defaults():
    """Test default pagination values."""
    # Act
    query = parse(TaskListQuery, {})

    # Assert
    assert (query.page, query.limit, query.status) == (1, 10, None)


def test_list_query_coerces_strings():
    """Test that query-string values are converted to ints and enums."""
    # Act
    query = parse(TaskListQuery, {"page": "2", "limit": "5", "status": "completed"})

    # Assert
    assert (query.page, query.limit, query.status) == (2, 5, TaskStatus.COMPLETED)


@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({"page": "0"}, "page"),
        ({"page": "-1"}, "page"),
        ({"page": "abc"}, "page"),
        ({"limit": "0"}, "limit"),
        ({"limit": "101"}, "limit"),
        ({"page": str(2**63)}, "page"),
        ({"status": "archived"}, "status"),
    ],
)
def test_list_query_rejects_out_of_range(params, field):
    """Test that invalid pagination or filters are reported per field."""
    # Act
    details = _details(TaskListQuery, params)

    # Assert
    assert list(details) == [field]
