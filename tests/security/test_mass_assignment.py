"""
Security tests for mass-assignment hardening on task endpoints.

Sends requests that include server-owned fields (id, authorId,
created_at, updated_at) alongside legitimate task data and verifies the
API silently drops them rather than binding them to the model.

Key SDET Concepts Demonstrated:
- Adversarial payload construction with protected / non-existent fields
- Positive-negative hybrid assertions (success but fields ignored)
- Ownership-invariant verification on the update path
"""

from __future__ import annotations

import pytest

from task_app.models import Task

pytestmark = pytest.mark.security

FORGED_ID = "00000000-0000-4000-8000-000000000000"
FORGED_TIMESTAMP = "1990-01-01T00:00:00+00:00"


def test_create_task_ignores_protected_fields(client, user, other_user, api_headers):
    """Task creation must ignore user-controlled identity and system fields."""
    # Arrange
    payload = {
        "id": FORGED_ID,
        "authorId": other_user.id,
        "author_id": other_user.id,
        "title": "Mass assignment probe",
        "created_at": FORGED_TIMESTAMP,
        "updated_at": FORGED_TIMESTAMP,
        "is_admin": True,
    }

    # Act
    response = client.post("/tasks", json=payload, headers=api_headers)

    # Assert
    assert response.status_code == 201
    body = response.get_json()
    assert body["id"] != FORGED_ID
    assert body["authorId"] == user.id
    assert body["created_at"] != FORGED_TIMESTAMP
    assert body["updated_at"] != FORGED_TIMESTAMP
    assert "is_admin" not in body


def test_update_task_cannot_reassign_author(client, user, other_user, api_headers, task_factory, db_session):
    """Task updates must not allow ownership reassignment."""
    # Arrange
    task = task_factory(user)

    # Act
    response = client.put(
        f"/tasks/{task.id}",
        json={
            "title": "Still mine",
            "authorId": other_user.id,
            "author_id": other_user.id,
            "id": FORGED_ID,
        },
        headers=api_headers,
    )

    # Assert
    assert response.status_code == 200
    body = response.get_json()
    assert body["id"] == task.id
    assert body["authorId"] == user.id
    assert db_session.session.get(Task, FORGED_ID) is None


def test_register_ignores_extra_fields(client, db_session):
    """Registration must only bind email and password."""
    # Act
    response = client.post(
        "/auth/register",
        json={"email": "new@mail.com", "password": "secret", "id": FORGED_ID, "role": "admin"},
    )

    # Assert
    assert response.status_code == 201
    body = response.get_json()
    assert body["id"] != FORGED_ID
    assert set(body) == {"id", "email", "created_at"}
