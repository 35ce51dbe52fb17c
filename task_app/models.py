"""
Database models for the task manager API.

Defines the SQLAlchemy ORM models that back registration, login and the
owner-scoped task endpoints:

* :class:`User` -- credentials and identity.  Only a one-way password
  hash is ever stored.
* :class:`Task` -- a to-do item owned by exactly one user through
  ``author_id``.

Both tables use opaque UUID4 string identifiers so that ids reveal
nothing about row counts or creation order.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from . import db
from .passwords import DEFAULT_HASH_METHOD, hash_password, verify_password


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc_iso(value: datetime | None) -> str | None:
    """
    Serialize a datetime to an ISO-8601 UTC string.

    SQLite does not store timezone information, so datetimes read back
    from the database may be *naive* even though they were created with
    ``timezone.utc``.  Naive values are assumed to be UTC; aware values
    are converted to UTC before formatting.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


class TaskStatus(str, Enum):
    """
    Closed set of task lifecycle statuses.

    Inherits from ``str`` so members compare equal to the raw strings
    stored in the database and serialise directly to JSON.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class User(db.Model):
    """
    A registered account.

    Attributes:
        id: UUID4 string primary key, generated at creation.
        email: Unique email address.  The UNIQUE constraint is the final
            arbiter when two registrations race for the same address.
        password_hash: Werkzeug-generated salted hash of the password.
        created_at: Timestamp of account creation, stored as UTC.
    """

    __tablename__ = "users"

    id: str = db.Column(db.String(36), primary_key=True, default=_new_id)
    # Indexed because login and registration both look users up by email
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(255), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )

    tasks = db.relationship(
        "Task", back_populates="author", cascade="all, delete-orphan", lazy="select"
    )

    def set_password(self, password: str, method: str = DEFAULT_HASH_METHOD) -> None:
        """Hash and store a plain-text password."""
        self.password_hash = hash_password(password, method=method)

    def check_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.

        Raises:
            CorruptCredentialError: If the stored hash is malformed.
        """
        return verify_password(password, self.password_hash)

    def to_dict(self) -> dict[str, Any]:
        """
        Return the public projection of the user.

        ``password_hash`` is intentionally excluded so this output can be
        returned directly in JSON API responses.
        """
        return {
            "id": self.id,
            "email": self.email,
            "created_at": _to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Task(db.Model):
    """
    Task owned by a single user.

    Attributes:
        id: UUID4 string primary key.
        author_id: Owning user.  Set at creation and never reassigned;
            it alone decides who may read or change the task.
        title: Short summary (3 to 100 characters).
        description: Optional longer text (up to 500 characters).
        status: Current lifecycle status (see ``TaskStatus``).
        created_at: Timestamp of task creation (UTC).
        updated_at: Timestamp of last modification (UTC, auto-updated).
    """

    __tablename__ = "tasks"

    id: str = db.Column(db.String(36), primary_key=True, default=_new_id)
    author_id: str = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    title: str = db.Column(db.String(100), nullable=False)
    description: str | None = db.Column(db.String(500), nullable=True)
    status: str = db.Column(
        db.String(20), nullable=False, default=TaskStatus.PENDING.value
    )
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    author = db.relationship("User", back_populates="tasks")

    def to_dict(self, include_author: bool = False) -> dict[str, Any]:
        """
        Serialise the task to a JSON-safe dictionary.

        Args:
            include_author: Embed the owner's public projection under
                ``author``.  The password hash is never included.
        """
        payload: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "authorId": self.author_id,
            "created_at": _to_utc_iso(self.created_at),
            "updated_at": _to_utc_iso(self.updated_at),
        }
        if include_author:
            payload["author"] = self.author.to_dict()
        return payload

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
