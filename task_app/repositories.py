"""
Persistence collaborators for users and tasks.

Both repositories are thin wrappers around the Flask-SQLAlchemy session
so that the authentication flow and the authorization gate depend on a
small query surface instead of on ad-hoc ``select`` statements spread
through the views.

Neither class takes locks: cross-request consistency comes from the
database itself (the UNIQUE constraint on ``users.email``).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from . import db
from .models import Task, TaskStatus, User


class CredentialStore:
    """Lookup and creation of user records."""

    def find_by_email(self, email: str) -> User | None:
        return db.session.scalar(select(User).where(User.email == email))

    def find_by_id(self, user_id: str) -> User | None:
        return db.session.get(User, user_id)

    def insert(self, user: User) -> User:
        """
        Persist *user* and return it with its generated fields populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If the email is already taken.
                The session is rolled back before the error propagates.
        """
        db.session.add(user)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return user


class TaskRepository:
    """CRUD access to tasks, always scoped by owner for listings."""

    def find_by_id(self, task_id: str) -> Task | None:
        return db.session.get(Task, task_id)

    def find_by_owner_paged(
        self,
        owner_id: str,
        page: int,
        limit: int,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """
        Return one page of the owner's tasks, newest first.

        Args:
            owner_id: Id of the user whose tasks are listed.
            page: 1-based page number.
            limit: Page size.
            status: Optional status filter.
        """
        stmt = (
            select(Task)
            .where(Task.author_id == owner_id)
            .options(selectinload(Task.author))
        )
        if status is not None:
            stmt = stmt.where(Task.status == TaskStatus(status).value)

        # id breaks ties between rows created within the same clock tick
        stmt = (
            stmt.order_by(Task.created_at.desc(), Task.id)
            .limit(limit)
            .offset((page - 1) * limit)
        )
        return list(db.session.scalars(stmt).all())

    def insert(self, task: Task) -> Task:
        db.session.add(task)
        db.session.commit()
        return task

    def update(self, task: Task, **changes) -> Task:
        """
        Apply *changes* to *task* and commit.

        ``author_id`` and ``id`` are never writable through this method.
        ``updated_at`` is refreshed even when no value actually changes.
        """
        for field in ("title", "description", "status"):
            if field in changes:
                setattr(task, field, changes[field])
        task.updated_at = datetime.now(timezone.utc)
        db.session.commit()
        return task

    def delete(self, task: Task) -> None:
        db.session.delete(task)
        db.session.commit()
