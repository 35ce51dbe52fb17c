"""
Flask CLI commands.

    flask --app wsgi seed   -- reset the database and load demo data
"""

from __future__ import annotations

import logging

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from . import db
from .models import Task, TaskStatus, User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "secret"
DEMO_USERS = [
    ("jhon@mail.com", "Task 1", "Description for Task 1", TaskStatus.PENDING),
    ("jane@mail.com", "Task 2", "Description for Task 2", TaskStatus.IN_PROGRESS),
]


def seed_database() -> list[User]:
    """Drop every row and insert the demo users with one task each."""
    db.session.query(Task).delete()
    db.session.query(User).delete()
    db.session.commit()
    logger.info("Database reset")

    users = []
    for email, title, description, status in DEMO_USERS:
        user = User(email=email)
        user.set_password(DEMO_PASSWORD, method=current_app.config["PASSWORD_HASH_METHOD"])
        user.tasks.append(Task(title=title, description=description, status=status.value))
        db.session.add(user)
        users.append(user)
    db.session.commit()
    logger.info("Inserted %s demo users", len(users))
    return users


@click.command("seed")
@with_appcontext
def seed_command() -> None:
    """Reset the database and insert demo users and tasks."""
    users = seed_database()
    for user in users:
        click.echo(f"Created {user.email} (password: {DEMO_PASSWORD})")


def register_commands(app: Flask) -> None:
    app.cli.add_command(seed_command)
