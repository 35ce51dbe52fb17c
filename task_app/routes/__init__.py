"""Blueprint registration for the task manager API."""

from __future__ import annotations

from flask import Flask


def register_blueprints(app: Flask) -> None:
    from .auth import auth_bp
    from .public import public_bp
    from .tasks import tasks_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(tasks_bp, url_prefix="/tasks")
