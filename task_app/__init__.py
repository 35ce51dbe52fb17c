"""
Task manager API application factory.

Provides the ``create_app`` factory that assembles the service: it loads
the configuration profile, resolves the required signing secret and
database URL (refusing to start without them), builds the token
service, initialises SQLAlchemy, registers the blueprints and the JSON
error boundary, and creates the database tables.

Blueprints:
  * **public_bp** -- ``/`` welcome message and ``/health`` probe.
  * **auth_bp**   -- ``/auth/register`` and ``/auth/login``.
  * **tasks_bp**  -- owner-scoped task CRUD under ``/tasks``.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from pathlib import Path

from flask import Flask, Response, current_app, g, request
from flask_sqlalchemy import SQLAlchemy

from config import get_config, load_database_url, load_jwt_secret

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
request_logger = logging.getLogger(f"{__name__}.requests")


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if not sqlite_path or sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def _register_request_logging(app: Flask) -> None:
    """Log one line per request: method, path, status and duration."""

    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response: Response) -> Response:
        if current_app.config.get("LOG_REQUESTS", True):
            started = g.get("request_started")
            elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            request_logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.path,
                response.status_code,
                elapsed_ms,
            )
        return response


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task manager application.

    Args:
        config_name: Configuration environment name (``"development"``,
            ``"testing"``, ``"production"``).  When ``None``, the value
            is read from the ``FLASK_ENV`` environment variable,
            defaulting to ``"development"``.

    Returns:
        A fully configured Flask application.

    Raises:
        RuntimeError: If the JWT signing secret or the database URL is
            not configured.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    testing = bool(app.config.get("TESTING"))
    app.config["JWT_SECRET_KEY"] = load_jwt_secret(testing=testing)
    app.config["SQLALCHEMY_DATABASE_URI"] = load_database_url(testing=testing)

    logger.info("Creating task manager app with config: %s", config_class.__name__)

    _ensure_sqlite_db_parent_exists(app.config["SQLALCHEMY_DATABASE_URI"])
    db.init_app(app)

    # Imported here because these modules import ``db`` from this package
    from .cli import register_commands
    from .errors import register_error_handlers
    from .jwt import TokenService
    from .routes import register_blueprints

    app.extensions["token_service"] = TokenService(
        secret=app.config["JWT_SECRET_KEY"],
        expiry=timedelta(days=int(app.config["JWT_EXPIRY_DAYS"])),
        leeway=int(app.config.get("JWT_CLOCK_SKEW_SECONDS", 0)),
    )

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)
    _register_request_logging(app)

    # Tables are created at startup; a migration tool would own this in a
    # larger deployment.
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
