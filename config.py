"""
Configuration for the task manager API.

Provides environment-aware configuration classes that follow Flask's
recommended pattern: a shared ``Config`` base class holds defaults, and
environment-specific subclasses (``DevelopmentConfig``, ``TestingConfig``,
``ProductionConfig``) override only what differs.  The ``get_config``
factory resolves the correct class at runtime based on an environment
variable or an explicit argument.

The two settings the service cannot run without -- the JWT signing secret
and the database connection string -- are *not* given defaults.  They are
resolved once by ``load_jwt_secret`` / ``load_database_url`` when the
application is created, and a missing value aborts startup.
"""

from __future__ import annotations

import os


def _read_env(name: str) -> str:
    """Return a stripped environment value, or an empty string when unset."""
    return os.environ.get(name, "").strip()


def _load_required(env_var: str, test_env_var: str, *, testing: bool) -> str:
    """
    Resolve a required setting, preferring the TEST_* variant in testing mode.

    Raises:
        RuntimeError: If neither variable is configured.
    """
    if testing:
        value = _read_env(test_env_var)
        if value:
            return value

    value = _read_env(env_var)
    if value:
        return value

    names = f"{test_env_var} or {env_var}" if testing else env_var
    raise RuntimeError(f"Missing required configuration: set {names}.")


def load_jwt_secret(*, testing: bool) -> str:
    """
    Resolve the symmetric key used to sign and verify access tokens.

    In testing mode ``TEST_JWT_SECRET_KEY`` is used when configured;
    otherwise it falls back to ``JWT_SECRET_KEY``.
    """
    return _load_required("JWT_SECRET_KEY", "TEST_JWT_SECRET_KEY", testing=testing)


def load_database_url(*, testing: bool) -> str:
    """Resolve the SQLAlchemy database URI for the selected environment."""
    return _load_required("DATABASE_URL", "TEST_DATABASE_URL", testing=testing)


class Config:
    """
    Base configuration shared by all environments.

    Subclasses should override only the values that need to change.
    Every setting can also be controlled via an environment variable so
    that container orchestrators can inject values at deploy time.
    """

    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Access tokens are valid for a fixed interval from issuance
    JWT_EXPIRY_DAYS: int = int(os.environ.get("JWT_EXPIRY_DAYS", "7"))
    # Seconds of tolerance for clock differences between issuer and verifier
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "0"))

    # Werkzeug method string; the cost parameters are the work factor
    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")

    # Emit one log line per request
    LOG_REQUESTS: bool = True


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    ``TESTING = True`` switches secret resolution to the ``TEST_*``
    environment variables so that test runs never touch development
    data.  Password hashing uses a deliberately cheap PBKDF2 round count
    to keep the suite fast.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_ENGINE_OPTIONS: dict = {"pool_pre_ping": True}
    PASSWORD_HASH_METHOD: str = os.environ.get(
        "TEST_PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000"
    )
    LOG_REQUESTS: bool = False


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    Disables debug mode and testing flags.  The signing secret and the
    database URL must be supplied through environment variables.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or
            ``"production"``.  When ``None``, the ``FLASK_ENV``
            environment variable is consulted, falling back to
            ``"development"`` if unset.

    Returns:
        The configuration class (not an instance) corresponding to the
        requested environment.  Falls back to ``DevelopmentConfig`` for
        unrecognised names.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
