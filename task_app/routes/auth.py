"""
Authentication endpoints.

Endpoints:
    POST /auth/register  -- Create a new user account.
    POST /auth/login     -- Exchange email and password for an access token.

Both endpoints validate the body with ``CredentialsIn`` and delegate to
``AuthService``; failures surface as typed errors handled by the
application's error boundary.
"""

from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, request

from ..auth import get_token_service
from ..repositories import CredentialStore
from ..schemas import CredentialsIn, parse
from ..services import AuthService

auth_bp = Blueprint("auth", __name__)


def _auth_service() -> AuthService:
    return AuthService(
        users=CredentialStore(),
        tokens=get_token_service(),
        hash_method=current_app.config["PASSWORD_HASH_METHOD"],
    )


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user account.

    Returns:
        201 with the user's public projection (``id``, ``email``,
        ``created_at``).
        422 if the email or password is invalid.
        409 if the email is already registered.
    """
    body = parse(CredentialsIn, request.get_json(silent=True))
    user = _auth_service().register(body.email, body.password)
    return jsonify(user.to_dict()), 201


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate a user and issue an access token.

    The ``"Invalid email or password"`` message is identical for an
    unknown email and a wrong password.

    Returns:
        200 with ``accessToken`` and the user's public projection.
        422 if the body is invalid.
        401 if the credentials are incorrect.
    """
    body = parse(CredentialsIn, request.get_json(silent=True))
    result = _auth_service().login(body.email, body.password)
    return jsonify({"accessToken": result.access_token, "user": result.user.to_dict()}), 200
