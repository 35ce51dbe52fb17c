"""
Authorization gate for protected endpoints.

Two steps run, in order, in front of every protected view:

1. **Identity resolution** (``authenticate``) -- parse the
   ``Authorization: Bearer <token>`` header, verify the token and
   re-resolve its subject against the credential store.  Every failure
   is reported with the same "Invalid token" message.
2. **Ownership enforcement** (``authorize_owner``) -- load the target
   task and compare its author with the resolved identity.  Existence is
   checked first, so a missing task is a 404 even for a non-owner.

Nothing is cached between requests: each request verifies its token
and looks the user up again, so a deleted account loses access at once.

The ``require_auth`` and ``owner_only`` decorators wire both steps into
Flask views, storing the results on ``flask.g``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from flask import current_app, g, request

from .errors import ForbiddenError, NotFoundError, UnauthorizedError
from .jwt import TokenService
from .models import Task
from .repositories import CredentialStore, TaskRepository

BEARER_SCHEME = "Bearer"
TASK_NOT_FOUND_MESSAGE = "Task not found"
FORBIDDEN_MESSAGE = "You're not allowed to access this resource"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""

    id: str
    email: str


def extract_bearer_token(raw_header: str | None) -> str:
    """
    Return the token part of a ``Bearer <token>`` header value.

    Raises:
        UnauthorizedError: If the header is absent or has another shape.
    """
    if not raw_header:
        raise UnauthorizedError()

    # Exactly one space between the scheme and the token
    parts = raw_header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise UnauthorizedError()
    return parts[1]


def authenticate(
    raw_header: str | None,
    tokens: TokenService,
    users: CredentialStore,
) -> Identity:
    """
    Resolve the caller's identity from an ``Authorization`` header value.

    Raises:
        UnauthorizedError: If the header is malformed, the token fails
            verification, or the token's subject no longer exists.
    """
    token = extract_bearer_token(raw_header)
    claims = tokens.verify(token)

    user = users.find_by_id(claims.subject)
    if user is None:
        raise UnauthorizedError()
    return Identity(id=user.id, email=user.email)


def authorize_owner(
    identity: Identity,
    task_id: str,
    tasks: TaskRepository,
) -> Task:
    """
    Load a task and make sure *identity* owns it.

    Returns:
        The task, so callers do not need to fetch it again.

    Raises:
        NotFoundError: If no task has this id.
        ForbiddenError: If the task belongs to someone else.
    """
    task = tasks.find_by_id(task_id)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
    if task.author_id != identity.id:
        raise ForbiddenError(FORBIDDEN_MESSAGE)
    return task


def get_token_service() -> TokenService:
    """Return the token service configured for the current application."""
    return current_app.extensions["token_service"]


def require_auth(view_func: Callable):
    """
    Decorator that rejects requests without a valid bearer token.

    On success the resolved ``Identity`` is stored as ``g.identity``.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        g.identity = authenticate(
            request.headers.get("Authorization"),
            get_token_service(),
            CredentialStore(),
        )
        return view_func(*args, **kwargs)

    return wrapper


def owner_only(view_func: Callable):
    """
    Decorator that restricts a ``<task_id>`` route to the task's author.

    Must be applied beneath ``require_auth``.  The loaded task is stored
    as ``g.task``.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        g.task = authorize_owner(g.identity, kwargs["task_id"], TaskRepository())
        return view_func(*args, **kwargs)

    return wrapper
