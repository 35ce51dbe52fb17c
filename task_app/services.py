"""
Authentication flow: registration and login.

``AuthService`` orchestrates the credential store, the password hasher
and the token service.  It raises typed API errors and never touches
the HTTP response; the views serialise whatever it returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from .errors import ConflictError, UnauthorizedError
from .jwt import TokenService
from .models import User
from .passwords import DEFAULT_HASH_METHOD
from .repositories import CredentialStore

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = "Email already exists"
# Shared by the unknown-email and wrong-password paths so a caller cannot
# tell which of the two failed.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    user: User


class AuthService:
    """
    Registers users and exchanges credentials for access tokens.

    Args:
        users: Credential store used for lookups and inserts.
        tokens: Token service that signs access tokens.
        hash_method: Werkzeug password hashing method string.
    """

    def __init__(
        self,
        users: CredentialStore,
        tokens: TokenService,
        hash_method: str = DEFAULT_HASH_METHOD,
    ) -> None:
        self.users = users
        self.tokens = tokens
        self.hash_method = hash_method

    def register(self, email: str, password: str) -> User:
        """
        Create a new account.

        The existence check gives a fast, friendly answer for the common
        case; the UNIQUE constraint decides when two registrations for
        the same email race past it, and that outcome is reported the
        same way.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self.users.find_by_email(email) is not None:
            raise ConflictError(EMAIL_EXISTS_MESSAGE)

        user = User(email=email)
        user.set_password(password, method=self.hash_method)
        try:
            self.users.insert(user)
        except IntegrityError as exc:
            raise ConflictError(EMAIL_EXISTS_MESSAGE) from exc

        logger.info("Registered user id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> LoginResult:
        """
        Verify credentials and issue an access token.

        Raises:
            UnauthorizedError: If the email is unknown or the password
                does not match.
            CorruptCredentialError: If the stored hash is malformed.
        """
        user = self.users.find_by_email(email)
        if user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if not user.check_password(password):
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        return LoginResult(access_token=self.tokens.issue(user.id), user=user)
