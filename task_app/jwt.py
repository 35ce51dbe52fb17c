"""
Access token issuing and verification.

Tokens are JSON Web Tokens signed with HS256 (HMAC-SHA256) using the
process-wide signing secret, so the service that issues a token is the
only one able to verify it and no server-side session store is needed.
The trade-off is that a token cannot be revoked before it expires.

Token structure (claims):
    - ``sub`` -- id of the authenticated user.
    - ``iat`` -- issued-at timestamp (UTC epoch seconds).
    - ``exp`` -- expiration timestamp (UTC epoch seconds), ``iat`` plus
      the configured lifetime (7 days by default).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .errors import InvalidTokenError

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRY = timedelta(days=7)
REQUIRED_TOKEN_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access token."""

    subject: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    Args:
        secret: Symmetric signing key.  Must be non-empty.
        expiry: Lifetime of a newly issued token.
        algorithm: HMAC algorithm; verification accepts only this one,
            which also rules out ``none`` and asymmetric algorithm
            confusion.
        leeway: Seconds of tolerance applied to ``exp`` when verifying.
        clock: Returns the current UTC time; used when issuing.
    """

    def __init__(
        self,
        secret: str,
        expiry: timedelta = DEFAULT_EXPIRY,
        algorithm: str = DEFAULT_ALGORITHM,
        leeway: int = 0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("secret must be a non-empty string")
        self._secret = secret
        self.expiry = expiry
        self.algorithm = algorithm
        self.leeway = leeway
        self._clock = clock

    def issue(self, subject_id: str) -> str:
        """
        Create a signed token for *subject_id*.

        Returns:
            A compact JWS string suitable for an ``Authorization: Bearer``
            header.

        Raises:
            ValueError: If *subject_id* is blank.
        """
        if not isinstance(subject_id, str) or not subject_id.strip():
            raise ValueError("subject_id must be a non-empty string")

        now = self._clock()
        payload: dict[str, Any] = {
            "sub": subject_id,
            # RFC 7519 NumericDate: integer seconds since the epoch
            "iat": int(now.timestamp()),
            "exp": int((now + self.expiry).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check the signature and expiry of *token* and return its claims.

        Only the token itself is inspected; whether the subject still
        exists is the caller's concern.

        Raises:
            InvalidTokenError: If the token is malformed, carries a bad
                signature, lacks a required claim, or has expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_TOKEN_CLAIMS},
                leeway=self.leeway,
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(str(exc)) from exc

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject.strip():
            raise InvalidTokenError("Invalid sub claim")

        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
