"""
Password hashing helpers.

Thin layer over Werkzeug's ``generate_password_hash`` /
``check_password_hash``.  Hashes are stored in Werkzeug's
``method$salt$hash`` format, a random salt is drawn on every call, and
the cost parameters embedded in the method string (``scrypt:n:r:p`` or
``pbkdf2:sha256:<iterations>``) act as the tunable work factor.

``check_password_hash`` quietly returns ``False`` for a hash it cannot
parse.  A stored hash that is not well formed means the credential
record is corrupt rather than that the password is wrong, so
``verify_password`` checks the format first and raises
``CorruptCredentialError`` instead.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from .errors import CorruptCredentialError

DEFAULT_HASH_METHOD = "scrypt"
SALT_LENGTH = 16


def hash_password(password: str, method: str = DEFAULT_HASH_METHOD) -> str:
    """Return a salted one-way hash of *password*."""
    return generate_password_hash(password, method=method, salt_length=SALT_LENGTH)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check *password* against a stored hash.

    Returns:
        ``True`` if the hash was produced from *password*, ``False`` on
        mismatch.

    Raises:
        CorruptCredentialError: If *password_hash* is not a well-formed
            Werkzeug hash or names an unsupported method.
    """
    if not isinstance(password_hash, str):
        raise CorruptCredentialError("stored password hash is not a string")

    parts = password_hash.split("$", 2)
    if len(parts) != 3 or not all(parts):
        raise CorruptCredentialError("stored password hash is malformed")

    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError) as exc:
        raise CorruptCredentialError(f"unsupported password hash: {exc}") from exc
