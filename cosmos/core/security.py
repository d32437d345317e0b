"""Password hashing and JWT creation/verification for admin sessions."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from cosmos.core.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    TokenNotYetValidError,
    ValidationError,
)
from cosmos.schemas.auth import TokenClaims

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

DEFAULT_TOKEN_TTL = timedelta(hours=24)
DEFAULT_JWT_ALGORITHM = "HS256"

PASSWORD_MIN_LEN = 6
# bcrypt only reads the first 72 bytes; longer input is refused rather than cut.
PASSWORD_MAX_BYTES = 72
PASSWORD_TOO_LONG_MESSAGE = f"Password must be at most {PASSWORD_MAX_BYTES} bytes"

_REQUIRED_CLAIMS = ["exp", "iat", "nbf"]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Raises ValidationError above 72 bytes."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long input never matches."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    username: str,
    role: str,
    user_id: int,
    *,
    secret: str,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
    ttl: timedelta = DEFAULT_TOKEN_TTL,
    now: datetime | None = None,
) -> str:
    """Create a signed token carrying username, role and user id, valid from now until now + ttl."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "username": username,
        "role": role,
        "user_id": user_id,
        "iat": issued_at,
        "nbf": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    *,
    secret: str,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
) -> TokenClaims:
    """
    Verify signature and validity window; return the claims.

    Raises InvalidSignatureError, TokenExpiredError, TokenNotYetValidError or
    MalformedTokenError. The database is not consulted.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.InvalidSignatureError as e:
        raise InvalidSignatureError("Token signature does not match") from e
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.ImmatureSignatureError as e:
        raise TokenNotYetValidError("Token is not valid yet") from e
    except jwt.PyJWTError as e:
        raise MalformedTokenError(f"Token could not be parsed: {e}") from e

    try:
        return TokenClaims(
            username=payload["username"],
            role=payload["role"],
            user_id=payload["user_id"],
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            not_before=datetime.fromtimestamp(payload["nbf"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedTokenError("Token payload is missing required claims") from e
