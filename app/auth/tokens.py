"""Signed session tokens.

Tokens are stateless HS256 JWTs carrying the admin id and email.
Validity depends only on the signature and the expiry claim; there is
no server-side session store and no revocation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from app.domain.exceptions import UnauthorizedError
from app.infrastructure.config import settings


@dataclass(frozen=True)
class Identity:
    """Authenticated admin identity decoded from a token."""

    id: str
    email: str


def issue_token(
    identity: Identity,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Sign a session token for an admin.

    Args:
        identity: Admin id and email to embed.
        expires_delta: Token lifetime (defaults to settings.jwt_expires_days).
        now: Issue time, for tests.

    Returns:
        Encoded JWT.
    """
    issued_at = now or datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(days=settings.jwt_expires_days)

    payload = {
        "id": identity.id,
        "email": identity.email,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Identity:
    """Verify a session token and extract the identity.

    Args:
        token: Encoded JWT.

    Returns:
        Identity from the token payload.

    Raises:
        UnauthorizedError: If the token is malformed, tampered with,
            expired or missing identity claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or expired token") from None

    admin_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(admin_id, str) or not isinstance(email, str):
        raise UnauthorizedError("Invalid or expired token")

    return Identity(id=admin_id, email=email)
