"""Bearer token authentication for mutating routes.

The authenticated identity is returned as a dependency value and passed
explicitly to handlers; nothing is stored on the request.
"""

import structlog
from fastapi import Request

from app.auth.tokens import Identity, decode_token
from app.domain.exceptions import UnauthorizedError

logger = structlog.get_logger()


async def require_admin(request: Request) -> Identity:
    """Authenticate the request from its Authorization header.

    Expects ``Authorization: Bearer <token>``.

    Args:
        request: Incoming request.

    Returns:
        Identity decoded from a valid, unexpired token.

    Raises:
        UnauthorizedError: If the header is missing or malformed, or the
            token does not verify.
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        logger.warning(
            "Missing authorization header",
            path=request.url.path,
            method=request.method,
        )
        raise UnauthorizedError("Access denied. No token provided.")

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        logger.warning(
            "Invalid authorization format",
            path=request.url.path,
            method=request.method,
        )
        raise UnauthorizedError("Invalid Authorization header format. Use 'Bearer <token>'")

    try:
        return decode_token(parts[1].strip())
    except UnauthorizedError:
        logger.warning(
            "Token rejected",
            path=request.url.path,
            method=request.method,
        )
        raise
