"""Admin authentication service.

Handles login, registration, profile lookup and seeding of the default
admin account.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import Admin
from app.auth.repository import AdminRepository
from app.auth.tokens import Identity, issue_token
from app.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError

logger = structlog.get_logger()

PASSWORD_MIN_LENGTH = 6

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    """Token plus the admin it was issued for."""

    token: str
    admin: Admin


class AuthService:
    """Service for admin authentication."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = AdminRepository(session)

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token.

        Unknown email and wrong password fail with the same message.

        Raises:
            ValidationError: If email or password is blank.
            UnauthorizedError: If the credentials do not match.
        """
        if not email.strip() or not password:
            raise ValidationError("Email and password are required")

        admin = await self.repository.find_by_email(email)
        if admin is None or not self.repository.verify_password(admin, password):
            logger.warning("Login failed", email=email.strip().lower())
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Admin logged in", admin_id=admin.id)
        return AuthResult(token=self._issue(admin), admin=admin)

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create an admin account and issue a token.

        Raises:
            ValidationError: If a field is blank or the password is too short.
            ConflictError: If the email is already registered.
        """
        if not email.strip() or not password or not name.strip():
            raise ValidationError("Email, password, and name are required")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
                field="password",
            )

        admin = await self.repository.create(email, password, name)
        await self.session.commit()

        logger.info("Admin registered", admin_id=admin.id)
        return AuthResult(token=self._issue(admin), admin=admin)

    async def get_profile(self, identity: Identity) -> Admin:
        """Load the admin behind an authenticated identity.

        Raises:
            NotFoundError: If the admin no longer exists.
        """
        admin = await self.repository.get_by_id(identity.id)
        if admin is None:
            raise NotFoundError("Admin", identity.id)
        return admin

    async def seed_admin(self, email: str, password: str, name: str) -> tuple[Admin, bool]:
        """Create the default admin unless the email is taken.

        Returns:
            Tuple of (admin, whether it was created now).
        """
        existing = await self.repository.find_by_email(email)
        if existing is not None:
            return existing, False

        admin = await self.repository.create(email, password, name)
        await self.session.commit()
        return admin, True

    def _issue(self, admin: Admin) -> str:
        return issue_token(Identity(id=admin.id, email=admin.email))
