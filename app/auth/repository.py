"""Admin credential store."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import Admin
from app.auth.passwords import hash_password, verify_password
from app.domain.exceptions import ConflictError

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    """Lowercase and trim an email for storage and lookup."""
    return email.strip().lower()


class AdminRepository:
    """Repository for Admin database operations.

    Emails are compared case-insensitively by normalizing to lowercase
    before every lookup and before storage.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_by_email(self, email: str) -> Admin | None:
        """Get admin by email, ignoring case."""
        result = await self.session.execute(
            select(Admin).where(Admin.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, admin_id: str) -> Admin | None:
        """Get admin by ID."""
        return await self.session.get(Admin, admin_id)

    async def create(self, email: str, password: str, name: str) -> Admin:
        """Register a new admin.

        Args:
            email: Login email.
            password: Plaintext password, hashed before storage.
            name: Display name.

        Returns:
            Created admin.

        Raises:
            ConflictError: If the email is already registered.
        """
        email = normalize_email(email)
        if await self.find_by_email(email) is not None:
            raise ConflictError(
                "Admin with this email already exists",
                details={"email": email},
            )

        admin = Admin(email=email, password_hash=hash_password(password), name=name.strip())
        self.session.add(admin)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(
                "Admin with this email already exists",
                details={"email": email},
            ) from None

        logger.info("Admin created", admin_id=admin.id, email=email)
        return admin

    def verify_password(self, admin: Admin, password: str) -> bool:
        """Check a plaintext password against the admin's hash."""
        return verify_password(admin.password_hash, password)
