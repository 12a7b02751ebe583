#!/usr/bin/env python3
"""Seed admin account script.

Creates the default admin from settings (SEED_ADMIN_EMAIL,
SEED_ADMIN_PASSWORD, SEED_ADMIN_NAME) if it does not exist yet.

Usage:
    python scripts/seed_admin.py
    python scripts/seed_admin.py --email ops@example.com --password s3cret --name Ops
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.auth.service import AuthService
from app.infrastructure.config import settings
from app.infrastructure.database import async_session_factory, create_tables


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create the default admin account")
    parser.add_argument("--email", default=settings.seed_admin_email, help="Admin email")
    parser.add_argument("--password", default=settings.seed_admin_password, help="Admin password")
    parser.add_argument("--name", default=settings.seed_admin_name, help="Display name")

    args = parser.parse_args()

    await create_tables()

    async with async_session_factory() as session:
        admin, created = await AuthService(session).seed_admin(
            args.email,
            args.password,
            args.name,
        )

    if created:
        print(f"✓ Admin created: {admin.email}")
    else:
        print(f"Admin already exists: {admin.email}")


if __name__ == "__main__":
    asyncio.run(main())
