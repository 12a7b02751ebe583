"""Admin authentication: accounts, password hashing and session tokens."""

from app.auth.models import Admin
from app.auth.repository import AdminRepository
from app.auth.service import AuthResult, AuthService
from app.auth.tokens import Identity, decode_token, issue_token

__all__ = [
    "Admin",
    "AdminRepository",
    "AuthResult",
    "AuthService",
    "Identity",
    "decode_token",
    "issue_token",
]
