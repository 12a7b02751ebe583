"""Admin authentication endpoints.

Provides:
- POST /auth/login - exchange credentials for a token
- POST /auth/register - create an admin and return a token
- GET /auth/me - current admin profile
- POST /auth/logout - acknowledge logout (tokens are discarded client-side)
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import AdminSchema, ApiResponse, AuthData, LoginRequest, RegisterRequest
from app.api.security import require_admin
from app.auth.service import AuthResult, AuthService
from app.auth.tokens import Identity
from app.infrastructure.database import get_session

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["Auth"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(session: Annotated[AsyncSession, Depends(get_session)]) -> AuthService:
    """Get auth service bound to the request session."""
    return AuthService(session)


def auth_result_to_data(result: AuthResult) -> AuthData:
    """Convert AuthResult to response schema."""
    return AuthData(
        token=result.token,
        admin=AdminSchema.model_validate(result.admin),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    summary="Log in",
)
async def login(
    request: LoginRequest,
    service: Annotated[AuthService, Depends(get_service)],
) -> ApiResponse[AuthData]:
    """Log in with email and password."""
    result = await service.login(request.email, request.password)
    return ApiResponse(data=auth_result_to_data(result))


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Register admin",
)
async def register(
    request: RegisterRequest,
    service: Annotated[AuthService, Depends(get_service)],
) -> ApiResponse[AuthData]:
    """Register a new admin account."""
    result = await service.register(request.email, request.password, request.name)
    return ApiResponse(data=auth_result_to_data(result))


@router.get(
    "/me",
    response_model=ApiResponse[AdminSchema],
    response_model_exclude_none=True,
    summary="Current admin",
)
async def me(
    identity: Annotated[Identity, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_service)],
) -> ApiResponse[AdminSchema]:
    """Get the profile of the authenticated admin."""
    admin = await service.get_profile(identity)
    return ApiResponse(data=AdminSchema.model_validate(admin))


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    summary="Log out",
)
async def logout(
    identity: Annotated[Identity, Depends(require_admin)],
) -> ApiResponse[None]:
    """Acknowledge logout; the token stays valid until it expires."""
    logger.info("Admin logged out", admin_id=identity.id)
    return ApiResponse(message="Logged out successfully")
