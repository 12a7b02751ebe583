"""Health check endpoints.

Both endpoints answer in the standard response envelope; readiness
fails with 503 when the database cannot be reached.
"""

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.middleware import error_response
from app.api.schemas import ApiResponse, HealthResponse, ReadinessResponse
from app.infrastructure.config import settings
from app.infrastructure.database import check_connection

logger = structlog.get_logger()

router = APIRouter()


@router.get(
    "/health",
    response_model=ApiResponse[HealthResponse],
    response_model_exclude_none=True,
)
async def health_check() -> ApiResponse[HealthResponse]:
    """Report that the process is up, with service name and version."""
    return ApiResponse(
        data=HealthResponse(
            status="healthy",
            service="catalog-api",
            version=settings.api_version,
        )
    )


@router.get(
    "/ready",
    response_model=ApiResponse[ReadinessResponse],
    response_model_exclude_none=True,
    responses={503: {"description": "Database unreachable"}},
)
async def readiness_check() -> ApiResponse[ReadinessResponse] | JSONResponse:
    """Check that the database answers before accepting traffic."""
    try:
        await check_connection()
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database not reachable", error=str(e))
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "SERVICE_UNAVAILABLE",
            "Database not reachable",
        )
    return ApiResponse(data=ReadinessResponse(status="ready"))
