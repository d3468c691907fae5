"""
Actuator Endpoints.

This module provides the operational endpoints (health, info) used for
monitoring and deployment verification.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from mongo_db_service.core.database import ping_database
from mongo_db_service.core.logging_config import get_logger
from mongo_db_service.server.core import constant
from mongo_db_service.server.core.config import settings

logger = get_logger(__name__)

router = APIRouter()

STATUS_UP = "UP"
STATUS_DOWN = "DOWN"


@router.get(
    "/health",
    summary="Health Check",
    description="Report the status of the server and of its MongoDB connection.",
    response_description="Aggregated status with one entry per component.",
    responses={503: {"description": "At least one component is down"}},
)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Pings MongoDB; the overall status is `UP` only when the database answers,
    otherwise `DOWN` with HTTP 503.
    """
    try:
        details = await ping_database()
        mongo = {"status": STATUS_UP, "details": details}
    except (PyMongoError, OSError) as e:
        logger.warning(f"MongoDB health check failed: {e}")
        mongo = {"status": STATUS_DOWN, "details": {"error": str(e)}}

    overall = mongo["status"]
    return JSONResponse(
        status_code=status.HTTP_200_OK if overall == STATUS_UP else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": overall, "components": {"mongo": mongo}},
    )


@router.get(
    "/info",
    summary="Application Info",
    description="Retrieve name, version and active profile of the server.",
    response_description="Info object.",
)
async def info():
    """Return the application name, version and active profile."""
    return {
        "app": {
            "name": constant.PROJECT_NAME,
            "version": constant.VERSION,
            "profile": settings.profile,
        }
    }
