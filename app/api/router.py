"""API router factory with core endpoints."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.utils.db import verify_db_connection

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_api_router() -> APIRouter:
    """Create router with all versioned endpoints.

    All routes are mounted under the /api/v1 prefix.

    Returns:
        APIRouter with health checks and entity endpoints.
    """
    from app.api.courses import router as courses_router
    from app.api.enrollment import router as enrollment_router
    from app.api.instructor_details import router as instructor_details_router
    from app.api.instructors import router as instructors_router
    from app.api.reviews import router as reviews_router
    from app.api.students import router as students_router

    router = APIRouter(prefix=API_PREFIX)

    @router.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Health check endpoint - basic application health.

        Returns:
            Health status response.
        """
        return {"status": "healthy", "version": settings.API_VERSION}

    @router.get(
        "/health/db",
        tags=["Health"],
        status_code=status.HTTP_200_OK,
        response_model=None,
    )
    async def health_check_db() -> JSONResponse:
        """Deep health check - includes database connectivity check.

        Returns:
            Health status with database connectivity information.
        """
        try:
            await verify_db_connection()
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={"status": "healthy", "database": "connected"},
            )
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": str(e),
                },
            )

    router.include_router(instructors_router)
    router.include_router(instructor_details_router)
    router.include_router(students_router)
    router.include_router(courses_router)
    router.include_router(reviews_router)
    router.include_router(enrollment_router)

    return router
