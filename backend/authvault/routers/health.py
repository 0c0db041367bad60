"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, Request, status

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check(request: Request):
    """
    Readiness check that verifies the MongoDB connection.
    Returns 200 with status "degraded" if MongoDB is not reachable.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
    }

    try:
        await request.app.state.connection.ping()
        checks["mongodb"] = "healthy"
    except Exception as e:
        if request.app.state.settings.debug:
            checks["mongodb"] = f"unhealthy: {e}"
        else:
            checks["mongodb"] = "unhealthy"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
