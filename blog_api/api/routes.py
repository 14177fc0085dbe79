"""Health endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from blog_api.database import health_check as db_health_check

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Status, timestamp in ISO8601 format and database health
    """
    db_healthy = await db_health_check()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "healthy" if db_healthy else "unhealthy",
    }
