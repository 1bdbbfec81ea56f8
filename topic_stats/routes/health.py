"""Health check endpoints."""
from fastapi import APIRouter, status, Response
from topic_stats.config import settings
import json

router = APIRouter()


@router.get("/health/live")
async def liveness():
    """Liveness probe - always returns 200 once app is running."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness():
    """
    Readiness probe - returns 200 only if TOPICS_ROOT is set and points
    to an existing directory.
    """
    if not settings.validate_topics_root():
        return Response(
            content=json.dumps({"status": "not ready", "reason": "TOPICS_ROOT is not a directory"}),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            media_type="application/json"
        )

    return {"status": "ready"}
