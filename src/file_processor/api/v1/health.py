"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, status

from file_processor.utils.logging import get_logger

logger = get_logger("health")

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """
    Liveness probe.

    Does not touch the pipeline or any collaborator; returns OK whenever the
    process is serving requests.
    """
    logger.debug("Health check requested")
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
