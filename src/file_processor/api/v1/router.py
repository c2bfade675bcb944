"""API v1 router aggregation."""

from fastapi import APIRouter

from file_processor.api.v1 import health, process

router = APIRouter(
    prefix="/api/v1",
    tags=["v1"],
    responses={
        400: {"description": "Missing required parameters"},
        401: {"description": "Unauthorized"},
        500: {"description": "Processing failed"},
    },
)

router.include_router(health.router)
router.include_router(process.router)

