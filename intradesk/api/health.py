"""Health and metrics endpoints."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/metrics")
async def metrics():
    """Basic service info for monitoring."""
    return {"service": "intradesk", "version": "0.1.0"}
