# app/routers/health.py

from fastapi import APIRouter

from app.config import get_settings

settings = get_settings()
router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "recon-api",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check - reports the active matching thresholds."""
    return {
        "status": "ready",
        "checks": {
            "field_match_threshold": settings.field_match_threshold,
            "pairing_confidence_threshold": settings.pairing_confidence_threshold,
        },
    }
