"""
Health check endpoint.
"""

from fastapi import APIRouter

from seo_checker.config import settings
from seo_checker.services.scoring.weights import SCORING_VERSION

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with engine configuration."""
    return {
        "status": "ok",
        "scoring_version": SCORING_VERSION,
        "analyzer_workers": max(1, settings.ANALYZER_WORKERS),
        "ssrf_protection": settings.SSRF_PROTECTION_ENABLED,
        "vitals_seeded": settings.VITALS_SEED is not None,
        "http_timeout": settings.HTTP_TIMEOUT,
        "probe_timeout": settings.PROBE_TIMEOUT,
    }
