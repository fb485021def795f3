"""Health check endpoints."""

from fastapi import APIRouter

from compare_api.core.config import get_fmp_api_key

router = APIRouter()


@router.get("")
def health_check() -> dict:
    """Generic health check."""
    return {"status": "healthy"}


@router.get("/live")
def liveness() -> dict:
    """Liveness probe - is the process running?"""
    return {"status": "alive"}


@router.get("/ready")
def readiness() -> dict:
    """Readiness probe - can the service reach its data provider?

    Only configuration is checked; no upstream call is made, so probes
    never spend rate-limited quota.
    """
    checks = {"fmp_api_key_configured": bool(get_fmp_api_key())}
    status = "ready" if all(checks.values()) else "not_ready"
    return {"status": status, "checks": checks}
