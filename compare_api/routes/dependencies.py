"""Dependency injection for data endpoints."""

import logging

from fastapi import HTTPException

from compare_api.core.fmp import FMPClient

logger = logging.getLogger(__name__)


def get_fmp_client() -> FMPClient:
    """Get the FMP client configured from the environment.

    Raises:
        HTTPException 500: If FMP_API_KEY is not set
    """
    try:
        return FMPClient()
    except ValueError as e:
        logger.error(f"FMP client not configured: {e}")
        raise HTTPException(
            status_code=500,
            detail="FMP API key not configured. Set the FMP_API_KEY environment variable.",
        ) from e
