"""Shared helpers for data endpoints."""

import logging

from fastapi import HTTPException

from compare_api.core.fmp import CompanyRecord
from compare_api.domain.exceptions import RateLimitError
from compare_api.routes.models import (
    AnyCompanyResponse,
    CompanyResponse,
    LimitedCompanyResponse,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_DETAIL = "rate_limit"


def to_http_exception(error: Exception, detail: str) -> HTTPException:
    """Translate a provider failure into the HTTP error returned to callers.

    Upstream rate limiting is passed through verbatim as 429 so the UI can
    show its retry-later message; everything else becomes a generic 500.

    Args:
        error: The exception raised while serving the request
        detail: Generic message for the 500 body

    Returns:
        HTTPException to raise
    """
    if isinstance(error, RateLimitError):
        logger.warning(f"Upstream rate limit: {error}")
        return HTTPException(status_code=429, detail=RATE_LIMIT_DETAIL)

    logger.error(f"{detail}: {error}")
    return HTTPException(status_code=500, detail=detail)


def company_to_response(record: CompanyRecord) -> AnyCompanyResponse:
    """Convert a company record into its response model."""
    if record.is_limited:
        return LimitedCompanyResponse.model_validate(record.to_dict())
    return CompanyResponse.model_validate(record.to_dict())
