"""Ticker search endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from compare_api.core.company import get_full_company_data
from compare_api.core.fmp import FMPClient
from compare_api.core.utils.symbols import normalize_symbol
from compare_api.domain.constants import SEARCH_NAME_LIMIT
from compare_api.routes.dependencies import get_fmp_client
from compare_api.routes.helpers import company_to_response, to_http_exception
from compare_api.routes.models import AnyCompanyResponse, SearchResultResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=AnyCompanyResponse | None)
def search_ticker(
    client: Annotated[FMPClient, Depends(get_fmp_client)],
    q: str | None = Query(None, description="Exact ticker, any case"),
) -> AnyCompanyResponse | None:
    """Look up a single company by exact ticker.

    Returns the company record, or null when the ticker is blank or unknown.
    """
    if not q or not q.strip():
        return None

    ticker = normalize_symbol(q)
    try:
        company = get_full_company_data(client, ticker)
    except Exception as e:
        raise to_http_exception(e, "Failed to search for ticker") from e

    if company is None:
        logger.info(f"Ticker not found: {ticker}")
        return None
    return company_to_response(company)


@router.get("/companies", response_model=list[SearchResultResponse])
def search_companies(
    client: Annotated[FMPClient, Depends(get_fmp_client)],
    query: str = Query(..., min_length=1, description="Company name or ticker fragment"),
    limit: int = Query(SEARCH_NAME_LIMIT, ge=1, le=50),
) -> list[SearchResultResponse]:
    """Search companies by name."""
    try:
        results = client.search_by_name(query.strip(), limit=limit)
    except Exception as e:
        raise to_http_exception(e, "Failed to search companies") from e

    return [SearchResultResponse.model_validate(r.to_dict()) for r in results]
