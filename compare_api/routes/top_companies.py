"""Top companies (sector screener) endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from compare_api.core.fmp import FMPClient
from compare_api.core.screener import get_top_companies
from compare_api.core.utils.symbols import parse_csv_list
from compare_api.domain.constants import (
    DEFAULT_TOP_COMPANIES_LIMIT,
    MAX_TOP_COMPANIES_LIMIT,
)
from compare_api.routes.dependencies import get_fmp_client
from compare_api.routes.helpers import company_to_response, to_http_exception
from compare_api.routes.models import AnyCompanyResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[AnyCompanyResponse])
def list_top_companies(
    client: Annotated[FMPClient, Depends(get_fmp_client)],
    limit: int = Query(
        DEFAULT_TOP_COMPANIES_LIMIT,
        ge=1,
        le=MAX_TOP_COMPANIES_LIMIT,
        description="Number of companies to return",
    ),
    industries: str | None = Query(
        None, description="Comma-separated industry allow-list"
    ),
    quick: bool = Query(
        False, description="Return screener data only (limited records)"
    ),
) -> list[AnyCompanyResponse]:
    """Get the largest companies by market cap.

    Quick mode answers from the screener alone so the UI can render at
    once; full mode enriches every company with TTM metrics.
    """
    industry_list = parse_csv_list(industries)
    logger.info(
        f"Top companies: limit={limit}, industries={industry_list}, quick={quick}"
    )

    try:
        companies = get_top_companies(client, limit, industry_list, quick=quick)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch top companies") from e

    return [company_to_response(c) for c in companies]
