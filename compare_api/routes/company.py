"""Single company endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from compare_api.core.company import get_full_company_data
from compare_api.core.fmp import FMPClient
from compare_api.routes.dependencies import get_fmp_client
from compare_api.routes.helpers import company_to_response, to_http_exception
from compare_api.routes.models import AnyCompanyResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{symbol}", response_model=AnyCompanyResponse)
def get_company(
    symbol: str,
    client: Annotated[FMPClient, Depends(get_fmp_client)],
) -> AnyCompanyResponse:
    """Get the company record for a symbol.

    Raises:
        HTTPException 404: If the provider has no profile for the symbol
        HTTPException 429: If the provider rate limited the request
        HTTPException 500: On any other provider failure
    """
    try:
        company = get_full_company_data(client, symbol)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch company data") from e

    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company_to_response(company)
