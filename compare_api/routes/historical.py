"""Historical series endpoints (market cap and quarterly financials)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from compare_api.core.fmp import FMPClient
from compare_api.core.historical import (
    MarketCapMode,
    get_market_cap_history,
    get_quarterly_financials,
)
from compare_api.routes.dependencies import get_fmp_client
from compare_api.routes.helpers import to_http_exception
from compare_api.routes.models import MarketCapPointResponse, QuarterlyFinancialsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/historical/{symbol}", response_model=list[MarketCapPointResponse])
def get_historical_market_cap(
    symbol: str,
    client: Annotated[FMPClient, Depends(get_fmp_client)],
    mode: MarketCapMode = Query(
        MarketCapMode.ESTIMATED,
        description="estimated: daily close x current shares; exact: provider series",
    ),
) -> list[MarketCapPointResponse]:
    """Get the market cap history for a symbol, oldest first.

    Raises:
        HTTPException 404: If no history is available
    """
    try:
        points = get_market_cap_history(client, symbol, mode)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch historical data") from e

    if not points:
        raise HTTPException(status_code=404, detail="Historical data not found")

    logger.info(f"Returning {len(points)} {mode.value} market cap points for {symbol}")
    return [MarketCapPointResponse.model_validate(p.to_dict()) for p in points]


@router.get(
    "/historical-financials/{symbol}",
    response_model=list[QuarterlyFinancialsResponse],
)
def get_historical_financials(
    symbol: str,
    client: Annotated[FMPClient, Depends(get_fmp_client)],
) -> list[QuarterlyFinancialsResponse]:
    """Get quarterly revenue and net income for a symbol, oldest first.

    Raises:
        HTTPException 404: If no statements are available
    """
    try:
        statements = get_quarterly_financials(client, symbol)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch historical data") from e

    if not statements:
        raise HTTPException(status_code=404, detail="Historical data not found")

    return [QuarterlyFinancialsResponse.model_validate(s.to_dict()) for s in statements]
