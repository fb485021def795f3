"""Historical series for one symbol: market cap and quarterly financials."""

import concurrent.futures
import logging
from datetime import date
from enum import Enum

from compare_api.core.config import (
    get_estimated_years,
    get_quarterly_limit,
    resolve_exact_window,
    resolve_lookback_start,
)
from compare_api.core.fmp.client import FMPClient
from compare_api.core.fmp.models import MarketCapPoint, QuarterlyFinancials
from compare_api.core.utils.dates import parse_iso_date
from compare_api.core.utils.symbols import normalize_symbol
from compare_api.domain.constants import EXACT_MARKET_CAP_MAX_POINTS

logger = logging.getLogger(__name__)


class MarketCapMode(str, Enum):
    """How the market cap series is produced."""

    ESTIMATED = "estimated"  # daily close x current shares outstanding
    EXACT = "exact"  # provider's own historical market cap


def get_estimated_market_cap(
    client: FMPClient,
    symbol: str,
    years: int | None = None,
    today: date | None = None,
) -> list[MarketCapPoint]:
    """Estimate historical market cap from daily closes.

    Shares outstanding come from the current profile (market cap / price),
    so the series reflects today's share count applied to past prices.

    Args:
        client: FMP client
        symbol: Ticker (any case)
        years: Trailing window in years (default: ESTIMATED_MARKET_CAP_YEARS)
        today: Window end, for tests (default: today)

    Returns:
        Points in ascending date order; [] when the provider has no data.
    """
    symbol = normalize_symbol(symbol)
    years = years if years is not None else get_estimated_years()
    cutoff = resolve_lookback_start(years, today)

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        profile_future = pool.submit(client.get_profile, symbol)
        prices_future = pool.submit(client.get_historical_prices, symbol)
        profile = profile_future.result()
        prices = prices_future.result()

    if profile is None or not prices or not profile.price:
        logger.info(f"No estimated market cap history for {symbol}")
        return []

    shares_outstanding = profile.market_cap / profile.price

    points = [
        MarketCapPoint(symbol=symbol, date=p.date, market_cap=p.close * shares_outstanding)
        for p in prices
        if parse_iso_date(p.date) >= cutoff
    ]
    points.sort(key=lambda p: p.date)
    return points


def get_exact_market_cap(
    client: FMPClient,
    symbol: str,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[MarketCapPoint]:
    """Fetch the provider's historical market cap for a date range.

    The range defaults to the trailing EXACT_MARKET_CAP_YEARS and the
    request is capped at 5000 points.

    Returns:
        Points in ascending date order; [] when the dataset is unavailable.
    """
    if start_date is None or end_date is None:
        default_start, default_end = resolve_exact_window()
        start_date = start_date or default_start
        end_date = end_date or default_end

    points = client.get_historical_market_cap(
        symbol,
        start_date=start_date,
        end_date=end_date,
        limit=EXACT_MARKET_CAP_MAX_POINTS,
    )
    return sorted(points, key=lambda p: p.date)


def get_market_cap_history(
    client: FMPClient,
    symbol: str,
    mode: MarketCapMode = MarketCapMode.ESTIMATED,
) -> list[MarketCapPoint]:
    """Dispatch to the estimated or exact market cap series."""
    if mode == MarketCapMode.EXACT:
        return get_exact_market_cap(client, symbol)
    return get_estimated_market_cap(client, symbol)


def get_quarterly_financials(
    client: FMPClient,
    symbol: str,
    limit: int | None = None,
) -> list[QuarterlyFinancials]:
    """Fetch quarterly revenue and net income, oldest quarter first."""
    limit = limit if limit is not None else get_quarterly_limit()
    statements = client.get_quarterly_income_statements(symbol, limit=limit)
    return sorted(statements, key=lambda s: s.date)
