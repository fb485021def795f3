"""Single-company aggregation: profile + TTM ratios -> company record."""

import concurrent.futures
import logging

from compare_api.core.fmp.client import FMPClient
from compare_api.core.fmp.models import (
    CompanyData,
    CompanyProfile,
    CompanyRecord,
    LimitedCompanyData,
    RatiosTTM,
)
from compare_api.core.utils.symbols import normalize_symbol

logger = logging.getLogger(__name__)


def _limited_from_profile(profile: CompanyProfile) -> LimitedCompanyData:
    return LimitedCompanyData(
        symbol=profile.symbol,
        company_name=profile.company_name,
        market_cap=profile.market_cap,
        beta=profile.beta,
    )


def build_company_record(
    profile: CompanyProfile,
    ratios: RatiosTTM | None,
) -> CompanyRecord:
    """Combine a profile and (optional) TTM ratios into a company record.

    Shares outstanding are re-derived from the current market cap and price
    on every call, then the per-share TTM ratios are scaled to absolute
    revenue, earnings and free cash flow.

    Args:
        profile: Company profile
        ratios: TTM ratios, or None when the dataset is unavailable

    Returns:
        CompanyData when ratios are present and a price is known,
        LimitedCompanyData otherwise.
    """
    if ratios is None or not profile.price:
        return _limited_from_profile(profile)

    shares_outstanding = profile.market_cap / profile.price

    return CompanyData(
        symbol=profile.symbol,
        company_name=profile.company_name,
        market_cap=profile.market_cap,
        revenue_ttm=(ratios.revenue_per_share or 0.0) * shares_outstanding,
        earnings_ttm=(ratios.net_income_per_share or 0.0) * shares_outstanding,
        fcf_ttm=(ratios.free_cash_flow_per_share or 0.0) * shares_outstanding,
        beta=profile.beta,
        operating_margin=ratios.operating_profit_margin,
        # A zero P/E from the provider means "not meaningful"
        pe_ratio=ratios.price_to_earnings or None,
        debt_to_equity=ratios.debt_to_equity,
    )


def get_full_company_data(client: FMPClient, symbol: str) -> CompanyRecord | None:
    """Fetch profile and ratios concurrently and build the company record.

    Both requests are submitted before either result is awaited.

    Args:
        client: FMP client
        symbol: Ticker (any case)

    Returns:
        CompanyData / LimitedCompanyData, or None if the provider has no
        profile for the symbol.

    Raises:
        RateLimitError: if either request was rate limited
        UpstreamError: if either request failed
    """
    symbol = normalize_symbol(symbol)

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        profile_future = pool.submit(client.get_profile, symbol)
        ratios_future = pool.submit(client.get_ratios_ttm, symbol)
        profile = profile_future.result()
        ratios = ratios_future.result()

    if profile is None:
        logger.info(f"No profile found for {symbol}")
        return None

    if ratios is None:
        logger.info(f"Ratios unavailable for {symbol}, returning limited data")

    return build_company_record(profile, ratios)
