"""Financial Modeling Prep API client.

Wraps the FMP "stable" endpoints used by the dashboard and normalizes
upstream error statuses:

- 402 (dataset not on the current plan) -> DatasetUnavailableError, which the
  dataset-level methods below turn into None / [] ("dataset absent")
- 429 (rate limited) -> RateLimitError, never retried
- any other non-2xx, timeout or transport failure -> UpstreamError
"""

import logging
from datetime import date
from typing import Any

import httpx

from compare_api.core.config import get_fmp_api_key, get_fmp_base_url
from compare_api.core.fmp.models import (
    CompanyProfile,
    HistoricalPrice,
    MarketCapPoint,
    QuarterlyFinancials,
    RatiosTTM,
    ScreenerResult,
    SearchResult,
)
from compare_api.core.utils.symbols import normalize_symbol
from compare_api.domain.constants import (
    DEFAULT_QUARTERLY_STATEMENTS,
    EXACT_MARKET_CAP_MAX_POINTS,
    SEARCH_NAME_LIMIT,
)
from compare_api.domain.exceptions import (
    DatasetUnavailableError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "fmp"

# Timeout settings for FMP API calls
FMP_TIMEOUT = httpx.Timeout(connect=10.0, read=30.0, write=10.0, pool=10.0)


class FMPClient:
    """Client for the Financial Modeling Prep API.

    Each request opens its own httpx.Client, so one FMPClient can be shared
    by the worker threads that fan out profile/ratio/batch fetches.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: httpx.Timeout | float = FMP_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            api_key: FMP API key. If None, loaded from FMP_API_KEY.
            base_url: API base URL. If None, loaded from FMP_BASE_URL.
            timeout: HTTP request timeout.
        """
        self.api_key = api_key or get_fmp_api_key()
        self.base_url = base_url or get_fmp_base_url()
        self.timeout = timeout

        if not self.api_key:
            raise ValueError(
                "FMP_API_KEY environment variable is not set. "
                "Set it to a Financial Modeling Prep API key."
            )

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET an endpoint and return the decoded JSON body.

        Raises:
            DatasetUnavailableError: on HTTP 402
            RateLimitError: on HTTP 429
            UpstreamError: on any other non-2xx status or transport failure
        """
        query = {**(params or {}), "apikey": self.api_key}

        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout) as client:
                response = client.get(path, params=query)
        except httpx.TimeoutException as e:
            logger.error(f"FMP API timeout on {path}: {e}")
            raise UpstreamError(
                f"FMP API timeout on {path}", SERVICE_NAME, path=path
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"FMP API transport error on {path}: {e}")
            raise UpstreamError(
                f"FMP API request failed on {path}: {e!s}", SERVICE_NAME, path=path
            ) from e

        status = response.status_code
        if status == 402:
            logger.info(f"FMP dataset unavailable on current plan: {path}")
            raise DatasetUnavailableError(
                f"FMP API error: 402 on {path}", SERVICE_NAME, path=path
            )
        if status == 429:
            logger.warning(f"FMP API rate limit hit on {path}")
            raise RateLimitError(f"FMP API error: 429 on {path}", SERVICE_NAME, path=path)
        if not 200 <= status < 300:
            logger.error(f"FMP API error {status} on {path}")
            raise UpstreamError(
                f"FMP API error: {status} on {path}",
                SERVICE_NAME,
                status_code=status,
                path=path,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"FMP API returned invalid JSON on {path}", SERVICE_NAME, path=path
            ) from e

    def _get_list(self, path: str, params: dict[str, Any] | None = None) -> list[dict]:
        """GET an endpoint that returns a JSON array (None/{} become [])."""
        data = self._get(path, params)
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("historical"), list):
            # Legacy wrapper shape: {"symbol": ..., "historical": [...]}
            return data["historical"]
        return []

    # ------------------------------------------------------------------
    # Company data
    # ------------------------------------------------------------------

    def get_profile(self, symbol: str) -> CompanyProfile | None:
        """Fetch a company profile.

        Returns:
            CompanyProfile, or None when the provider has no record.
        """
        rows = self._get_list("/profile", {"symbol": normalize_symbol(symbol)})
        if not rows:
            return None
        return CompanyProfile.from_api(rows[0])

    def get_ratios_ttm(self, symbol: str) -> RatiosTTM | None:
        """Fetch trailing-twelve-month ratios.

        Returns:
            RatiosTTM, or None when the dataset is unavailable (402) or empty.
        """
        try:
            rows = self._get_list("/ratios-ttm", {"symbol": normalize_symbol(symbol)})
        except DatasetUnavailableError:
            return None
        if not rows:
            return None
        return RatiosTTM.from_api(rows[0])

    def search_by_name(self, query: str, limit: int = SEARCH_NAME_LIMIT) -> list[SearchResult]:
        """Search companies by name or ticker fragment."""
        rows = self._get_list("/search-name", {"query": query, "limit": limit})
        return [SearchResult.from_api(row) for row in rows]

    def screen_companies(
        self,
        limit: int,
        industries: list[str] | None = None,
    ) -> list[ScreenerResult]:
        """Query the company screener, largest market cap first.

        ETFs, funds and inactive listings are excluded upstream.

        Args:
            limit: Maximum rows to return
            industries: Optional industry allow-list

        Returns:
            Screener rows in descending market cap order.
        """
        params: dict[str, Any] = {
            "isEtf": "false",
            "isFund": "false",
            "isActivelyTrading": "true",
            "limit": limit,
        }
        if industries:
            params["industry"] = ",".join(industries)

        rows = self._get_list("/company-screener", params)
        results = [ScreenerResult.from_api(row) for row in rows if row.get("symbol")]
        results.sort(key=lambda r: r.market_cap, reverse=True)
        return results

    # ------------------------------------------------------------------
    # Historical series
    # ------------------------------------------------------------------

    def get_historical_prices(self, symbol: str) -> list[HistoricalPrice]:
        """Fetch daily end-of-day closes (newest first, as FMP returns them).

        Returns [] when the dataset is unavailable.
        """
        try:
            rows = self._get_list(
                "/historical-price-eod/full", {"symbol": normalize_symbol(symbol)}
            )
        except DatasetUnavailableError:
            return []
        return [
            HistoricalPrice(date=str(row["date"])[:10], close=float(row["close"]))
            for row in rows
            if row.get("date") and row.get("close") is not None
        ]

    def get_historical_market_cap(
        self,
        symbol: str,
        start_date: date,
        end_date: date,
        limit: int = EXACT_MARKET_CAP_MAX_POINTS,
    ) -> list[MarketCapPoint]:
        """Fetch the provider's own historical market cap series.

        Returns [] when the dataset is unavailable.
        """
        symbol = normalize_symbol(symbol)
        try:
            rows = self._get_list(
                "/historical-market-capitalization",
                {
                    "symbol": symbol,
                    "from": start_date.isoformat(),
                    "to": end_date.isoformat(),
                    "limit": limit,
                },
            )
        except DatasetUnavailableError:
            return []
        return [
            MarketCapPoint.from_dict({**row, "symbol": row.get("symbol") or symbol})
            for row in rows
            if row.get("date") and row.get("marketCap") is not None
        ]

    def get_quarterly_income_statements(
        self,
        symbol: str,
        limit: int = DEFAULT_QUARTERLY_STATEMENTS,
    ) -> list[QuarterlyFinancials]:
        """Fetch quarterly income statements (revenue, net income).

        Returns [] when the dataset is unavailable.
        """
        symbol = normalize_symbol(symbol)
        try:
            rows = self._get_list(
                "/income-statement",
                {"symbol": symbol, "period": "quarter", "limit": limit},
            )
        except DatasetUnavailableError:
            return []
        return [
            QuarterlyFinancials.from_dict({**row, "symbol": row.get("symbol") or symbol})
            for row in rows
            if row.get("date")
        ]
