"""HTTP client for the Compare API, used by the dashboard.

Maps the API's status codes back onto the domain errors:
404 -> DataNotFoundError, 429 -> RateLimitError, anything else -> UpstreamError.
The historical series calls turn a 404 into an empty series so a symbol
missing one dataset can still be charted by the other.
"""

import logging
from typing import Any

import httpx

from compare_api.core.config import get_compare_api_url
from compare_api.core.fmp.models import (
    CompanyRecord,
    MarketCapPoint,
    QuarterlyFinancials,
    SearchResult,
    company_from_dict,
)
from compare_api.core.utils.symbols import normalize_symbol
from compare_api.domain.exceptions import (
    DataNotFoundError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "compare-api"

# Full sector loads fan out to the provider, so allow a long read
DEFAULT_TIMEOUT = httpx.Timeout(connect=10.0, read=120.0, write=10.0, pool=10.0)


class DashboardClient:
    """Client for the Compare API HTTP surface."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL. If None, loaded from COMPARE_API_URL.
            timeout: HTTP request timeout.
        """
        self.base_url = base_url or get_compare_api_url()
        self.timeout = timeout

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and return the decoded JSON body."""
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout) as client:
                response = client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Compare API request failed on {path}: {e}")
            raise UpstreamError(
                f"Compare API request failed on {path}: {e!s}", SERVICE_NAME, path=path
            ) from e

        status = response.status_code
        if status == 404:
            raise DataNotFoundError(f"Not found: {path}", resource=path)
        if status == 429:
            logger.warning(f"Compare API rate limited on {path}")
            raise RateLimitError("Rate limited", SERVICE_NAME, path=path)
        if not 200 <= status < 300:
            raise UpstreamError(
                f"Compare API error {status} on {path}",
                SERVICE_NAME,
                status_code=status,
                path=path,
            )
        return response.json()

    def search(self, ticker: str) -> CompanyRecord | None:
        """Look up a company by exact ticker (None if unknown)."""
        data = self._get("/search", {"q": normalize_symbol(ticker)})
        if not data:
            return None
        return company_from_dict(data)

    def search_companies(self, query: str) -> list[SearchResult]:
        """Search companies by name."""
        rows = self._get("/search/companies", {"query": query})
        return [SearchResult.from_api(row) for row in rows]

    def get_company(self, symbol: str) -> CompanyRecord:
        """Get the company record for a symbol.

        Raises:
            DataNotFoundError: if the symbol is unknown
        """
        data = self._get(f"/company/{normalize_symbol(symbol)}")
        return company_from_dict(data)

    def get_historical_market_cap(
        self,
        symbol: str,
        mode: str = "estimated",
    ) -> list[MarketCapPoint]:
        """Get market cap history, oldest first.

        A symbol with no history yields an empty list.
        """
        symbol = normalize_symbol(symbol)
        try:
            rows = self._get(f"/historical/{symbol}", {"mode": mode})
        except DataNotFoundError:
            logger.info(f"No market cap history for {symbol}")
            return []
        return [MarketCapPoint.from_dict(row) for row in rows]

    def get_historical_financials(self, symbol: str) -> list[QuarterlyFinancials]:
        """Get quarterly revenue and net income, oldest first.

        Statements are absent on some provider plans; that yields an empty list.
        """
        symbol = normalize_symbol(symbol)
        try:
            rows = self._get(f"/historical-financials/{symbol}")
        except DataNotFoundError:
            logger.info(f"No quarterly financials for {symbol}")
            return []
        return [QuarterlyFinancials.from_dict(row) for row in rows]

    def get_top_companies(
        self,
        limit: int,
        industries: list[str] | None = None,
        quick: bool = False,
    ) -> list[CompanyRecord]:
        """Get the largest companies by market cap."""
        params: dict[str, Any] = {"limit": limit, "quick": "true" if quick else "false"}
        if industries:
            params["industries"] = ",".join(industries)
        rows = self._get("/top-companies", params)
        return [company_from_dict(row) for row in rows]
