"""Pytest configuration and fixtures for all tests.

This module ensures tests run in isolation from production environment variables
and never reach the real Financial Modeling Prep API.
"""

import os
import threading

import pytest

from compare_api.core.fmp.models import (
    CompanyProfile,
    HistoricalPrice,
    MarketCapPoint,
    QuarterlyFinancials,
    RatiosTTM,
    ScreenerResult,
    SearchResult,
)
from compare_api.main import app

# Environment variables that should not affect tests
COMPARE_ENV_VARS = [
    "FMP_API_KEY",
    "FMP_BASE_URL",
    "ESTIMATED_MARKET_CAP_YEARS",
    "EXACT_MARKET_CAP_YEARS",
    "QUARTERLY_STATEMENTS_LIMIT",
    "COMPARE_API_URL",
    "CHART_CACHE_CAPACITY",
]


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear compare_api env vars before each test.

    This fixture runs automatically for every test (autouse=True).
    It saves original values, clears them for the test, then restores after.
    """
    original_values = {}
    for var in COMPARE_ENV_VARS:
        if var in os.environ:
            original_values[var] = os.environ.pop(var)

    yield

    for var in COMPARE_ENV_VARS:
        os.environ.pop(var, None)
    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Drop any FastAPI dependency overrides a test installed."""
    yield
    app.dependency_overrides.clear()


# =============================================================================
# Fake FMP client
# =============================================================================


class FakeFMPClient:
    """In-memory stand-in for FMPClient that records every call.

    Populate the dicts, or set `errors[method_name]` to an exception that
    the method should raise.
    """

    def __init__(self):
        self.profiles: dict[str, CompanyProfile] = {}
        self.ratios: dict[str, RatiosTTM] = {}
        self.prices: dict[str, list[HistoricalPrice]] = {}
        self.market_caps: dict[str, list[MarketCapPoint]] = {}
        self.statements: dict[str, list[QuarterlyFinancials]] = {}
        self.screener: list[ScreenerResult] = []
        self.search_results: list[SearchResult] = []
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def _record(self, name: str, *args):
        with self._lock:
            self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def get_profile(self, symbol):
        self._record("get_profile", symbol)
        return self.profiles.get(symbol)

    def get_ratios_ttm(self, symbol):
        self._record("get_ratios_ttm", symbol)
        return self.ratios.get(symbol)

    def search_by_name(self, query, limit=10):
        self._record("search_by_name", query, limit)
        return self.search_results[:limit]

    def screen_companies(self, limit, industries=None):
        self._record("screen_companies", limit, industries)
        return self.screener[:limit]

    def get_historical_prices(self, symbol):
        self._record("get_historical_prices", symbol)
        return self.prices.get(symbol, [])

    def get_historical_market_cap(self, symbol, start_date, end_date, limit=5000):
        self._record("get_historical_market_cap", symbol, start_date, end_date, limit)
        return self.market_caps.get(symbol, [])

    def get_quarterly_income_statements(self, symbol, limit=40):
        self._record("get_quarterly_income_statements", symbol, limit)
        return self.statements.get(symbol, [])


def make_profile(symbol: str, market_cap: float = 3e12, price: float = 200.0) -> CompanyProfile:
    return CompanyProfile(
        symbol=symbol,
        company_name=f"{symbol} Inc.",
        market_cap=market_cap,
        price=price,
        beta=1.2,
    )


def make_ratios(symbol: str) -> RatiosTTM:
    return RatiosTTM(
        symbol=symbol,
        operating_profit_margin=0.3,
        price_to_earnings=30.0,
        free_cash_flow_per_share=6.0,
        revenue_per_share=25.0,
        net_income_per_share=6.5,
        debt_to_equity=1.5,
    )


@pytest.fixture
def fake_fmp():
    """Empty FakeFMPClient."""
    return FakeFMPClient()


# =============================================================================
# Fake Compare API client (dashboard side)
# =============================================================================


class FakeDashboardClient:
    """In-memory stand-in for DashboardClient that records every call.

    `top_companies[quick]` holds the list returned for quick/full loads;
    `before_return` hooks let a test act while a request is "in flight".
    """

    def __init__(self):
        self.market_caps: dict[str, list[MarketCapPoint]] = {}
        self.financials: dict[str, list[QuarterlyFinancials]] = {}
        self.top_companies: dict[bool, list] = {True: [], False: []}
        self.errors: dict[str, Exception] = {}
        self.before_return: dict[str, object] = {}
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def _record(self, name: str, *args):
        with self._lock:
            self.calls.append((name, *args))
        hook = self.before_return.get(name)
        if hook is not None:
            hook(*args)
        if name in self.errors:
            raise self.errors[name]

    def get_historical_market_cap(self, symbol, mode="estimated"):
        self._record("get_historical_market_cap", symbol, mode)
        return self.market_caps.get(symbol, [])

    def get_historical_financials(self, symbol):
        self._record("get_historical_financials", symbol)
        return self.financials.get(symbol, [])

    def get_top_companies(self, limit, industries=None, quick=False):
        self._record("get_top_companies", limit, industries, quick)
        return list(self.top_companies[quick])


@pytest.fixture
def fake_api():
    """Empty FakeDashboardClient."""
    return FakeDashboardClient()
