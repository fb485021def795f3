"""Configuration resolved from environment variables."""

import os
from datetime import date

from dateutil.relativedelta import relativedelta

from compare_api.domain.constants import (
    CHART_CACHE_CAPACITY,
    DEFAULT_ESTIMATED_YEARS,
    DEFAULT_EXACT_YEARS,
    DEFAULT_QUARTERLY_STATEMENTS,
)

# Environment variable names
ENV_FMP_API_KEY = "FMP_API_KEY"
ENV_FMP_BASE_URL = "FMP_BASE_URL"
ENV_ESTIMATED_YEARS = "ESTIMATED_MARKET_CAP_YEARS"
ENV_EXACT_YEARS = "EXACT_MARKET_CAP_YEARS"
ENV_QUARTERLY_LIMIT = "QUARTERLY_STATEMENTS_LIMIT"
ENV_COMPARE_API_URL = "COMPARE_API_URL"
ENV_CHART_CACHE_CAPACITY = "CHART_CACHE_CAPACITY"

# Defaults
DEFAULT_FMP_BASE_URL = "https://financialmodelingprep.com/stable"
DEFAULT_COMPARE_API_URL = "http://localhost:8000"


def _get_int(name: str, default: int) -> int:
    """Read a positive integer env var, falling back to default when unset."""
    raw = os.environ.get(name, "")
    if not raw:
        return default
    value = int(raw)
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}")
    return value


def get_fmp_api_key() -> str:
    """Get the Financial Modeling Prep API key (empty string if unset)."""
    return os.environ.get(ENV_FMP_API_KEY, "")


def get_fmp_base_url() -> str:
    """Get the FMP base URL."""
    return os.environ.get(ENV_FMP_BASE_URL, "") or DEFAULT_FMP_BASE_URL


def get_estimated_years() -> int:
    """Trailing years covered by the estimated market cap series."""
    return _get_int(ENV_ESTIMATED_YEARS, DEFAULT_ESTIMATED_YEARS)


def get_exact_years() -> int:
    """Trailing years covered by the exact market cap series."""
    return _get_int(ENV_EXACT_YEARS, DEFAULT_EXACT_YEARS)


def get_quarterly_limit() -> int:
    """Number of quarterly income statements requested per symbol."""
    return _get_int(ENV_QUARTERLY_LIMIT, DEFAULT_QUARTERLY_STATEMENTS)


def get_compare_api_url() -> str:
    """Base URL of the Compare API used by the dashboard client."""
    return os.environ.get(ENV_COMPARE_API_URL, "") or DEFAULT_COMPARE_API_URL


def get_chart_cache_capacity() -> int:
    """Maximum resident entries in the dashboard chart cache."""
    return _get_int(ENV_CHART_CACHE_CAPACITY, CHART_CACHE_CAPACITY)


def resolve_lookback_start(years: int, today: date | None = None) -> date:
    """Return the first date of a trailing window of `years` years.

    Args:
        years: Window length in years
        today: Window end (defaults to today)

    Returns:
        The date `years` years before `today`.
    """
    today = today or date.today()
    return today - relativedelta(years=years)


def resolve_exact_window(today: date | None = None) -> tuple[date, date]:
    """Resolve the (from, to) range for the exact market cap series.

    Reads EXACT_MARKET_CAP_YEARS (default: 5).

    Returns:
        Tuple of (start_date, end_date) as date objects.
    """
    end_date = today or date.today()
    start_date = resolve_lookback_start(get_exact_years(), end_date)
    return start_date, end_date
