"""Domain constants for compare_api.

This module centralizes the magic numbers shared by the server endpoints
and the dashboard client.
"""

# ============================================================================
# Screener Constants
# ============================================================================

# Tickers dropped from screener results (duplicate share classes, odd listings)
EXCLUDED_TICKERS = frozenset({"HONIV", "GOOGL"})

# Default number of companies returned by /top-companies
DEFAULT_TOP_COMPANIES_LIMIT = 50

# Upper bound accepted by /top-companies
MAX_TOP_COMPANIES_LIMIT = 250

# Companies enriched in parallel per batch during a full sector load
FULL_LOAD_BATCH_SIZE = 10


# ============================================================================
# Historical Data Constants
# ============================================================================

# Trailing window for the estimated (price x shares) market cap series
DEFAULT_ESTIMATED_YEARS = 10

# Trailing window for the provider's exact market cap series
DEFAULT_EXACT_YEARS = 5

# Point cap for the provider's exact market cap series
EXACT_MARKET_CAP_MAX_POINTS = 5000

# Quarterly income statements requested per symbol (10 years)
DEFAULT_QUARTERLY_STATEMENTS = 40


# ============================================================================
# Dashboard Constants
# ============================================================================

# Resident per-symbol entries in the chart cache
CHART_CACHE_CAPACITY = 20

# Keep every Nth day of a joined market cap series
CHART_SAMPLE_EVERY = 5

# Results returned by name search
SEARCH_NAME_LIMIT = 10

# Message shown when the provider rate limits us
RATE_LIMIT_MESSAGE = (
    "We've temporarily hit our API usage limit. Please try again later - "
    "this helps us keep the app free."
)
