"""Financial Modeling Prep gateway.

Provides the FMP HTTP client and the data models it returns.
"""

from compare_api.core.fmp.client import FMP_TIMEOUT, FMPClient
from compare_api.core.fmp.models import (
    CompanyData,
    CompanyProfile,
    CompanyRecord,
    HistoricalPrice,
    LimitedCompanyData,
    MarketCapPoint,
    QuarterlyFinancials,
    RatiosTTM,
    ScreenerResult,
    SearchResult,
    company_from_dict,
)

__all__ = [
    "FMP_TIMEOUT",
    "CompanyData",
    "CompanyProfile",
    "CompanyRecord",
    "FMPClient",
    "HistoricalPrice",
    "LimitedCompanyData",
    "MarketCapPoint",
    "QuarterlyFinancials",
    "RatiosTTM",
    "ScreenerResult",
    "SearchResult",
    "company_from_dict",
]
