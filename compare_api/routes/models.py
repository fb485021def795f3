"""Response models for data endpoints.

Field names go over the wire in camelCase (companyName, revenueTTM, ...).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CompanyResponse(BaseModel):
    """Full company record."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(..., description="Stock symbol")
    company_name: str = Field(..., alias="companyName")
    market_cap: float = Field(..., alias="marketCap")
    revenue_ttm: float = Field(..., alias="revenueTTM")
    earnings_ttm: float = Field(..., alias="earningsTTM")
    fcf_ttm: float = Field(..., alias="fcfTTM")
    beta: float | None = None
    operating_margin: float | None = Field(None, alias="operatingMargin")
    pe_ratio: float | None = Field(None, alias="peRatio")
    debt_to_equity: float | None = Field(None, alias="debtToEquity")
    is_limited: Literal[False] = Field(False, alias="isLimited")


class LimitedCompanyResponse(BaseModel):
    """Company record without ratio-derived fields."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(..., description="Stock symbol")
    company_name: str = Field(..., alias="companyName")
    market_cap: float = Field(..., alias="marketCap")
    beta: float | None = None
    is_limited: Literal[True] = Field(True, alias="isLimited")


AnyCompanyResponse = CompanyResponse | LimitedCompanyResponse


class SearchResultResponse(BaseModel):
    """A company matched by name search."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    name: str
    currency: str = ""
    exchange: str = ""
    exchange_full_name: str = Field("", alias="exchangeFullName")


class MarketCapPointResponse(BaseModel):
    """Market cap of a symbol on a date."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    date: str = Field(..., description="YYYY-MM-DD")
    market_cap: float = Field(..., alias="marketCap")


class QuarterlyFinancialsResponse(BaseModel):
    """Quarterly revenue and net income."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    date: str = Field(..., description="Fiscal period end, YYYY-MM-DD")
    quarter: str = Field(..., description="Calendar quarter, e.g. 2024-Q4")
    revenue: float
    net_income: float = Field(..., alias="netIncome")
