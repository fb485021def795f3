"""Data models for the Financial Modeling Prep gateway."""

from dataclasses import dataclass
from typing import Any

from compare_api.core.utils.dates import calendar_quarter


def _to_float(value: Any) -> float | None:
    """Coerce a provider number, treating None/"" as missing."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ============================================================================
# Provider payloads
# ============================================================================


@dataclass
class CompanyProfile:
    """Company profile from /profile."""

    symbol: str
    company_name: str
    market_cap: float
    price: float
    beta: float | None
    sector: str = ""
    industry: str = ""
    exchange: str = ""
    currency: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CompanyProfile":
        """Build from a raw FMP profile object."""
        return cls(
            symbol=str(data.get("symbol", "")).upper(),
            company_name=data.get("companyName") or "",
            market_cap=_to_float(data.get("marketCap")) or 0.0,
            price=_to_float(data.get("price")) or 0.0,
            beta=_to_float(data.get("beta")),
            sector=data.get("sector") or "",
            industry=data.get("industry") or "",
            exchange=data.get("exchange") or "",
            currency=data.get("currency") or "",
        )


@dataclass
class RatiosTTM:
    """Trailing-twelve-month ratios from /ratios-ttm (per-share values)."""

    symbol: str
    operating_profit_margin: float | None
    price_to_earnings: float | None
    free_cash_flow_per_share: float | None
    revenue_per_share: float | None
    net_income_per_share: float | None
    debt_to_equity: float | None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RatiosTTM":
        """Build from a raw FMP ratios-ttm object."""
        return cls(
            symbol=str(data.get("symbol", "")).upper(),
            operating_profit_margin=_to_float(data.get("operatingProfitMarginTTM")),
            price_to_earnings=_to_float(data.get("priceToEarningsRatioTTM")),
            free_cash_flow_per_share=_to_float(data.get("freeCashFlowPerShareTTM")),
            revenue_per_share=_to_float(data.get("revenuePerShareTTM")),
            net_income_per_share=_to_float(data.get("netIncomePerShareTTM")),
            debt_to_equity=_to_float(data.get("debtToEquityRatioTTM")),
        )


@dataclass
class HistoricalPrice:
    """A single end-of-day close."""

    date: str
    close: float


@dataclass
class ScreenerResult:
    """A row from /company-screener."""

    symbol: str
    company_name: str
    market_cap: float
    beta: float | None
    sector: str = ""
    industry: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ScreenerResult":
        """Build from a raw FMP screener row."""
        return cls(
            symbol=str(data.get("symbol", "")).upper(),
            company_name=data.get("companyName") or "",
            market_cap=_to_float(data.get("marketCap")) or 0.0,
            beta=_to_float(data.get("beta")),
            sector=data.get("sector") or "",
            industry=data.get("industry") or "",
        )


@dataclass
class SearchResult:
    """A row from /search-name."""

    symbol: str
    name: str
    currency: str
    exchange: str
    exchange_full_name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SearchResult":
        """Build from a raw FMP search row."""
        return cls(
            symbol=str(data.get("symbol", "")).upper(),
            name=data.get("name") or "",
            currency=data.get("currency") or "",
            exchange=data.get("exchange") or "",
            exchange_full_name=data.get("exchangeFullName") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "currency": self.currency,
            "exchange": self.exchange,
            "exchangeFullName": self.exchange_full_name,
        }


# ============================================================================
# Company records
# ============================================================================


@dataclass
class CompanyData:
    """Full company record: profile plus TTM metrics derived from ratios."""

    symbol: str
    company_name: str
    market_cap: float
    revenue_ttm: float
    earnings_ttm: float
    fcf_ttm: float
    beta: float | None
    operating_margin: float | None
    pe_ratio: float | None  # None when the provider reports 0 (not meaningful)
    debt_to_equity: float | None
    is_limited: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {
            "symbol": self.symbol,
            "companyName": self.company_name,
            "marketCap": self.market_cap,
            "revenueTTM": self.revenue_ttm,
            "earningsTTM": self.earnings_ttm,
            "fcfTTM": self.fcf_ttm,
            "beta": self.beta,
            "operatingMargin": self.operating_margin,
            "peRatio": self.pe_ratio,
            "debtToEquity": self.debt_to_equity,
            "isLimited": False,
        }


@dataclass
class LimitedCompanyData:
    """Company record when the ratio dataset is unavailable.

    Never carries derived financial fields.
    """

    symbol: str
    company_name: str
    market_cap: float
    beta: float | None
    is_limited: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {
            "symbol": self.symbol,
            "companyName": self.company_name,
            "marketCap": self.market_cap,
            "beta": self.beta,
            "isLimited": True,
        }


CompanyRecord = CompanyData | LimitedCompanyData


def company_from_dict(data: dict[str, Any]) -> CompanyRecord:
    """Rebuild a company record from wire format, branching on isLimited."""
    if data.get("isLimited"):
        return LimitedCompanyData(
            symbol=data["symbol"],
            company_name=data.get("companyName", ""),
            market_cap=data.get("marketCap") or 0.0,
            beta=data.get("beta"),
        )
    return CompanyData(
        symbol=data["symbol"],
        company_name=data.get("companyName", ""),
        market_cap=data.get("marketCap") or 0.0,
        revenue_ttm=data.get("revenueTTM") or 0.0,
        earnings_ttm=data.get("earningsTTM") or 0.0,
        fcf_ttm=data.get("fcfTTM") or 0.0,
        beta=data.get("beta"),
        operating_margin=data.get("operatingMargin"),
        pe_ratio=data.get("peRatio"),
        debt_to_equity=data.get("debtToEquity"),
    )


# ============================================================================
# Historical series
# ============================================================================


@dataclass(frozen=True)
class MarketCapPoint:
    """Market capitalization of a symbol on a calendar date."""

    symbol: str
    date: str  # YYYY-MM-DD
    market_cap: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {"symbol": self.symbol, "date": self.date, "marketCap": self.market_cap}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MarketCapPoint":
        """Rebuild from wire format (also accepts raw FMP rows)."""
        return cls(
            symbol=str(data["symbol"]).upper(),
            date=str(data["date"])[:10],
            market_cap=float(data["marketCap"]),
        )


@dataclass(frozen=True)
class QuarterlyFinancials:
    """Revenue and net income reported for one fiscal quarter."""

    symbol: str
    date: str  # fiscal period end, YYYY-MM-DD
    revenue: float
    net_income: float

    @property
    def calendar_quarter(self) -> str:
        """Calendar quarter key (e.g. "2024-Q4") of the period end date."""
        return calendar_quarter(self.date)

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {
            "symbol": self.symbol,
            "date": self.date,
            "quarter": self.calendar_quarter,
            "revenue": self.revenue,
            "netIncome": self.net_income,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuarterlyFinancials":
        """Rebuild from wire format (also accepts raw FMP income statements)."""
        return cls(
            symbol=str(data["symbol"]).upper(),
            date=str(data["date"])[:10],
            revenue=_to_float(data.get("revenue")) or 0.0,
            net_income=_to_float(data.get("netIncome")) or 0.0,
        )
