"""Tests for the compare-dashboard CLI."""

from unittest.mock import patch

from rich.console import Console

from compare_api import cli
from compare_api.core.fmp.models import LimitedCompanyData, MarketCapPoint
from compare_api.domain.exceptions import RateLimitError


def run(*argv: str) -> tuple[int, str]:
    """Run the CLI and return (exit code, captured console output)."""
    # Wide console so tables never fold cell text
    with patch.object(cli, "console", Console(width=200)) as console, console.capture() as capture:
        code = cli.main(list(argv))
    return code, capture.get()


def test_sectors_lists_chips():
    code, text = run("sectors")
    assert code == 0
    assert "technology" in text
    assert "industrials" in text


def test_search_prints_company():
    company = LimitedCompanyData(symbol="AAPL", company_name="Apple", market_cap=3e12, beta=1.2)
    with patch.object(cli.DashboardClient, "search", return_value=company):
        code, text = run("search", "aapl")
    assert code == 0
    assert "AAPL" in text


def test_search_unknown_ticker():
    with (
        patch.object(cli.DashboardClient, "search", return_value=None),
        patch.object(cli.DashboardClient, "search_companies", return_value=[]),
    ):
        code, text = run("search", "ZZZZ")
    assert code == 1
    assert "Ticker not found" in text


def test_rate_limit_shows_retry_message():
    with patch.object(
        cli.DashboardClient, "search", side_effect=RateLimitError("429", "compare-api")
    ):
        code, text = run("search", "AAPL")
    assert code == 1
    assert "temporarily hit our API usage limit" in text.replace("\n", " ")


def test_unknown_sector():
    code, text = run("sector", "crypto")
    assert code == 2
    assert "Unknown sector" in text


def test_compare_prints_chart():
    def series(self, symbol, mode="estimated"):
        return [MarketCapPoint(symbol, f"2024-01-{d:02d}", 1e12) for d in range(1, 7)]

    with (
        patch.object(cli.DashboardClient, "get_historical_market_cap", series),
        patch.object(cli.DashboardClient, "get_historical_financials", return_value=[]),
    ):
        code, text = run("compare", "AAPL", "MSFT")

    assert code == 0
    assert "AAPL vs MSFT" in text
    assert "2024-01-06" in text


def test_compare_with_itself_is_rejected():
    with patch.object(cli.DashboardClient, "get_historical_market_cap") as series:
        code, text = run("compare", "AAPL", "aapl")
    assert code == 2
    assert "Cannot compare AAPL with itself" in text
    series.assert_not_called()
