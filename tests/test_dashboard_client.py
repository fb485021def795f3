"""Tests for the Compare API client used by the dashboard."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from compare_api.core.fmp.models import CompanyData, LimitedCompanyData
from compare_api.dashboard.chart import ChartMetric
from compare_api.dashboard.chart_cache import ChartDataCache
from compare_api.dashboard.client import DashboardClient
from compare_api.dashboard.comparison import ComparisonView
from compare_api.domain.exceptions import DataNotFoundError, RateLimitError, UpstreamError


def _response(status_code: int = 200, payload=None) -> MagicMock:
    return MagicMock(status_code=status_code, json=lambda: payload)


@pytest.fixture
def mock_http():
    with patch("compare_api.dashboard.client.httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        yield mock_client_class, mock_client


@pytest.fixture
def api():
    return DashboardClient(base_url="http://compare.test")


class TestErrors:
    def test_404_raises_not_found(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(404, {"detail": "Company not found"})
        with pytest.raises(DataNotFoundError):
            api.get_company("ZZZZ")

    def test_429_raises_rate_limit(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(429, {"detail": "rate_limit"})
        with pytest.raises(RateLimitError):
            api.get_top_companies(10)

    def test_500_raises_upstream(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(500, {"detail": "Failed"})
        with pytest.raises(UpstreamError) as exc_info:
            api.get_historical_financials("AAPL")
        assert exc_info.value.status_code == 500

    def test_missing_series_are_empty(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(404, {"detail": "No historical data"})

        assert api.get_historical_market_cap("AAPL") == []
        assert api.get_historical_financials("AAPL") == []

    def test_connection_error_raises_upstream(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(UpstreamError):
            api.search("AAPL")


class TestRequests:
    def test_base_url_from_environment(self, monkeypatch, mock_http):
        monkeypatch.setenv("COMPARE_API_URL", "http://api.internal:9000")
        mock_client_class, mock_client = mock_http
        mock_client.get.return_value = _response(200, None)

        DashboardClient().search("AAPL")

        assert mock_client_class.call_args.kwargs["base_url"] == "http://api.internal:9000"

    def test_search_null_body_is_none(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(200, None)

        assert api.search("aapl") is None
        assert mock_client.get.call_args.kwargs["params"] == {"q": "AAPL"}

    def test_search_limited_company(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(
            200,
            {"symbol": "BRK-B", "companyName": "Berkshire", "marketCap": 1e12,
             "beta": 0.8, "isLimited": True},
        )

        company = api.search("BRK-B")
        assert isinstance(company, LimitedCompanyData)
        assert company.market_cap == 1e12

    def test_top_companies_params(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(
            200,
            [{"symbol": "NVDA", "companyName": "NVIDIA", "marketCap": 3e12,
              "revenueTTM": 1e11, "earningsTTM": 5e10, "fcfTTM": 4e10, "beta": 1.7,
              "operatingMargin": 0.6, "peRatio": 50.0, "debtToEquity": 0.2,
              "isLimited": False}],
        )

        companies = api.get_top_companies(5, ["Semiconductors", "Software - Application"], quick=False)

        path = mock_client.get.call_args.args[0]
        params = mock_client.get.call_args.kwargs["params"]
        assert path == "/top-companies"
        assert params == {
            "limit": 5,
            "quick": "false",
            "industries": "Semiconductors,Software - Application",
        }
        assert isinstance(companies[0], CompanyData)
        assert companies[0].revenue_ttm == 1e11

    def test_historical_market_cap(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(
            200, [{"symbol": "AAPL", "date": "2024-01-02", "marketCap": 2.9e12}]
        )

        points = api.get_historical_market_cap("aapl", mode="exact")

        assert mock_client.get.call_args.args[0] == "/historical/AAPL"
        assert mock_client.get.call_args.kwargs["params"] == {"mode": "exact"}
        assert points[0].market_cap == 2.9e12

    def test_historical_financials(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(
            200,
            [{"symbol": "AAPL", "date": "2024-09-28", "quarter": "2024-Q3",
              "revenue": 94.9e9, "netIncome": 14.7e9}],
        )

        statements = api.get_historical_financials("AAPL")
        assert statements[0].net_income == 14.7e9
        assert statements[0].calendar_quarter == "2024-Q3"

    def test_search_companies(self, api, mock_http):
        _, mock_client = mock_http
        mock_client.get.return_value = _response(
            200,
            [{"symbol": "AAPL", "name": "Apple Inc.", "currency": "USD",
              "exchange": "NASDAQ", "exchangeFullName": "NASDAQ Global Select"}],
        )

        results = api.search_companies("apple")
        assert results[0].exchange_full_name == "NASDAQ Global Select"


class TestChartingWithMissingDataset:
    def test_market_cap_chart_without_financials(self, api, mock_http):
        """A symbol with prices but no income statements still charts by market cap."""
        _, mock_client = mock_http
        history = [
            {"symbol": "AAA", "date": f"2024-01-{d:02d}", "marketCap": 1e9 * d}
            for d in range(1, 7)
        ]

        def get(path, params=None):
            if path == "/historical/AAA":
                return _response(200, history)
            return _response(404, {"detail": "No historical data"})

        mock_client.get.side_effect = get
        view = ComparisonView(ChartDataCache(api))

        chart = view.show("AAA", None, ChartMetric.MARKET_CAP)
        assert [p.label for p in chart.points] == ["2024-01-01", "2024-01-06"]

        requests_before = mock_client.get.call_count
        revenue = view.set_metric(ChartMetric.REVENUE)
        assert revenue.points == ()
        assert mock_client.get.call_count == requests_before
