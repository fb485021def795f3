"""Tests for the comparison chart view."""

import threading

import pytest

from compare_api.core.fmp.models import MarketCapPoint, QuarterlyFinancials
from compare_api.dashboard.chart import ChartMetric
from compare_api.dashboard.chart_cache import ChartDataCache
from compare_api.dashboard.comparison import ComparisonView


def _seed(fake_api, symbol: str):
    fake_api.market_caps[symbol] = [
        MarketCapPoint(symbol, f"2024-01-{d:02d}", float(d)) for d in range(1, 11)
    ]
    fake_api.financials[symbol] = [
        QuarterlyFinancials(symbol, "2024-03-31", revenue=10.0, net_income=1.0),
        QuarterlyFinancials(symbol, "2024-06-30", revenue=20.0, net_income=2.0),
    ]


class TestComparisonView:
    def test_show_two_companies(self, fake_api):
        _seed(fake_api, "AAPL")
        _seed(fake_api, "MSFT")
        view = ComparisonView(ChartDataCache(fake_api))

        chart = view.show("aapl", "msft")

        assert chart.symbol_a == "AAPL"
        assert chart.symbol_b == "MSFT"
        assert [p.label for p in chart.points] == ["2024-01-01", "2024-01-06"]
        assert view.current is chart

    def test_show_single_company(self, fake_api):
        _seed(fake_api, "AAPL")
        chart = ComparisonView(ChartDataCache(fake_api)).show("AAPL", metric=ChartMetric.REVENUE)

        assert chart.symbol_b is None
        assert [p.values for p in chart.points] == [{"AAPL": 10.0}, {"AAPL": 20.0}]

    def test_switching_metric_makes_no_network_calls(self, fake_api):
        _seed(fake_api, "AAPL")
        _seed(fake_api, "MSFT")
        view = ComparisonView(ChartDataCache(fake_api))
        view.show("AAPL", "MSFT")
        fake_api.calls.clear()

        revenue = view.set_metric(ChartMetric.REVENUE)
        earnings = view.set_metric(ChartMetric.EARNINGS)

        assert fake_api.calls == []
        assert [p.label for p in revenue.points] == ["2024-Q1", "2024-Q2"]
        assert earnings.points[1].values == {"AAPL": 2.0, "MSFT": 2.0}

    def test_set_metric_without_chart(self, fake_api):
        assert ComparisonView(ChartDataCache(fake_api)).set_metric(ChartMetric.REVENUE) is None

    def test_entries_fetched_concurrently(self, fake_api):
        """Both companies' series are requested before either returns."""
        barrier = threading.Barrier(2, timeout=5)
        fake_api.before_return["get_historical_financials"] = lambda *_: barrier.wait()

        chart = ComparisonView(ChartDataCache(fake_api)).show("AAPL", "MSFT")
        assert chart is not None

    def test_stale_comparison_is_discarded(self, fake_api):
        """A chart superseded while loading is not applied."""
        _seed(fake_api, "AAPL")
        _seed(fake_api, "NVDA")
        view = ComparisonView(ChartDataCache(fake_api))
        switched = []

        def switch(symbol):
            if symbol == "AAPL" and not switched:
                switched.append(True)
                view.show("NVDA")

        fake_api.before_return["get_historical_financials"] = switch

        assert view.show("AAPL") is None
        assert view.current.symbol_a == "NVDA"

    def test_comparing_company_with_itself_is_rejected(self, fake_api):
        _seed(fake_api, "AAPL")
        view = ComparisonView(ChartDataCache(fake_api))

        with pytest.raises(ValueError, match="itself"):
            view.show("AAPL", " aapl ")

        assert fake_api.calls == []
        assert view.current is None
