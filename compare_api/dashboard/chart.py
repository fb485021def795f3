"""Align two companies' series for a comparison chart.

Market cap series are joined on exact calendar date and then thinned to
every 5th point; quarterly financials are joined on calendar quarter so
companies with different fiscal year ends line up. Both joins are inner:
only keys present for both companies survive.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from compare_api.core.fmp.models import MarketCapPoint, QuarterlyFinancials
from compare_api.dashboard.chart_cache import ChartEntry
from compare_api.domain.constants import CHART_SAMPLE_EVERY


class ChartMetric(str, Enum):
    """What the comparison chart plots."""

    MARKET_CAP = "market_cap"
    REVENUE = "revenue"
    EARNINGS = "earnings"


@dataclass(frozen=True)
class ChartPoint:
    """One x-axis position: a date or a calendar quarter."""

    label: str
    values: dict[str, float] = field(default_factory=dict)


def _downsample(points: list[ChartPoint], every: int) -> list[ChartPoint]:
    return [p for i, p in enumerate(points) if i % every == 0]


def _quarter_values(
    statements: Iterable[QuarterlyFinancials], metric: ChartMetric
) -> dict[str, float]:
    """Map calendar quarter -> metric value, the later statement winning."""
    values: dict[str, float] = {}
    for s in sorted(statements, key=lambda s: s.date):
        values[s.calendar_quarter] = s.net_income if metric == ChartMetric.EARNINGS else s.revenue
    return values


def merge_market_cap_series(
    series_a: Iterable[MarketCapPoint],
    series_b: Iterable[MarketCapPoint],
    sample_every: int = CHART_SAMPLE_EVERY,
) -> list[ChartPoint]:
    """Inner-join two market cap series on date, then downsample.

    Downsampling keeps the 1st, 6th, 11th... joined point; it runs after
    the join so both lines keep the same x positions.
    """
    a_by_date = {p.date: p for p in series_a}
    b_by_date = {p.date: p for p in series_b}

    joined = [
        ChartPoint(
            label=d,
            values={a_by_date[d].symbol: a_by_date[d].market_cap,
                    b_by_date[d].symbol: b_by_date[d].market_cap},
        )
        for d in sorted(a_by_date.keys() & b_by_date.keys())
    ]
    return _downsample(joined, sample_every)


def merge_quarterly_series(
    series_a: Iterable[QuarterlyFinancials],
    series_b: Iterable[QuarterlyFinancials],
    metric: ChartMetric,
) -> list[ChartPoint]:
    """Inner-join two quarterly series on calendar quarter (no downsampling)."""
    if metric == ChartMetric.MARKET_CAP:
        raise ValueError("merge_quarterly_series plots revenue or earnings only")

    series_a = list(series_a)
    series_b = list(series_b)
    if not series_a or not series_b:
        return []

    symbol_a = series_a[0].symbol
    symbol_b = series_b[0].symbol
    a_values = _quarter_values(series_a, metric)
    b_values = _quarter_values(series_b, metric)

    return [
        ChartPoint(label=q, values={symbol_a: a_values[q], symbol_b: b_values[q]})
        for q in sorted(a_values.keys() & b_values.keys())
    ]


def build_single_series(entry: ChartEntry, metric: ChartMetric) -> list[ChartPoint]:
    """Chart points for one company on its own."""
    if metric == ChartMetric.MARKET_CAP:
        points = [
            ChartPoint(label=p.date, values={p.symbol: p.market_cap})
            for p in sorted(entry.market_cap, key=lambda p: p.date)
        ]
        return _downsample(points, CHART_SAMPLE_EVERY)

    values = _quarter_values(entry.financials, metric)
    return [ChartPoint(label=q, values={entry.symbol: values[q]}) for q in sorted(values)]


def build_chart(
    entry_a: ChartEntry, entry_b: ChartEntry | None, metric: ChartMetric
) -> list[ChartPoint]:
    """Build chart points for one or two cached ChartEntry objects.

    Args:
        entry_a: ChartEntry of the primary company
        entry_b: ChartEntry of the comparison company, or None
        metric: Metric to plot

    Returns:
        Chart points in ascending x order.
    """
    if entry_b is None:
        return build_single_series(entry_a, metric)
    if metric == ChartMetric.MARKET_CAP:
        return merge_market_cap_series(entry_a.market_cap, entry_b.market_cap)
    return merge_quarterly_series(entry_a.financials, entry_b.financials, metric)
