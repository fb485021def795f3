"""Comparison chart state: which companies and which metric are shown."""

import concurrent.futures
import logging
from dataclasses import dataclass

from compare_api.core.utils.symbols import normalize_symbol
from compare_api.dashboard.chart import ChartMetric, ChartPoint, build_chart
from compare_api.dashboard.chart_cache import ChartDataCache, ChartEntry
from compare_api.dashboard.generation import ViewGeneration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartView:
    symbol_a: str
    symbol_b: str | None
    metric: ChartMetric
    points: tuple[ChartPoint, ...]


class ComparisonView:
    """One comparison chart backed by a ChartDataCache.

    Series always come through the cache, so changing the metric of a chart
    whose companies are resident costs no network calls.
    """

    def __init__(self, cache: ChartDataCache):
        self.cache = cache
        self.generation = ViewGeneration()
        self.current: ChartView | None = None

    def _entries(
        self, symbol_a: str, symbol_b: str | None
    ) -> tuple[ChartEntry, ChartEntry | None]:
        if symbol_b is None:
            return self.cache.get(symbol_a), None

        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
            future_a = pool.submit(self.cache.get, symbol_a)
            future_b = pool.submit(self.cache.get, symbol_b)
            return future_a.result(), future_b.result()

    def show(
        self,
        symbol_a: str,
        symbol_b: str | None = None,
        metric: ChartMetric = ChartMetric.MARKET_CAP,
    ) -> ChartView | None:
        """Chart one company, or two against each other.

        Returns:
            The new view, or None if a later show() superseded this one.

        Raises:
            ValueError: if both symbols name the same company
            Whatever the cache raises when fetching a missing symbol.
        """
        symbol_a = normalize_symbol(symbol_a)
        if symbol_b is not None:
            symbol_b = normalize_symbol(symbol_b)
            if symbol_b == symbol_a:
                raise ValueError(f"Cannot compare {symbol_a} with itself")

        token = self.generation.advance()
        entry_a, entry_b = self._entries(symbol_a, symbol_b)

        if not self.generation.is_current(token):
            logger.info(f"Discarding stale comparison {symbol_a} vs {symbol_b}")
            return None

        view = ChartView(
            symbol_a=entry_a.symbol,
            symbol_b=entry_b.symbol if entry_b is not None else None,
            metric=metric,
            points=tuple(build_chart(entry_a, entry_b, metric)),
        )
        self.current = view
        return view

    def set_metric(self, metric: ChartMetric) -> ChartView | None:
        """Re-plot the current companies with another metric."""
        if self.current is None:
            return None
        return self.show(self.current.symbol_a, self.current.symbol_b, metric)
