"""Per-symbol cache of chart series with bounded size.

Every chart render needs two series per company: market cap history and
quarterly financials. The cache keeps both for the most recently used
symbols so re-rendering a chart, or switching its metric, costs no network
calls.

Eviction is least-recently-used: a hit moves the symbol to the most recent
end, and inserting into a full cache first evicts from the least recent end.
Insert-then-evict runs under one lock so the order and the entries can never
diverge. A failed fetch stores nothing.

Concurrent misses for the same symbol are not coalesced: each one fetches,
and the last to finish wins.
"""

import concurrent.futures
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Protocol

from compare_api.core.fmp.models import MarketCapPoint, QuarterlyFinancials
from compare_api.core.utils.symbols import normalize_symbol
from compare_api.domain.constants import CHART_CACHE_CAPACITY

logger = logging.getLogger(__name__)


class SeriesSource(Protocol):
    """Where the cache fetches series from (DashboardClient in production)."""

    def get_historical_market_cap(
        self, symbol: str, mode: str = "estimated"
    ) -> list[MarketCapPoint]:
        """Fetch market cap history for a symbol."""
        ...

    def get_historical_financials(self, symbol: str) -> list[QuarterlyFinancials]:
        """Fetch quarterly financials for a symbol."""
        ...


@dataclass(frozen=True)
class ChartEntry:
    """Both chart series of one symbol. Stored whole, never patched."""

    symbol: str
    market_cap: tuple[MarketCapPoint, ...]
    financials: tuple[QuarterlyFinancials, ...]


class ChartDataCache:
    """Bounded LRU cache of ChartEntry keyed by symbol."""

    def __init__(
        self,
        client: SeriesSource,
        capacity: int = CHART_CACHE_CAPACITY,
        mode: str = "estimated",
    ):
        """Initialize the cache.

        Args:
            client: Series fetcher
            capacity: Maximum resident entries
            mode: Market cap mode requested on a miss ("estimated" or "exact")
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.client = client
        self.capacity = capacity
        self.mode = mode
        self._entries: OrderedDict[str, ChartEntry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        with self._lock:
            return normalize_symbol(symbol) in self._entries

    def symbols(self) -> list[str]:
        """Resident symbols, least recently used first."""
        with self._lock:
            return list(self._entries)

    def peek(self, symbol: str) -> ChartEntry | None:
        """Return a resident entry without touching its recency."""
        with self._lock:
            return self._entries.get(normalize_symbol(symbol))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get(self, symbol: str) -> ChartEntry:
        """Return the chart series for a symbol, fetching on a miss.

        A hit refreshes the symbol's recency and makes no network call.

        Raises:
            Whatever the client raises on a miss; the cache is left as it was.
        """
        symbol = normalize_symbol(symbol)

        with self._lock:
            entry = self._entries.get(symbol)
            if entry is not None:
                self._entries.move_to_end(symbol)
                return entry

        logger.debug(f"Chart cache miss: {symbol}")
        entry = self._fetch(symbol)
        self._store(entry)
        return entry

    def _fetch(self, symbol: str) -> ChartEntry:
        """Fetch both series concurrently."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
            market_cap_future = pool.submit(
                self.client.get_historical_market_cap, symbol, self.mode
            )
            financials_future = pool.submit(self.client.get_historical_financials, symbol)
            market_cap = market_cap_future.result()
            financials = financials_future.result()

        return ChartEntry(
            symbol=symbol,
            market_cap=tuple(market_cap),
            financials=tuple(financials),
        )

    def _store(self, entry: ChartEntry) -> None:
        """Insert an entry, evicting least recently used entries if full."""
        with self._lock:
            if entry.symbol in self._entries:
                # Another fetch for this symbol landed first; last write wins
                self._entries[entry.symbol] = entry
                self._entries.move_to_end(entry.symbol)
                return

            while len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Chart cache evicted {evicted}")
            self._entries[entry.symbol] = entry
