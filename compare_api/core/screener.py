"""Top companies by market cap, delivered in quick or full form.

Quick mode returns screener rows as limited records without any
per-company request. Full mode enriches every row with profile + ratios,
fetching in fixed-size batches: parallel inside a batch, strictly
sequential between batches, which bounds concurrent upstream requests to
the batch size.
"""

import concurrent.futures
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from compare_api.core.company import get_full_company_data
from compare_api.core.fmp.client import FMPClient
from compare_api.core.fmp.models import CompanyRecord, LimitedCompanyData, ScreenerResult
from compare_api.domain.constants import EXCLUDED_TICKERS, FULL_LOAD_BATCH_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_screener_results(
    results: Iterable[ScreenerResult],
    limit: int,
    excluded: frozenset[str] = EXCLUDED_TICKERS,
) -> list[ScreenerResult]:
    """Drop excluded tickers, then truncate to limit.

    Exclusion happens before truncation so the result still reaches
    `limit` whenever enough candidates exist.
    """
    kept = [r for r in results if r.symbol not in excluded]
    return kept[:limit]


def load_in_batches(
    symbols: list[str],
    fetch_one: Callable[[str], T | None],
    batch_size: int = FULL_LOAD_BATCH_SIZE,
) -> list[T]:
    """Fetch one item per symbol in sequential batches of parallel requests.

    A symbol whose fetch raises is logged and skipped; a None result is
    skipped as well. Output keeps the input order of the symbols that
    succeeded.

    Args:
        symbols: Symbols to fetch, in display order
        fetch_one: Fetch function for a single symbol
        batch_size: Maximum parallel fetches (one batch)

    Returns:
        Successfully fetched items.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    items: list[T] = []
    failed: list[str] = []

    with concurrent.futures.ThreadPoolExecutor(max_workers=batch_size) as pool:
        for start in range(0, len(symbols), batch_size):
            batch = symbols[start : start + batch_size]
            futures = [pool.submit(fetch_one, sym) for sym in batch]
            # Wait for the whole batch before submitting the next one
            concurrent.futures.wait(futures)

            for sym, future in zip(batch, futures):
                try:
                    result = future.result()
                except Exception as e:
                    logger.warning(f"Failed to fetch {sym}, skipping: {e}")
                    failed.append(sym)
                    continue
                if result is not None:
                    items.append(result)

    if failed:
        logger.info(f"Batch load skipped {len(failed)}/{len(symbols)} symbols: {failed}")
    return items


def get_top_companies(
    client: FMPClient,
    limit: int,
    industries: list[str] | None = None,
    quick: bool = False,
    batch_size: int = FULL_LOAD_BATCH_SIZE,
) -> list[CompanyRecord]:
    """Largest companies by market cap, optionally restricted to industries.

    Args:
        client: FMP client
        limit: Number of companies wanted
        industries: Optional industry allow-list
        quick: Return screener data only, as limited records
        batch_size: Parallel fetches per batch in full mode

    Returns:
        Company records in descending market cap order.

    Raises:
        RateLimitError / UpstreamError: if the screener query itself fails.
        Per-company failures in full mode are skipped, not raised.
    """
    # Ask for extra candidates so exclusions don't shrink the result
    candidates = client.screen_companies(limit + len(EXCLUDED_TICKERS), industries)
    selected = filter_screener_results(candidates, limit)

    if not selected:
        return []

    if quick:
        return [
            LimitedCompanyData(
                symbol=r.symbol,
                company_name=r.company_name,
                market_cap=r.market_cap,
                beta=r.beta,
            )
            for r in selected
        ]

    logger.info(
        f"Loading full data for {len(selected)} companies in batches of {batch_size}"
    )
    return load_in_batches(
        [r.symbol for r in selected],
        lambda sym: get_full_company_data(client, sym),
        batch_size=batch_size,
    )
