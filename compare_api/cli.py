"""Terminal dashboard for the Compare API.

Run as:
    compare-dashboard sectors
    compare-dashboard search AAPL
    compare-dashboard sector technology --limit 20
    compare-dashboard compare AAPL MSFT --metric revenue
"""

import argparse
import logging

from rich.console import Console
from rich.table import Table

from compare_api.core.config import get_chart_cache_capacity
from compare_api.core.fmp.models import CompanyData, CompanyRecord
from compare_api.core.utils.formatting import (
    format_currency,
    format_market_cap,
    format_percent,
    format_ratio,
)
from compare_api.dashboard.chart import ChartMetric
from compare_api.dashboard.chart_cache import ChartDataCache
from compare_api.dashboard.client import DashboardClient
from compare_api.dashboard.comparison import ChartView, ComparisonView
from compare_api.dashboard.sector_loader import SectorLoader, SectorView
from compare_api.dashboard.sectors import SECTORS, SectorConfig, get_sector
from compare_api.domain.constants import MAX_TOP_COMPANIES_LIMIT, RATE_LIMIT_MESSAGE
from compare_api.domain.exceptions import CompareAPIError, DataNotFoundError, RateLimitError

console = Console()


def company_table(companies: list[CompanyRecord] | tuple[CompanyRecord, ...], title: str) -> Table:
    """Render company records as a table. Limited records show N/A financials."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Symbol", style="bold")
    table.add_column("Company")
    table.add_column("Market Cap", justify="right")
    table.add_column("Revenue (TTM)", justify="right")
    table.add_column("Earnings (TTM)", justify="right")
    table.add_column("FCF (TTM)", justify="right")
    table.add_column("Op. Margin", justify="right")
    table.add_column("P/E", justify="right")
    table.add_column("D/E", justify="right")
    table.add_column("Beta", justify="right")

    for i, c in enumerate(companies, start=1):
        if isinstance(c, CompanyData):
            financials = [
                format_currency(c.revenue_ttm),
                format_currency(c.earnings_ttm),
                format_currency(c.fcf_ttm),
                format_percent(c.operating_margin),
                format_ratio(c.pe_ratio, 1),
                format_ratio(c.debt_to_equity),
            ]
        else:
            financials = ["[dim]N/A[/]"] * 6
        table.add_row(
            str(i),
            c.symbol,
            c.company_name,
            format_currency(c.market_cap),
            *financials,
            format_ratio(c.beta),
        )
    return table


def chart_table(view: ChartView) -> Table:
    """Render chart points as a table, one column per company."""
    symbols = [view.symbol_a] + ([view.symbol_b] if view.symbol_b else [])
    title = " vs ".join(symbols) + f" ({view.metric.value})"
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Date" if view.metric == ChartMetric.MARKET_CAP else "Quarter", style="dim")
    for sym in symbols:
        table.add_column(sym, justify="right")

    fmt = format_market_cap if view.metric == ChartMetric.MARKET_CAP else format_currency
    for point in view.points:
        table.add_row(point.label, *(fmt(point.values[sym]) for sym in symbols))
    return table


def cmd_sectors(args: argparse.Namespace) -> int:
    table = Table(title="Sectors", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Label")
    table.add_column("Industries")
    for key, sector in SECTORS.items():
        table.add_row(key, sector.label, ", ".join(sector.industries or ("all",)))
    console.print(table)
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    client = DashboardClient(base_url=args.api_url)
    company = client.search(args.ticker)
    if company is None:
        matches = client.search_companies(args.ticker)
        if not matches:
            console.print("[yellow]Ticker not found[/]")
            return 1
        table = Table(title=f"Companies matching '{args.ticker}'", header_style="bold cyan")
        table.add_column("Symbol", style="bold")
        table.add_column("Name")
        table.add_column("Exchange")
        for m in matches:
            table.add_row(m.symbol, m.name, m.exchange)
        console.print(table)
        return 0

    console.print(company_table([company], title=company.company_name))
    return 0


def cmd_sector(args: argparse.Namespace) -> int:
    try:
        sector = get_sector(args.key)
    except KeyError as e:
        console.print(f"[bold red]Error:[/] {e.args[0]}")
        return 2
    if args.limit is not None:
        sector = SectorConfig(label=sector.label, industries=sector.industries, limit=args.limit)

    def on_update(view: SectorView) -> None:
        console.print(
            company_table(view.companies, title=f"{sector.label} ({view.phase.value})")
        )

    loader = SectorLoader(DashboardClient(base_url=args.api_url), on_update=on_update)
    with console.status(f"Loading {sector.label}..."):
        loader.load_sector(args.key.strip().lower(), sector)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    cache = ChartDataCache(
        DashboardClient(base_url=args.api_url),
        capacity=get_chart_cache_capacity(),
        mode=args.mode,
    )
    try:
        view = ComparisonView(cache).show(args.symbol_a, args.symbol_b, ChartMetric(args.metric))
    except ValueError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 2
    if view is None:
        return 1
    if not view.points:
        console.print("[yellow]No overlapping data to chart[/]")
        return 0
    console.print(chart_table(view))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compare-dashboard",
        description="Compare companies by market cap and financials",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Compare API base URL (default: COMPARE_API_URL or http://localhost:8000)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sectors = subparsers.add_parser("sectors", help="List sector chips")
    sectors.set_defaults(func=cmd_sectors)

    search = subparsers.add_parser("search", help="Look up a company by ticker")
    search.add_argument("ticker")
    search.set_defaults(func=cmd_search)

    sector = subparsers.add_parser("sector", help="Load the top companies of a sector")
    sector.add_argument("key", help=f"One of: {', '.join(SECTORS)}")
    sector.add_argument(
        "--limit",
        type=int,
        default=None,
        choices=range(1, MAX_TOP_COMPANIES_LIMIT + 1),
        metavar="N",
        help="Number of companies to load",
    )
    sector.set_defaults(func=cmd_sector)

    compare = subparsers.add_parser("compare", help="Chart one company or two side by side")
    compare.add_argument("symbol_a")
    compare.add_argument("symbol_b", nargs="?", default=None)
    compare.add_argument(
        "--metric",
        choices=[m.value for m in ChartMetric],
        default=ChartMetric.MARKET_CAP.value,
    )
    compare.add_argument("--mode", choices=["estimated", "exact"], default="estimated")
    compare.set_defaults(func=cmd_compare)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except RateLimitError:
        console.print(f"[yellow]{RATE_LIMIT_MESSAGE}[/]")
        return 1
    except DataNotFoundError as e:
        console.print(f"[yellow]Not found:[/] {e}")
        return 1
    except CompareAPIError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
