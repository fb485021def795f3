"""Ticker symbol utilities."""


def normalize_symbol(symbol: str) -> str:
    """Normalize a ticker for use as a key (strip + uppercase)."""
    return symbol.strip().upper()


def parse_csv_list(raw: str | None) -> list[str] | None:
    """Split a comma-separated query parameter (tickers, industries) into a list.

    Blank items are dropped. Returns None when nothing is left, meaning
    "no filter".
    """
    if not raw:
        return None
    items = [item.strip() for item in raw.split(",")]
    items = [item for item in items if item]
    return items or None
