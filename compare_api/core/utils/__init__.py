"""Shared utility functions for compare_api core modules."""

from compare_api.core.utils.dates import calendar_quarter, parse_iso_date
from compare_api.core.utils.formatting import (
    format_currency,
    format_market_cap,
    format_percent,
    format_ratio,
)
from compare_api.core.utils.symbols import normalize_symbol, parse_csv_list

__all__ = [
    "calendar_quarter",
    "format_currency",
    "format_market_cap",
    "format_percent",
    "format_ratio",
    "normalize_symbol",
    "parse_iso_date",
    "parse_csv_list",
]
