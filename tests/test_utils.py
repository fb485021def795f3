"""Tests for config, date, symbol and formatting utilities."""

from datetime import date

import pytest

from compare_api.core.config import (
    get_chart_cache_capacity,
    get_compare_api_url,
    get_estimated_years,
    get_fmp_base_url,
    resolve_exact_window,
    resolve_lookback_start,
)
from compare_api.core.utils import (
    calendar_quarter,
    format_currency,
    format_market_cap,
    format_percent,
    format_ratio,
    normalize_symbol,
    parse_csv_list,
    parse_iso_date,
)

# =============================================================================
# Dates
# =============================================================================


class TestCalendarQuarter:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-11-15", "2024-Q4"),
            ("2024-01-01", "2024-Q1"),
            ("2024-03-31", "2024-Q1"),
            ("2024-04-01", "2024-Q2"),
            ("2024-09-28", "2024-Q3"),
            ("2023-12-31 00:00:00", "2023-Q4"),
        ],
    )
    def test_bucketing(self, value, expected):
        assert calendar_quarter(value) == expected

    def test_parse_accepts_date(self):
        assert parse_iso_date(date(2024, 2, 29)) == date(2024, 2, 29)

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_iso_date("not-a-date")


# =============================================================================
# Config
# =============================================================================


class TestConfig:
    def test_defaults(self):
        assert get_fmp_base_url() == "https://financialmodelingprep.com/stable"
        assert get_compare_api_url() == "http://localhost:8000"
        assert get_estimated_years() == 10
        assert get_chart_cache_capacity() == 20

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("CHART_CACHE_CAPACITY", "5")
        monkeypatch.setenv("COMPARE_API_URL", "http://api:8000")
        assert get_chart_cache_capacity() == 5
        assert get_compare_api_url() == "http://api:8000"

    def test_non_positive_integer_rejected(self, monkeypatch):
        monkeypatch.setenv("ESTIMATED_MARKET_CAP_YEARS", "0")
        with pytest.raises(ValueError):
            get_estimated_years()

    def test_lookback_handles_leap_day(self):
        assert resolve_lookback_start(1, date(2024, 2, 29)) == date(2023, 2, 28)

    def test_exact_window(self, monkeypatch):
        monkeypatch.setenv("EXACT_MARKET_CAP_YEARS", "3")
        assert resolve_exact_window(date(2024, 6, 1)) == (date(2021, 6, 1), date(2024, 6, 1))


# =============================================================================
# Symbols
# =============================================================================


class TestSymbols:
    def test_normalize(self):
        assert normalize_symbol("  brk-b ") == "BRK-B"

    def test_parse_csv_list(self):
        assert parse_csv_list("Banks - Regional, ,Asset Management") == [
            "Banks - Regional",
            "Asset Management",
        ]

    @pytest.mark.parametrize("raw", [None, "", " , "])
    def test_parse_csv_list_empty(self, raw):
        assert parse_csv_list(raw) is None


# =============================================================================
# Formatting
# =============================================================================


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (2.95e12, "$2.95T"),
            (-1.2e9, "-$1.20B"),
            (383.3e6, "$383.30M"),
            (950_000, "$950,000"),
            (None, "N/A"),
        ],
    )
    def test_currency(self, value, expected):
        assert format_currency(value) == expected

    def test_market_cap_axis_labels(self):
        assert format_market_cap(2.9e12) == "$2.9T"
        assert format_market_cap(350e9) == "$350B"
        assert format_market_cap(12e6) == "$12M"

    def test_percent_and_ratio(self):
        assert format_percent(0.153) == "15.3%"
        assert format_percent(None) == "N/A"
        assert format_ratio(31.456, 1) == "31.5"
        assert format_ratio(None) == "N/A"
