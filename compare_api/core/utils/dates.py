"""Date parsing and quarter bucketing utilities."""

from datetime import date


def parse_iso_date(value: str | date) -> date:
    """Parse a provider date string.

    FMP returns plain `YYYY-MM-DD` dates, occasionally with a time part
    (`YYYY-MM-DD HH:MM:SS`); only the date part is kept.

    Args:
        value: Date string or date

    Returns:
        Parsed date
    """
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def calendar_quarter(value: str | date) -> str:
    """Map a date to its calendar quarter key, e.g. "2024-Q4".

    The quarter comes from the calendar month only (Q1 = Jan-Mar ...
    Q4 = Oct-Dec), so companies with different fiscal year ends line up.
    """
    d = parse_iso_date(value)
    return f"{d.year}-Q{(d.month - 1) // 3 + 1}"
