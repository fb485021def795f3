"""Formatting utilities for display."""


def format_currency(value: float | None) -> str:
    """Format a dollar amount with T/B/M suffix.

    Args:
        value: Amount in dollars (may be negative)

    Returns:
        Formatted string like "$2.95T", "-$1.20B", or "$950,000"
    """
    if value is None:
        return "N/A"
    sign = "-" if value < 0 else ""
    abs_value = abs(value)
    if abs_value >= 1e12:
        return f"{sign}${abs_value / 1e12:.2f}T"
    elif abs_value >= 1e9:
        return f"{sign}${abs_value / 1e9:.2f}B"
    elif abs_value >= 1e6:
        return f"{sign}${abs_value / 1e6:.2f}M"
    return f"{sign}${abs_value:,.0f}"


def format_market_cap(value: float) -> str:
    """Compact market cap label for chart axes, e.g. "$2.9T" or "$350B"."""
    if value >= 1e12:
        return f"${value / 1e12:.1f}T"
    elif value >= 1e9:
        return f"${value / 1e9:.0f}B"
    return f"${value / 1e6:.0f}M"


def format_percent(value: float | None) -> str:
    """Format a ratio (0.153) as a percentage ("15.3%")."""
    if value is None:
        return "N/A"
    return f"{value * 100:.1f}%"


def format_ratio(value: float | None, decimals: int = 2) -> str:
    """Format a plain ratio such as P/E or beta."""
    if value is None:
        return "N/A"
    return f"{value:.{decimals}f}"
