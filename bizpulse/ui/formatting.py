"""
Consistent number and display formatting.
"""
import pandas as pd
from typing import Union


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def fmt_currency(value: Union[float, int, None], decimals: int = 2) -> str:
    """Format as currency: $1,234.56 or -$1,234.56"""
    if value is None or pd.isna(value):
        return "—"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def fmt_percent(value: Union[float, int, None], decimals: int = 1) -> str:
    """Format percentage: 12.3%"""
    if value is None or pd.isna(value):
        return "—"
    return f"{value:,.{decimals}f}%"


def fmt_count(value: Union[float, int, None]) -> str:
    """Format count: 1,234"""
    if value is None or pd.isna(value):
        return "—"
    return f"{int(value):,}"


# =============================================================================
# STATUS
# =============================================================================

STATUS_COLORS = {
    "good": "#28a745",
    "warning": "#ffc107",
    "bad": "#dc3545",
    "neutral": "#17a2b8",
}


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status.lower(), STATUS_COLORS["neutral"])


def status_badge(label: str, status: str) -> str:
    """Coloured pill HTML for a label."""
    color = status_color(status)
    return (
        f'<span style="background-color: {color}22; color: {color}; '
        f'border: 1px solid {color}; border-radius: 999px; padding: 2px 10px;">'
        f"{label}</span>"
    )
