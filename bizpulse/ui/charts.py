"""
Standard chart wrappers using Plotly.
"""
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List

from bizpulse.metrics.trend import CostBreakdownEntry, TrendPoint, trend_frame
from bizpulse.ui.formatting import status_color


# =============================================================================
# CHART THEME
# =============================================================================

CHART_COLORS = {
    "primary": "#1f77b4",
    "secondary": "#ff7f0e",
    "success": "#28a745",
    "warning": "#ffc107",
    "danger": "#dc3545",
    "neutral": "#6c757d",
}

CHART_TEMPLATE = "plotly_white"

DEFAULT_LAYOUT = {
    "template": CHART_TEMPLATE,
    "font": {"family": "Arial, sans-serif", "size": 12},
    "margin": {"l": 50, "r": 30, "t": 40, "b": 50},
    "hoverlabel": {"bgcolor": "white"},
}


def apply_layout(fig: go.Figure, **kwargs) -> go.Figure:
    """Apply standard layout to figure."""
    layout = {**DEFAULT_LAYOUT, **kwargs}
    fig.update_layout(**layout)
    return fig


# =============================================================================
# HEALTH
# =============================================================================

def health_gauge(score: int, tone: str = "neutral", title: str = "Health score") -> go.Figure:
    """
    Gauge for the 0-100 health score, banded at the label thresholds.
    """
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        title={"text": title},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": status_color(tone)},
            "steps": [
                {"range": [0, 35], "color": "#fbe3e5"},
                {"range": [35, 55], "color": "#fff4d6"},
                {"range": [55, 75], "color": "#e0f3f6"},
                {"range": [75, 100], "color": "#e1f4e5"},
            ],
        },
    ))

    return apply_layout(fig, height=220)


# =============================================================================
# TREND
# =============================================================================

def trend_chart(points: List[TrendPoint], title: str = "Daily revenue & profit") -> go.Figure:
    """
    Revenue and profit lines per day bucket.
    """
    df = trend_frame(points)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["bucket_label"], y=df["revenue"], name="Revenue",
        mode="lines+markers", line={"color": CHART_COLORS["primary"]},
    ))
    fig.add_trace(go.Scatter(
        x=df["bucket_label"], y=df["profit"], name="Profit",
        mode="lines+markers", line={"color": CHART_COLORS["success"]},
    ))
    fig.add_hline(y=0, line={"dash": "dot", "color": CHART_COLORS["neutral"]})

    fig.update_layout(title=title, xaxis_title="", yaxis_title="Amount")

    return apply_layout(fig)


# =============================================================================
# COST BREAKDOWN
# =============================================================================

def cost_breakdown_bar(entries: List[CostBreakdownEntry],
                       title: str = "Cost breakdown") -> go.Figure:
    """
    Horizontal bar per cost column, largest on top.
    """
    df = pd.DataFrame(
        [e.to_dict() for e in entries],
        columns=["column_name", "total_value"],
    )

    fig = px.bar(
        df, x="total_value", y="column_name", orientation="h",
        title=title,
        text=[f"${v:,.0f}" for v in df["total_value"]],
    )

    fig.update_traces(textposition="outside", marker_color=CHART_COLORS["danger"])
    fig.update_layout(
        yaxis={"categoryorder": "total ascending", "title": ""},
        xaxis_title="Total",
    )

    return apply_layout(fig)
