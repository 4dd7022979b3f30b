"""
Daily trend series and cost breakdown.
"""
import pandas as pd
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from bizpulse.config import config
from bizpulse.data.parsing import parse_date, bucket_label
from bizpulse.metrics.kpis import parse_column, row_costs


@dataclass(frozen=True)
class TrendPoint:
    bucket_label: str
    revenue: float
    cost: float
    profit: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrendPoint":
        return cls(
            bucket_label=str(data["bucket_label"]),
            revenue=float(data["revenue"]),
            cost=float(data["cost"]),
            profit=float(data["profit"]),
        )


@dataclass(frozen=True)
class CostBreakdownEntry:
    column_name: str
    total_value: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CostBreakdownEntry":
        return cls(column_name=str(data["column_name"]), total_value=float(data["total_value"]))


def group_trend(df: pd.DataFrame,
                date_column: Optional[str],
                revenue_column: Optional[str],
                cost_columns: Optional[Sequence[str]] = None,
                max_points: Optional[int] = None) -> List[TrendPoint]:
    """
    Bucket rows by calendar day and sum revenue/cost per day.

    Rows with an unreadable date are left out of the trend. Only the most
    recent `max_points` days are kept (earliest dropped first).
    """
    if not date_column or not revenue_column or df.empty:
        return []
    if date_column not in df.columns or revenue_column not in df.columns:
        return []
    if max_points is None:
        max_points = config.trend_max_points

    days = df[date_column].map(parse_date)
    valid = days.notna()
    if not valid.any():
        return []

    frame = pd.DataFrame({
        "bucket": days[valid].map(bucket_label),
        "revenue": parse_column(df, revenue_column)[valid],
        "cost": row_costs(df, list(cost_columns or []))[valid],
    })

    daily = frame.groupby("bucket", sort=True)[["revenue", "cost"]].sum()
    daily["profit"] = daily["revenue"] - daily["cost"]
    daily = daily.tail(max_points)

    return [
        TrendPoint(
            bucket_label=bucket,
            revenue=float(row.revenue),
            cost=float(row.cost),
            profit=float(row.profit),
        )
        for bucket, row in daily.iterrows()
    ]


def trend_frame(points: Sequence[TrendPoint]) -> pd.DataFrame:
    """Trend points as a dataframe (for charts and CSV export)."""
    return pd.DataFrame(
        [p.to_dict() for p in points],
        columns=["bucket_label", "revenue", "cost", "profit"],
    )


def cost_breakdown(df: pd.DataFrame,
                   cost_columns: Optional[Sequence[str]]) -> List[CostBreakdownEntry]:
    """Total per cost column, largest first; ties keep column order."""
    entries = [
        CostBreakdownEntry(column_name=col, total_value=float(parse_column(df, col).sum()))
        for col in (cost_columns or [])
    ]
    return sorted(entries, key=lambda e: e.total_value, reverse=True)
