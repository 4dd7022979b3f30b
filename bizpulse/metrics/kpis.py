"""
KPI engine.

Single source of truth for: revenue, cost, profit, margin%, orders, AOV,
top product, mapping warnings and recommendations.
"""
import pandas as pd
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from bizpulse.config import NO_PRODUCT, UNKNOWN_PRODUCT
from bizpulse.data.parsing import parse_number


WARN_NO_REVENUE = "Revenue column is not selected. Revenue assumed as 0."
WARN_NO_COSTS = "No cost columns selected. Cost assumed as 0 (profit may look inflated)."

REC_CHECK_MAPPING = (
    "Revenue is 0 (or revenue column not selected). "
    "Select the correct revenue column or check your data."
)
REC_LOSS = [
    "You're operating at a loss. Identify the largest expense categories and cut non-essential spend.",
    "Focus on your most profitable offers; pause low-margin products/services.",
    "Avoid heavy discounting unless you can keep margins positive.",
]
REC_GROWTH = [
    "You're profitable. Reinvest in the best ROI channels and monitor cost growth weekly.",
    "Increase average order value via bundles, upsells, or minimum-order incentives.",
]
REC_THIN_MARGIN = (
    "Margin is thin (<10%). Consider pricing adjustments, supplier negotiation, "
    "or reducing variable costs."
)
REC_TOP_PRODUCT = 'Top product is "{product}". Prevent stockouts and consider promoting it more.'

THIN_MARGIN_PCT = 10


@dataclass(frozen=True)
class KpiResult:
    """Aggregate financial metrics for one table + mapping."""
    revenue: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    margin_pct: float = 0.0
    order_count: int = 0
    avg_order_value: float = 0.0
    top_product: str = NO_PRODUCT
    top_product_revenue: float = 0.0
    warnings: tuple = field(default_factory=tuple)
    recommendations: tuple = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        data["recommendations"] = list(self.recommendations)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KpiResult":
        return cls(
            revenue=float(data.get("revenue", 0.0)),
            cost=float(data.get("cost", 0.0)),
            profit=float(data.get("profit", 0.0)),
            margin_pct=float(data.get("margin_pct", 0.0)),
            order_count=int(data.get("order_count", 0)),
            avg_order_value=float(data.get("avg_order_value", 0.0)),
            top_product=str(data.get("top_product", NO_PRODUCT)),
            top_product_revenue=float(data.get("top_product_revenue", 0.0)),
            warnings=tuple(data.get("warnings", [])),
            recommendations=tuple(data.get("recommendations", [])),
        )


def parse_column(df: pd.DataFrame, column: Optional[str]) -> pd.Series:
    """Parsed numeric values of a column (all zeros when the column is unset)."""
    if not column or column not in df.columns:
        return pd.Series(0.0, index=df.index, dtype=float)
    return df[column].map(parse_number).astype(float)


def row_costs(df: pd.DataFrame, cost_columns: Sequence[str]) -> pd.Series:
    """Per-row cost: sum of every selected cost column."""
    total = pd.Series(0.0, index=df.index, dtype=float)
    for col in cost_columns:
        total = total + parse_column(df, col)
    return total


def top_product(df: pd.DataFrame, product_column: Optional[str],
                revenue: pd.Series) -> tuple:
    """
    Product with the strictly greatest accumulated revenue.

    Returns (name, revenue). Ties go to the product seen first; nothing wins
    unless its revenue is above zero.
    """
    if not product_column or product_column not in df.columns or df.empty:
        return NO_PRODUCT, 0.0

    names = df[product_column].map(lambda v: str(v).strip() or UNKNOWN_PRODUCT)
    by_product = revenue.groupby(names, sort=False).sum()

    best_name, best_revenue = NO_PRODUCT, 0.0
    for name, value in by_product.items():
        if value > best_revenue:
            best_name, best_revenue = name, float(value)
    return best_name, best_revenue


def build_recommendations(revenue: float, profit: float, margin_pct: float,
                          product: str) -> List[str]:
    """Fixed rule table; output order is part of the contract."""
    recs: List[str] = []
    if revenue == 0:
        recs.append(REC_CHECK_MAPPING)
    elif profit < 0:
        recs.extend(REC_LOSS)
    else:
        recs.extend(REC_GROWTH)

    if 0 < margin_pct < THIN_MARGIN_PCT:
        recs.append(REC_THIN_MARGIN)
    if product != NO_PRODUCT:
        recs.append(REC_TOP_PRODUCT.format(product=product))
    return recs


def compute_kpis(df: pd.DataFrame,
                 revenue_column: Optional[str] = None,
                 cost_columns: Optional[Sequence[str]] = None,
                 product_column: Optional[str] = None) -> KpiResult:
    """
    Reduce a table to aggregate KPIs.

    - revenue: Σ parsed revenue cells
    - cost: Σ parsed cells of every cost column
    - profit: revenue - cost
    - margin_pct: profit / revenue * 100 (0 when revenue <= 0)
    - avg_order_value: revenue / rows (0 without rows)

    Columns missing from `df` count as unset.
    """
    if revenue_column not in df.columns:
        revenue_column = None
    if product_column not in df.columns:
        product_column = None
    cost_columns = [c for c in (cost_columns or []) if c in df.columns]

    warnings: List[str] = []
    if not revenue_column:
        warnings.append(WARN_NO_REVENUE)
    if not cost_columns:
        warnings.append(WARN_NO_COSTS)

    row_revenue = parse_column(df, revenue_column)
    revenue = float(row_revenue.sum())
    cost = float(row_costs(df, cost_columns).sum())
    orders = len(df)

    profit = revenue - cost
    margin_pct = profit / revenue * 100 if revenue > 0 else 0.0
    avg_order = revenue / orders if orders else 0.0

    product, product_revenue = top_product(df, product_column, row_revenue)

    return KpiResult(
        revenue=revenue,
        cost=cost,
        profit=profit,
        margin_pct=margin_pct,
        order_count=orders,
        avg_order_value=avg_order,
        top_product=product,
        top_product_revenue=product_revenue,
        warnings=tuple(warnings),
        recommendations=tuple(build_recommendations(revenue, profit, margin_pct, product)),
    )
