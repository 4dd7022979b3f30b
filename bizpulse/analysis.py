"""
Full re-derivation of every dashboard figure from (table, mapping).
"""
from dataclasses import dataclass, field
from typing import List

from bizpulse.data.mapping import ColumnRoleMapping
from bizpulse.data.schema import Table
from bizpulse.metrics.health import HealthResult, compute_health
from bizpulse.metrics.kpis import KpiResult, compute_kpis
from bizpulse.metrics.trend import (
    CostBreakdownEntry, TrendPoint, cost_breakdown, group_trend,
)


@dataclass(frozen=True, eq=False)
class AnalysisContext:
    """Inputs of one analysis run."""
    table: Table
    mapping: ColumnRoleMapping = field(default_factory=ColumnRoleMapping)

    @property
    def resolved_mapping(self) -> ColumnRoleMapping:
        return self.mapping.resolve(self.table.columns)


@dataclass(frozen=True, eq=False)
class Analysis:
    context: AnalysisContext
    mapping: ColumnRoleMapping
    kpis: KpiResult
    health: HealthResult
    trend: List[TrendPoint]
    cost_breakdown: List[CostBreakdownEntry]

    @property
    def table(self) -> Table:
        return self.context.table


def run_analysis(context: AnalysisContext) -> Analysis:
    """Run mapper resolution, KPIs, trend, breakdown and health in one pass."""
    mapping = context.resolved_mapping
    df = context.table.frame

    kpis = compute_kpis(
        df,
        revenue_column=mapping.revenue_column,
        cost_columns=mapping.cost_columns,
        product_column=mapping.product_column,
    )
    trend = group_trend(
        df,
        date_column=mapping.date_column,
        revenue_column=mapping.revenue_column,
        cost_columns=mapping.cost_columns,
    )
    breakdown = cost_breakdown(df, mapping.cost_columns)

    return Analysis(
        context=context,
        mapping=mapping,
        kpis=kpis,
        health=compute_health(kpis),
        trend=trend,
        cost_breakdown=breakdown,
    )
