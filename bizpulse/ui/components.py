"""
Reusable UI components and blocks.
"""
import streamlit as st
from typing import List, Optional

from bizpulse.config import config, NO_PRODUCT
from bizpulse.data.mapping import ColumnRoleMapping
from bizpulse.data.schema import Table
from bizpulse.metrics.health import HealthResult, health_tone
from bizpulse.metrics.kpis import KpiResult
from bizpulse.ui.charts import health_gauge
from bizpulse.ui.formatting import fmt_count, fmt_currency, fmt_percent, status_badge


NONE_OPTION = "— None —"


def section_header(title: str, description: Optional[str] = None):
    """Render section header with optional description."""
    st.subheader(title)
    if description:
        st.caption(description)


def empty_state(message: str, icon: str = "📭"):
    """Render centred empty state."""
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(f"### {icon}")
        st.markdown(f"**{message}**")


# =============================================================================
# MAPPING
# =============================================================================

def _single_select(label: str, columns: List[str], current: Optional[str], key: str) -> Optional[str]:
    options = [NONE_OPTION] + columns
    index = options.index(current) if current in columns else 0
    choice = st.selectbox(label, options, index=index, key=key)
    return None if choice == NONE_OPTION else choice


def render_mapping_controls(table: Table, mapping: ColumnRoleMapping) -> ColumnRoleMapping:
    """
    Render role pickers for the table and return the (possibly edited) mapping.

    Widget keys include the source name so a new upload starts from its own mapping.
    """
    columns = table.columns
    key = table.source_name or "table"

    c1, c2 = st.columns(2)
    with c1:
        date_col = _single_select("Date column", columns, mapping.date_column, f"map_date_{key}")
        revenue_col = _single_select("Revenue column", columns, mapping.revenue_column, f"map_revenue_{key}")
    with c2:
        product_col = _single_select("Product column", columns, mapping.product_column, f"map_product_{key}")
        cost_cols = st.multiselect(
            "Cost columns",
            columns,
            default=[c for c in mapping.cost_columns if c in columns],
            key=f"map_costs_{key}",
            help="Select every column that is an expense (COGS, rent, salary...).",
        )

    st.caption("Mapping is saved automatically for this data source.")

    return ColumnRoleMapping(
        revenue_column=revenue_col,
        cost_columns=tuple(cost_cols),
        product_column=product_col,
        date_column=date_col,
    )


def render_data_preview(table: Table):
    """First rows/columns of the upload."""
    st.caption(
        f"{table.source_name or 'Untitled'} • {fmt_count(table.row_count)} rows • "
        f"{len(table.columns)} columns"
    )
    st.dataframe(
        table.preview(config.preview_rows, config.preview_columns),
        use_container_width=True,
        hide_index=True,
    )


# =============================================================================
# KPI + HEALTH
# =============================================================================

def render_warnings(warnings: List[str]):
    if warnings:
        st.warning("\n".join(f"- {w}" for w in warnings))


def render_kpi_cards(kpis: KpiResult, mapping: ColumnRoleMapping):
    """Six KPI cards: revenue, cost, profit, margin, orders, AOV."""
    revenue_hint = f"Column: {mapping.revenue_column}" if mapping.revenue_column else "Select revenue"
    cost_hint = f"Columns: {len(mapping.cost_columns)}" if mapping.cost_columns else "Select costs"

    cards = [
        ("Revenue", fmt_currency(kpis.revenue), revenue_hint),
        ("Cost", fmt_currency(kpis.cost), cost_hint),
        ("Profit", fmt_currency(kpis.profit), "Revenue − Cost"),
        ("Margin", fmt_percent(kpis.margin_pct), "Profit / Revenue"),
        ("Orders", fmt_count(kpis.order_count), "Rows in dataset"),
        ("Avg order", fmt_currency(kpis.avg_order_value), "Revenue / Orders"),
    ]

    cols = st.columns(len(cards))
    for col, (label, value, hint) in zip(cols, cards):
        with col:
            st.metric(label=label, value=value, help=hint)

    if kpis.top_product != NO_PRODUCT:
        st.caption(
            f"Top product: **{kpis.top_product}** ({fmt_currency(kpis.top_product_revenue)} revenue)"
        )


def render_health_card(health: HealthResult):
    """Gauge, label badge, summary and drivers."""
    tone = health_tone(health.label)
    col1, col2 = st.columns([1, 2])

    with col1:
        st.plotly_chart(health_gauge(health.score, tone=tone), use_container_width=True)

    with col2:
        st.markdown(status_badge(health.label, tone), unsafe_allow_html=True)
        st.markdown(health.summary)
        for driver in health.drivers:
            st.markdown(f"- {driver}")


def render_recommendations(recommendations: List[str]):
    for i, rec in enumerate(recommendations, start=1):
        st.markdown(f"{i}. {rec}")


def render_profit_badge(kpis: Optional[KpiResult]):
    """Loss / Profitable pill for the page header."""
    if kpis is None:
        st.markdown(status_badge("No data", "neutral"), unsafe_allow_html=True)
    elif kpis.profit < 0:
        st.markdown(status_badge("Loss", "bad"), unsafe_allow_html=True)
    else:
        st.markdown(status_badge("Profitable", "good"), unsafe_allow_html=True)
