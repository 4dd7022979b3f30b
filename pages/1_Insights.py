"""
Insights Page

How the dashboard turns KPI patterns into recommendations.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.ui.state import init_state
from bizpulse.ui.components import section_header
from bizpulse.ui.formatting import status_badge


st.set_page_config(page_title="Insights", page_icon="💡", layout="wide")

init_state()


INSIGHTS = [
    {
        "tag": "Profitability",
        "title": "Detect profit/loss state",
        "text": "If profit is negative, recommend cutting costs and focusing on high-margin offers.",
        "impact": "High",
    },
    {
        "tag": "Costs",
        "title": "Multi-cost aggregation",
        "text": "Supports multiple cost columns to match real business spreadsheets.",
        "impact": "High",
    },
    {
        "tag": "Growth",
        "title": "Monitor margins over time",
        "text": "Thin margins (<10%) trigger pricing/cost recommendations.",
        "impact": "Medium",
    },
    {
        "tag": "Inventory",
        "title": "Top product prioritization",
        "text": "When a product column is selected, highlight the best-performing product to avoid stockouts.",
        "impact": "Medium",
    },
]

IMPACT_TONES = {"High": "good", "Medium": "neutral", "Low": "warning"}


def main():
    st.title("Insights")
    st.caption("Insights are derived from KPI patterns (profit/loss, margin, cost mix) to guide SME decisions.")

    cols = st.columns(2)
    for i, insight in enumerate(INSIGHTS):
        with cols[i % 2]:
            with st.container(border=True):
                st.markdown(
                    f"`{insight['tag']}` "
                    + status_badge(f"Impact: {insight['impact']}", IMPACT_TONES[insight["impact"]]),
                    unsafe_allow_html=True,
                )
                st.markdown(f"**{insight['title']}**")
                st.caption(insight["text"])

    st.markdown("---")

    # =========================================================================
    # SCORING METHOD
    # =========================================================================
    section_header("Health score method", "Base 50, then one adjustment per rule group; clamped to 0–100.")

    st.markdown("""
    | Signal | Condition | Points |
    |--------|-----------|--------|
    | Profit | loss / profitable | −30 / +20 |
    | Margin | <0% / 0–10% / 10–25% / 25%+ | −10 / −10 / +5 / +15 |
    | Cost ratio | >95% / 80–95% / <60% of revenue | −15 / −5 / +10 |
    | Volume | ≥200 orders / <20 orders | +5 / −5 |
    | AOV | under $20 / $100+ | −3 / +3 |

    **Labels:** below 35 Critical, below 55 At-Risk, below 75 Stable, otherwise Growing.
    """)

    st.markdown("---")
    st.page_link("app.py", label="Back to dashboard", icon="📊")
    st.page_link("pages/2_Feedback.py", label="Leave feedback", icon="💬")


if __name__ == "__main__":
    main()
