"""
Business Pulse

Main entry point for Streamlit app: upload -> map -> KPIs, health, trend.
"""
import logging
import streamlit as st
from pathlib import Path

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Business Pulse",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from bizpulse.analysis import AnalysisContext, run_analysis
from bizpulse.config import config, UPLOAD_EXTENSIONS
from bizpulse.data.loader import IngestionError, fetch_google_sheet, load_upload, sheets_csv_url
from bizpulse.demo import build_demo_data
from bizpulse.exports import export_report_json, export_trend_csv
from bizpulse.ui.charts import cost_breakdown_bar, trend_chart
from bizpulse.ui.components import (
    empty_state, render_data_preview, render_health_card, render_kpi_cards,
    render_mapping_controls, render_profit_badge, render_recommendations,
    render_warnings, section_header,
)
from bizpulse.ui.state import (
    get_mapping, get_state, get_table, init_state, load_table, set_import_error,
    set_mapping, set_state,
)

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def render_source_picker():
    """Sidebar: upload, Google Sheets import and demo datasets."""
    st.sidebar.header("Data source")

    source = st.sidebar.radio(
        "Source",
        ["Upload file (CSV/Excel)", "Import Google Sheets"],
        key="source_radio",
    )

    if source.startswith("Upload"):
        uploaded = st.sidebar.file_uploader(
            "Spreadsheet (headers in first row)",
            type=UPLOAD_EXTENSIONS,
            key="uploader",
        )
        if uploaded is not None and st.sidebar.button("Load file", type="primary"):
            try:
                load_table(load_upload(uploaded.name, uploaded.getvalue()))
            except IngestionError as e:
                set_import_error(str(e))
    else:
        sheet_input = st.sidebar.text_input(
            "Google Sheets URL or Spreadsheet ID",
            placeholder="https://docs.google.com/spreadsheets/d/...",
        )
        if st.sidebar.button("Import", type="primary"):
            set_state("sheets_url_hint", sheets_csv_url(sheet_input))
            with st.spinner("Importing sheet..."):
                try:
                    load_table(fetch_google_sheet(sheet_input))
                except IngestionError as e:
                    set_import_error(str(e))
        hint = get_state("sheets_url_hint")
        if hint:
            st.sidebar.caption(f"Export URL: `{hint}`")

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Try a demo**")
    c1, c2 = st.sidebar.columns(2)
    with c1:
        if st.button("Demo Loss ↘", use_container_width=True):
            load_table(build_demo_data("loss"))
    with c2:
        if st.button("Demo Growth ↗", use_container_width=True):
            load_table(build_demo_data("growth"))


def main():
    """Main app entry point."""

    init_state()

    render_source_picker()

    table = get_table()
    analysis = None
    if table is not None:
        analysis = run_analysis(AnalysisContext(table=table, mapping=get_mapping()))

    # Header
    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("Business Pulse")
        st.caption("Upload sales data → map columns → KPIs, health score and recommendations")
    with col2:
        render_profit_badge(analysis.kpis if analysis else None)
        if analysis is not None:
            report_bytes, report_name = export_report_json(analysis)
            st.download_button(
                "Export report",
                data=report_bytes,
                file_name=report_name,
                mime="application/json",
            )

    error = get_state("import_error")
    if error:
        st.error(error)

    if table is None:
        empty_state("Upload a CSV/Excel file, import a Google Sheet, or load a demo dataset.")
        return

    # =========================================================================
    # MAPPING
    # =========================================================================
    section_header("Column mapping", "Auto-detected from column names. Adjust if needed.")

    edited = render_mapping_controls(table, get_mapping())
    if edited != get_mapping():
        set_mapping(edited)
        st.rerun()

    with st.expander("Data preview", expanded=False):
        render_data_preview(table)

    kpis = analysis.kpis
    render_warnings(list(kpis.warnings))

    # =========================================================================
    # KPIs + HEALTH
    # =========================================================================
    st.markdown("---")
    render_kpi_cards(kpis, analysis.mapping)

    st.markdown("---")
    section_header("Business health")
    render_health_card(analysis.health)

    # =========================================================================
    # TREND + COSTS
    # =========================================================================
    st.markdown("---")
    col1, col2 = st.columns([3, 2])

    with col1:
        section_header("Trend", f"Last {config.trend_max_points} days with data")
        if analysis.trend:
            st.plotly_chart(trend_chart(analysis.trend), use_container_width=True)
            trend_bytes, trend_name = export_trend_csv(analysis.trend)
            st.download_button(
                "Download trend CSV", data=trend_bytes, file_name=trend_name, mime="text/csv",
            )
        else:
            st.info("Select a date column and a revenue column to see the trend.")

    with col2:
        section_header("Cost breakdown")
        if analysis.cost_breakdown:
            st.plotly_chart(cost_breakdown_bar(analysis.cost_breakdown), use_container_width=True)
        else:
            st.info("Select one or more cost columns.")

    # =========================================================================
    # RECOMMENDATIONS
    # =========================================================================
    st.markdown("---")
    section_header("Recommendations")
    render_recommendations(list(kpis.recommendations))

    st.markdown("---")
    st.page_link("pages/1_Insights.py", label="How insights work", icon="💡")
    st.page_link("pages/2_Feedback.py", label="Leave feedback", icon="💬")


if __name__ == "__main__":
    main()
