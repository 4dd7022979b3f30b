"""
Feedback Log Page

All saved responses, for reviewing validation evidence.
"""
import pandas as pd
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.config import config
from bizpulse.feedback import FeedbackLog, VOTES
from bizpulse.ui.state import init_state


st.set_page_config(page_title="Feedback Log", page_icon="🗂️", layout="wide")

init_state()


def main():
    st.title("Feedback Log")
    st.caption("Saved user responses (local feedback store).")

    log = FeedbackLog()
    stats = log.stats()

    cols = st.columns(1 + len(VOTES))
    with cols[0]:
        st.metric("Total responses", stats["total"])
    for col, vote in zip(cols[1:], VOTES):
        with col:
            st.metric(vote, stats[vote])

    items = log.items()
    if not items:
        st.info("No feedback saved yet.")
    else:
        df = pd.DataFrame([item.to_dict() for item in items])
        st.dataframe(
            df[["created_at", "vote", "comment"]],
            use_container_width=True,
            hide_index=True,
        )
        st.download_button(
            "Download CSV",
            data=df.to_csv(index=False).encode("utf-8"),
            file_name="feedback_log.csv",
            mime="text/csv",
        )

        if not config.is_prod and st.button("Clear log"):
            log.clear()
            st.rerun()

    st.markdown("---")
    st.page_link("pages/2_Feedback.py", label="Back to feedback", icon="💬")


if __name__ == "__main__":
    main()
