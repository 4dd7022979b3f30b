"""
Feedback Page

Collect quick votes and comments; saved to the local feedback log.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.feedback import FeedbackError, FeedbackLog, VOTES
from bizpulse.ui.state import init_state
from bizpulse.ui.components import section_header


st.set_page_config(page_title="Feedback", page_icon="💬", layout="wide")

init_state()


def render_stats(log: FeedbackLog):
    stats = log.stats()
    cols = st.columns(1 + len(VOTES))
    with cols[0]:
        st.metric("Total responses", stats["total"])
    for col, vote in zip(cols[1:], VOTES):
        with col:
            st.metric(vote, stats[vote])


def main():
    st.title("Feedback")
    st.caption("Customer validation evidence: feedback is saved locally.")

    log = FeedbackLog()

    render_stats(log)

    st.markdown("---")
    section_header("Was the dashboard useful?")

    comment = st.text_area(
        "Comment",
        placeholder="What would make this product useful for your business?",
        key="feedback_comment",
    )

    cols = st.columns(len(VOTES))
    for col, vote in zip(cols, VOTES):
        with col:
            if st.button(vote, use_container_width=True, key=f"vote_{vote}"):
                try:
                    log.add(vote, comment)
                    st.success("Thanks! Your feedback was saved.")
                except FeedbackError as e:
                    st.error(str(e))

    st.markdown("---")
    section_header("Recent responses")

    items = log.items()[:10]
    if not items:
        st.info("No feedback yet.")
    for item in items:
        st.markdown(f"**{item.vote}** · {item.created_at[:16].replace('T', ' ')}")
        st.caption(item.comment)

    if items and st.button("Clear all", key="feedback_clear"):
        log.clear()
        st.rerun()

    st.markdown("---")
    st.page_link("app.py", label="Back to dashboard", icon="📊")
    st.page_link("pages/3_Feedback_Log.py", label="Full feedback log", icon="🗂️")


if __name__ == "__main__":
    main()
