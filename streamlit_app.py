"""
JournalTask Streamlit UI

Journal input on the left, extracted tasks and their dependencies on the right.
"""

import streamlit as st

from journaltask import __version__, get_data_dir
from journaltask.logging_setup import setup_logging
from journaltask.streamlit_ui import (
    CUSTOM_CSS,
    HELP_TEXT,
    initialize_session_state,
    render_left_panel,
    render_right_panel,
)

# Page configuration
st.set_page_config(
    page_title="JournalTask",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


@st.cache_resource
def _configure_logging() -> None:
    setup_logging(get_data_dir())


def main():
    _configure_logging()
    initialize_session_state()

    title_col, help_col = st.columns([6, 1])
    with title_col:
        st.markdown(f"## 📝 JournalTask <small>v{__version__}</small>", unsafe_allow_html=True)
    with help_col:
        with st.popover("❓ Help"):
            st.markdown(HELP_TEXT)

    left_col, right_col = st.columns([1, 2], gap="large")

    with left_col:
        render_left_panel()

    with right_col:
        render_right_panel()


if __name__ == "__main__":
    main()
