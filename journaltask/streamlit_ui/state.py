"""
Streamlit session state management.

Centralizes all session state initialization and management functions.
"""

import streamlit as st

from journaltask.sync import build_orchestrator
from journaltask.config import get_data_dir
from journaltask.store import SettingsStore


def initialize_session_state() -> None:
    """Initialize all Streamlit session state variables.

    This function should be called once at the start of the app to ensure
    all session state variables are properly initialized.
    """
    # Core sync state machine (loads persisted tasks and journal text once per session)
    if "orchestrator" not in st.session_state:
        st.session_state.orchestrator = build_orchestrator(get_data_dir())

    if "settings" not in st.session_state:
        st.session_state.settings = SettingsStore(st.session_state.orchestrator.store.storage)

    # Journal editor starts from the last synced text
    if "journal_editor" not in st.session_state:
        st.session_state.journal_editor = st.session_state.orchestrator.journal_content

    # Task view tab: "all", "todo" or "done"
    if "active_tab" not in st.session_state:
        st.session_state.active_tab = "all"

    # Drive picker state
    if "drive_files" not in st.session_state:
        st.session_state.drive_files = []
    if "drive_selected_id" not in st.session_state:
        st.session_state.drive_selected_id = None

    if "show_config" not in st.session_state:
        st.session_state.show_config = False


def set_pending_journal(text: str) -> None:
    """Queue text for the journal editor; applied before the editor renders on the next run."""
    st.session_state.pending_journal = text


def apply_pending_journal() -> None:
    if "pending_journal" in st.session_state:
        st.session_state.journal_editor = st.session_state.pop("pending_journal")


def reset_editor_state() -> None:
    """Empty the journal editor (after a workspace reset)."""
    set_pending_journal("")


def reset_picker_state() -> None:
    """Forget listed Drive files and the current selection."""
    st.session_state.drive_files = []
    st.session_state.drive_selected_id = None
