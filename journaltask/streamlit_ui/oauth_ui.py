"""
Google Drive import UI.

Lets the user save an OAuth Client ID, browse recent journal files and
import one into the journal editor. All import failures go through the
sync orchestrator, which classifies them.
"""

import streamlit as st

from journaltask.config import ImportConfig
from journaltask.gdrive import FileRef
from journaltask.importer import build_import_client
from journaltask.oauth import OAuthManager
from .state import reset_picker_state, set_pending_journal


def _session_chooser(files: list[FileRef]) -> FileRef | None:
    """Picker callback: remember the listed files, return the user's selection if any."""
    st.session_state.drive_files = files
    selected_id = st.session_state.drive_selected_id
    return next((f for f in files if f.id == selected_id), None)


def get_import_config() -> ImportConfig:
    return ImportConfig.resolve(stored_client_id=st.session_state.settings.get_client_id())


def run_import() -> None:
    """Run one import attempt; on success the text lands in the journal editor."""
    orchestrator = st.session_state.orchestrator
    text = orchestrator.import_journal(build_import_client(get_import_config(), chooser=_session_chooser))

    if text is not None:
        set_pending_journal(text)
        reset_picker_state()
        st.rerun()


def render_client_id_settings() -> None:
    """Render the OAuth Client ID form and sign-out button."""
    settings = st.session_state.settings

    client_id = st.text_input(
        "Google OAuth Client ID",
        value=settings.get_client_id() or "",
        help="OAuth 2.0 Client ID from Google Cloud Console (ends with .apps.googleusercontent.com)",
    )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("💾 Save Client ID", use_container_width=True):
            if client_id.strip():
                settings.set_client_id(client_id)
            else:
                settings.clear_client_id()
            st.success("Saved!")

    with col2:
        if st.button("🚪 Sign Out", use_container_width=True):
            config = get_import_config()
            if config.client_id:
                OAuthManager(config).clear_credentials()
            reset_picker_state()
            st.success("Signed out!")


def render_import_section() -> None:
    """Render the Drive browse/import controls."""
    st.markdown('<p class="section-header">Import</p>', unsafe_allow_html=True)

    orchestrator = st.session_state.orchestrator
    busy = orchestrator.state.is_syncing

    if st.button("📂 Browse Google Drive", disabled=busy, use_container_width=True, key="btn_browse_drive"):
        st.session_state.drive_selected_id = None
        run_import()

    files = st.session_state.drive_files
    if files:
        labels = {f.id: f.name for f in files}
        selected = st.selectbox(
            "Journal file",
            options=list(labels),
            format_func=lambda file_id: labels[file_id],
            key="drive_file_select",
        )

        col1, col2 = st.columns(2)
        with col1:
            if st.button("⬇️ Import", type="primary", disabled=busy, use_container_width=True):
                st.session_state.drive_selected_id = selected
                run_import()
        with col2:
            if st.button("Cancel", use_container_width=True, key="btn_cancel_import"):
                reset_picker_state()
                st.rerun()
