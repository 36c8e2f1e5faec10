"""
Streamlit front end for JournalTask.

The session holds one SyncOrchestrator (state.py); panels.py draws the
journal and task columns, oauth_ui.py the Drive import and client ID
settings, styles.py the card CSS.
"""

from .state import initialize_session_state, reset_editor_state, reset_picker_state
from .panels import render_left_panel, render_right_panel, HELP_TEXT
from .styles import CUSTOM_CSS

__all__ = [
    # State management
    "initialize_session_state",
    "reset_editor_state",
    "reset_picker_state",
    # Panel rendering
    "render_left_panel",
    "render_right_panel",
    # Constants
    "CUSTOM_CSS",
    "HELP_TEXT",
]
