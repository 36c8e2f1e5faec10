"""
Main panel rendering for the Streamlit UI.

The left panel holds the journal input, import controls and statistics; the
right panel shows the error banner, the task tabs and the dependency list.
"""

from html import escape

import streamlit as st

from journaltask.models import Task, TaskStatus
from journaltask.prompts import EXAMPLE_JOURNAL
from journaltask.views import compute_stats, dependency_groups, filter_by_status
from .oauth_ui import render_client_id_settings, render_import_section
from .state import apply_pending_journal, reset_editor_state, reset_picker_state


HELP_TEXT = """JournalTask uses Claude AI to turn free-form journal entries into a task list with deadlines, urgency and dependencies.

**Journal conventions**
- `~~struck through~~` entries are marked done
- Entries marked **[URGENT]** or "critical" are flagged as high priority
- Phrases like "finish A before B" become task dependencies

**Update Workspace** replaces the whole task list with a fresh extraction. If extraction fails, your previous tasks stay in place.
"""

TABS = {
    "all": "Workspace",
    "todo": "To-Do List",
    "done": "Archive",
}


def render_journal_section() -> None:
    """Render the journal editor and the sync button."""
    orchestrator = st.session_state.orchestrator
    apply_pending_journal()

    header_col, example_col = st.columns([3, 1])
    with header_col:
        st.markdown('<p class="section-header">Journal Context</p>', unsafe_allow_html=True)
    with example_col:
        if st.button("Try Example", key="btn_example"):
            st.session_state.journal_editor = EXAMPLE_JOURNAL
            st.rerun()

    st.caption("AI will analyze your text to extract tasks, dates, and dependencies.")
    st.text_area(
        "Journal",
        key="journal_editor",
        height=280,
        placeholder="What's on your mind? List your progress and upcoming tasks...",
        label_visibility="collapsed",
    )

    content = st.session_state.journal_editor
    disabled = orchestrator.state.is_syncing or not content.strip()

    if st.button("✨ Update Workspace", type="primary", disabled=disabled, use_container_width=True, key="btn_sync"):
        with st.spinner("Processing Journal..."):
            orchestrator.sync(content)
        st.rerun()

    if orchestrator.last_synced_at:
        st.caption(f"Last sync: {orchestrator.last_synced_at:%H:%M}")


def render_stats_section() -> None:
    """Render completion statistics."""
    st.markdown('<p class="section-header">Productivity Stats</p>', unsafe_allow_html=True)

    tasks = st.session_state.orchestrator.tasks
    if not tasks:
        st.info("Insights will appear here once you sync your journal.")
        return

    stats = compute_stats(tasks)
    st.progress(stats.completion_ratio, text=f"{stats.completion_percent}% done")

    col1, col2 = st.columns(2)
    col1.metric("Total Tasks", stats.total)
    col2.metric("High Priority", stats.urgent)

    for col, item in zip(st.columns(2), stats.chart_data()):
        col.metric(item["name"], item["value"])


def render_left_panel() -> None:
    """Render the left control panel."""
    render_journal_section()
    render_import_section()
    render_stats_section()

    st.markdown('<p class="section-header">Settings</p>', unsafe_allow_html=True)
    with st.expander("⚙️ Google Drive", expanded=st.session_state.show_config):
        render_client_id_settings()

    if st.button("🗑️ Clear Workspace", use_container_width=True, key="btn_clear"):
        st.session_state.confirm_clear = True

    if st.session_state.get("confirm_clear"):
        st.warning("Are you sure you want to clear all tasks and content?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Yes, clear", type="primary", use_container_width=True):
                st.session_state.orchestrator.reset()
                reset_editor_state()
                reset_picker_state()
                st.session_state.confirm_clear = False
                st.rerun()
        with col2:
            if st.button("Keep", use_container_width=True):
                st.session_state.confirm_clear = False
                st.rerun()


def render_error_banner() -> None:
    orchestrator = st.session_state.orchestrator
    error = orchestrator.error
    if error is None:
        return

    col1, col2 = st.columns([12, 1])
    with col1:
        st.error(f"**Extraction Error** · `{error.category.tag}`\n\n{error.message}\n\n_{error.hint}_")
    with col2:
        if st.button("✕", key="btn_dismiss_error", help="Dismiss"):
            orchestrator.dismiss_error()
            st.rerun()


def render_task_card(task: Task) -> None:
    done = task.status is TaskStatus.DONE
    badge = '<span class="urgent-badge">URGENT</span>' if task.is_urgent and not done else ""
    meta = [escape(task.category)]
    if task.due_date:
        meta.append(f"📅 {escape(task.due_date)}")
    if task.dependencies:
        meta.append(f"🔗 {len(task.dependencies)} dependenc{'y' if len(task.dependencies) == 1 else 'ies'}")

    st.markdown(
        f'<div class="task-card{" done" if done else ""}">'
        f'<div class="task-title">{escape(task.title)}{badge}</div>'
        f'<div>{escape(task.description)}</div>'
        f'<div class="task-meta">{" · ".join(meta)}</div>'
        f"</div>",
        unsafe_allow_html=True,
    )


def render_dependencies(tasks: list[Task]) -> None:
    st.markdown('<p class="section-header">Task Dependencies</p>', unsafe_allow_html=True)

    groups = dependency_groups(tasks)
    if not groups:
        st.caption("No task dependencies detected.")
        return

    for task, predecessors in groups:
        chips = "".join(f'<span class="dep-chip">{escape(label)}</span>' for label in predecessors)
        st.markdown(f'{chips} → <span class="dep-target">{escape(task.title)}</span>', unsafe_allow_html=True)


def render_right_panel() -> None:
    """Render the error banner, task tabs and dependency list."""
    render_error_banner()

    tasks = st.session_state.orchestrator.tasks
    if not tasks:
        st.markdown("### Your workspace is empty")
        st.info("Sync your journal entries on the left. Claude will find tasks, deadlines, and project links.")
        return

    tab_key = st.radio(
        "View",
        options=list(TABS),
        format_func=lambda key: TABS[key],
        horizontal=True,
        key="active_tab",
        label_visibility="collapsed",
    )

    visible = filter_by_status(tasks, tab_key)
    if visible:
        for task in visible:
            render_task_card(task)
    else:
        st.caption("No entries found in this view.")

    st.markdown("---")
    render_dependencies(tasks)
