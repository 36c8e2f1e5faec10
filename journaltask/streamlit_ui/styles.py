"""
Streamlit UI styling constants.

Contains all custom CSS styling for the JournalTask Streamlit application.
"""

# Custom CSS for professional styling
CUSTOM_CSS = """
<style>
    /* Main container styling */
    .main .block-container {
        padding-top: 1rem;
        padding-bottom: 1rem;
        max-width: 100%;
    }

    /* Section headers */
    .section-header {
        color: #64748b;
        font-size: 0.85rem;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-bottom: 0.5rem;
        padding-bottom: 0.25rem;
        border-bottom: 1px solid #e2e8f0;
    }

    /* Task cards */
    .task-card {
        background-color: #ffffff;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
        padding: 0.75rem 1rem;
        margin-bottom: 0.5rem;
    }

    .task-card.done {
        opacity: 0.6;
    }

    .task-card .task-title {
        font-weight: 600;
        color: #0f172a;
    }

    .task-card.done .task-title {
        text-decoration: line-through;
    }

    .task-meta {
        font-size: 0.75rem;
        color: #94a3b8;
    }

    .urgent-badge {
        background-color: #fee2e2;
        color: #dc2626;
        border-radius: 6px;
        padding: 0 0.4rem;
        font-size: 0.7rem;
        font-weight: 700;
        margin-left: 0.4rem;
    }

    /* Dependency chips */
    .dep-chip {
        display: inline-block;
        background-color: #f1f5f9;
        border: 1px solid #e2e8f0;
        border-radius: 4px;
        padding: 0.1rem 0.5rem;
        font-size: 0.75rem;
        margin-right: 0.25rem;
    }

    .dep-target {
        display: inline-block;
        background-color: #eff6ff;
        border: 1px solid #dbeafe;
        color: #1e40af;
        border-radius: 8px;
        padding: 0.2rem 0.6rem;
        font-weight: 600;
    }

    /* Stats */
    .stat-value {
        font-size: 1.5rem;
        font-weight: 700;
        color: #0f172a;
    }
</style>
"""
