"""
JournalTask - Journal to Task List

Turns free-form journal entries into a structured, dependency-aware task
list using Claude via LangChain, with optional journal import from Google
Drive.
"""

# Configuration
from .config import (
    fetch_api_key,
    load_model_config,
    get_data_dir,
    ImportConfig,
    CONFIG_PATH,
    DEFAULT_MODEL,
    CLIENT_ID_SUFFIX,
)

# Errors and classification
from .errors import (
    classify_error,
    ClassifiedError,
    ErrorCategory,
    FailureSource,
    JournalTaskError,
    ImportConfigError,
    ExtractionError,
    DriveHTTPError,
)

# Data model
from .models import (
    Task,
    TaskStatus,
    ExtractionResult,
    SyncState,
    SyncPhase,
)

# Persistence
from .store import LocalStorage, TaskStore, SettingsStore

# Prompt templates
from .prompts import (
    get_extraction_prompt,
    EXTRACTION_SYSTEM_PROMPT,
    EXTRACTION_HUMAN_PROMPT,
    EXAMPLE_JOURNAL,
)

# Extraction
from .extraction import extract_tasks_from_journal, ExtractionClient

# Google Drive import
from .gdrive import GoogleDriveClient, FileRef
from .importer import ImportClient, IdentityProvider, GoogleIdentityProvider, build_import_client

# Sync orchestration
from .sync import SyncOrchestrator, build_orchestrator

# Derived views
from .views import (
    filter_by_status,
    compute_stats,
    dependency_edges,
    dependency_groups,
    TaskStats,
    DependencyEdge,
)

# CLI entry point
from .cli import main

__version__ = "0.2.0"

__all__ = [
    # Main entry point
    "main",
    # Core
    "SyncOrchestrator",
    "build_orchestrator",
    "extract_tasks_from_journal",
    "ExtractionClient",
    # Data model
    "Task",
    "TaskStatus",
    "ExtractionResult",
    "SyncState",
    "SyncPhase",
    # Persistence
    "LocalStorage",
    "TaskStore",
    "SettingsStore",
    # Errors
    "classify_error",
    "ClassifiedError",
    "ErrorCategory",
    "FailureSource",
    "JournalTaskError",
    "ImportConfigError",
    "ExtractionError",
    "DriveHTTPError",
    # Google Drive
    "GoogleDriveClient",
    "FileRef",
    "ImportClient",
    "IdentityProvider",
    "GoogleIdentityProvider",
    "build_import_client",
    # Derived views
    "filter_by_status",
    "compute_stats",
    "dependency_edges",
    "dependency_groups",
    "TaskStats",
    "DependencyEdge",
    # Configuration
    "fetch_api_key",
    "load_model_config",
    "get_data_dir",
    "ImportConfig",
    "CONFIG_PATH",
    "DEFAULT_MODEL",
    "CLIENT_ID_SUFFIX",
    # Prompt templates
    "get_extraction_prompt",
    "EXTRACTION_SYSTEM_PROMPT",
    "EXTRACTION_HUMAN_PROMPT",
    "EXAMPLE_JOURNAL",
]
