"""
Error taxonomy and failure classification for JournalTask.

The AI service and Google's OAuth/Drive endpoints do not expose a stable
machine-readable error taxonomy, so failures are classified by matching
markers in their free-text messages. All matching rules live in this module;
update them here without touching the sync orchestration.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)


class JournalTaskError(Exception):
    """Base class for errors raised by JournalTask itself."""


class ImportConfigError(JournalTaskError):
    """The Drive import was attempted with a missing or malformed OAuth client ID."""


class ExtractionError(JournalTaskError):
    """The AI response could not be parsed or did not match the task schema."""


class DriveHTTPError(JournalTaskError):
    """A Drive download returned a non-2xx status."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        super().__init__(message or f"Drive Error: HTTP {status}")


class ErrorCategory(Enum):
    """Closed set of failure categories surfaced to the user."""

    SERVICE_BLOCKED = "service_blocked"
    AUTH_CONFIG_ERROR = "auth_config_error"
    AUTH_DENIED = "auth_denied"
    TRANSPORT_ERROR = "transport_error"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def hint(self) -> str:
        return REMEDIATION_HINTS[self]


class FailureSource(Enum):
    """Which external collaborator produced a failure."""

    EXTRACTION = "extraction"
    IMPORT = "import"


REMEDIATION_HINTS = {
    ErrorCategory.SERVICE_BLOCKED: (
        "The AI API is disabled or blocked for this project. Enable the API in your "
        "provider console (or check the key's API restrictions) and sync again."
    ),
    ErrorCategory.AUTH_CONFIG_ERROR: (
        "Google sign-in is misconfigured. Check that the OAuth Client ID is correct, the "
        "redirect URI and authorized origins match, and your account is listed as a test "
        "user while the app is unverified."
    ),
    ErrorCategory.AUTH_DENIED: "Access was not granted. Nothing was imported.",
    ErrorCategory.TRANSPORT_ERROR: (
        "A network or HTTP error occurred. Check your connection and try again."
    ),
    ErrorCategory.UNKNOWN_ERROR: "Something went wrong. Try again in a moment.",
}

# Reason codes that always mean misconfiguration, checked before the "blocked" marker
# (restricted API keys report e.g. API_KEY_HTTP_REFERRER_BLOCKED).
AUTH_CONFIG_REASONS = (
    "redirect_uri_mismatch",
    "origin_mismatch",
    "invalid_client",
    "unauthorized_client",
    "referer",
    "referrer",
    "has not completed the google verification process",
)

SERVICE_BLOCKED_MARKERS = (
    "blocked",
    "service_disabled",
    "accessnotconfigured",
    "has not been used in project",
    "api has not been enabled",
)

# Only trusted when the failure came from the import collaborator
IMPORT_AUTH_CONFIG_MARKERS = (
    "policy",
    "compliance",
    "invalid_request",
)

AUTH_DENIED_MARKERS = (
    "access_denied",
    "popup_closed",
    "user_cancel",
    "cancelled by user",
    "canceled by user",
    "user denied",
)

TRANSPORT_MARKERS = (
    "timed out",
    "timeout",
    "connection reset",
    "connection refused",
    "connection aborted",
    "network",
    "temporarily unavailable",
)

# Exception class names raised by httpx/requests/anthropic/urllib3 for transport failures
TRANSPORT_EXCEPTION_NAMES = {
    "APIConnectionError",
    "APITimeoutError",
    "ConnectTimeout",
    "ReadTimeout",
    "ConnectError",
    "Timeout",
    "TransportError",
    "ServerNotFoundError",
}

_STATUS_400 = re.compile(r"\b400\b")


@dataclass(frozen=True)
class ClassifiedError:
    """A failure mapped to a category, with the message to show and a remediation hint."""

    category: ErrorCategory
    message: str
    hint: str

    @property
    def is_surfaced(self) -> bool:
        """User cancellation is not a failure and is never shown as one."""
        return self.category is not ErrorCategory.AUTH_DENIED


class _Failure(NamedTuple):
    message: str
    status: int | None
    codes: tuple[str, ...]


def _as_status(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _payload_failure(payload: Mapping) -> _Failure:
    # Google APIs wrap details in {"error": {...}}; OAuth callbacks use {"error": "..."}
    inner = payload.get("error")
    body = inner if isinstance(inner, Mapping) else payload

    codes = []
    for key in ("reason", "status", "code", "error"):
        value = body.get(key)
        if isinstance(value, str):
            codes.append(value)
    for key in ("details", "errors"):
        for item in body.get(key) or ():
            if isinstance(item, Mapping) and isinstance(item.get("reason"), str):
                codes.append(item["reason"])
    if isinstance(inner, str):
        codes.append(inner)

    message = (
        body.get("message")
        or body.get("error_description")
        or payload.get("error_description")
        or (inner if isinstance(inner, str) else "")
        or ""
    )
    return _Failure(str(message), _as_status(body.get("code")), tuple(codes))


def _exception_failure(exc: BaseException) -> _Failure:
    message = str(exc) or exc.__class__.__name__

    status = _as_status(getattr(exc, "status_code", None))
    if status is None:
        status = _as_status(getattr(exc, "status", None))
    if status is None:
        status = _as_status(getattr(getattr(exc, "resp", None), "status", None))

    codes = []
    for attr in ("error", "reason", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, str):
            codes.append(value)
    return _Failure(message, status, tuple(codes))


def _normalize(failure: Any) -> _Failure:
    if failure is None:
        return _Failure("", None, ())
    if isinstance(failure, BaseException):
        return _exception_failure(failure)
    if isinstance(failure, Mapping):
        return _payload_failure(failure)
    status = _as_status(failure) if isinstance(failure, int) else None
    if status is not None:
        return _Failure(f"HTTP {status}", status, ())
    return _Failure(str(failure), None, ())


def _contains_any(haystack: str, markers) -> bool:
    return any(marker in haystack for marker in markers)


def _categorize(failure: Any, normalized: _Failure, source: FailureSource | None) -> ErrorCategory:
    if isinstance(failure, ImportConfigError):
        return ErrorCategory.AUTH_CONFIG_ERROR

    haystack = " ".join((normalized.message, *normalized.codes)).lower()
    from_import = source is not FailureSource.EXTRACTION

    if _contains_any(haystack, AUTH_CONFIG_REASONS):
        return ErrorCategory.AUTH_CONFIG_ERROR
    if _contains_any(haystack, SERVICE_BLOCKED_MARKERS):
        return ErrorCategory.SERVICE_BLOCKED
    if from_import:
        if _contains_any(haystack, IMPORT_AUTH_CONFIG_MARKERS):
            return ErrorCategory.AUTH_CONFIG_ERROR
        if normalized.status == 400 or _STATUS_400.search(haystack):
            return ErrorCategory.AUTH_CONFIG_ERROR
    if _contains_any(haystack, AUTH_DENIED_MARKERS):
        return ErrorCategory.AUTH_DENIED

    if normalized.status is not None and not 200 <= normalized.status < 300:
        return ErrorCategory.TRANSPORT_ERROR
    if isinstance(failure, (TimeoutError, ConnectionError)):
        return ErrorCategory.TRANSPORT_ERROR
    if isinstance(failure, BaseException) and failure.__class__.__name__ in TRANSPORT_EXCEPTION_NAMES:
        return ErrorCategory.TRANSPORT_ERROR
    if _contains_any(haystack, TRANSPORT_MARKERS):
        return ErrorCategory.TRANSPORT_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def classify_error(failure: Any, source: FailureSource | None = None) -> ClassifiedError:
    """Map a raw failure from an external collaborator to an ErrorCategory.

    Never raises: anything that cannot be interpreted becomes UNKNOWN_ERROR.

    Args:
        failure: An exception, an HTTP status code, a provider error payload
            (mapping with code/reason/message, optionally under "error"), a
            message string, or None
        source: The collaborator that failed. Markers such as "policy" or
            "400" only indicate misconfiguration for import failures, so they
            are ignored when source is EXTRACTION.

    Returns:
        The classified error with its remediation hint
    """
    try:
        normalized = _normalize(failure)
        category = _categorize(failure, normalized, source)
        message = normalized.message
    except Exception:
        logger.exception("Failed to classify %r", type(failure))
        category = ErrorCategory.UNKNOWN_ERROR
        message = ""

    if not message:
        message = "Failed to process journal. Please try again in a moment."

    logger.debug("Classified %s failure as %s: %s", source.value if source else "unknown", category.tag, message)
    return ClassifiedError(category=category, message=message, hint=category.hint)
