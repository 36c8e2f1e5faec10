"""
Tests for journaltask.errors module.
"""

from unittest.mock import MagicMock

import pytest

from journaltask.errors import (
    ClassifiedError,
    DriveHTTPError,
    ErrorCategory,
    ExtractionError,
    FailureSource,
    ImportConfigError,
    REMEDIATION_HINTS,
    classify_error,
)


class APIConnectionError(Exception):
    """Stand-in named like the anthropic SDK's connection error."""


class StatusError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class TestErrorCategory:
    """Tests for ErrorCategory metadata."""

    def test_every_category_has_a_hint(self):
        """Each category should carry a non-empty remediation hint."""
        for category in ErrorCategory:
            assert REMEDIATION_HINTS[category]
            assert category.hint == REMEDIATION_HINTS[category]

    def test_tags_are_snake_case_values(self):
        assert ErrorCategory.SERVICE_BLOCKED.tag == "service_blocked"
        assert ErrorCategory.AUTH_CONFIG_ERROR.tag == "auth_config_error"


class TestClassifyErrorServiceBlocked:
    """Tests for SERVICE_BLOCKED detection."""

    @pytest.mark.parametrize("message", [
        "Requests to this API are blocked.",
        "SERVICE_DISABLED: Generative Language API",
        "accessNotConfigured",
        "API has not been used in project 12345 before or it is disabled",
    ])
    def test_detects_blocked_messages(self, message):
        """Should classify disabled or blocked API failures."""
        error = classify_error(RuntimeError(message), source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.SERVICE_BLOCKED
        assert error.message == message

    def test_detects_reason_in_payload(self):
        """Should read reasons nested in a Google error payload."""
        payload = {
            "error": {
                "code": 403,
                "message": "Permission denied",
                "details": [{"reason": "SERVICE_DISABLED"}],
            }
        }

        error = classify_error(payload, source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.SERVICE_BLOCKED
        assert error.message == "Permission denied"

    def test_blocked_is_checked_before_transport(self):
        """A 403 whose text mentions 'blocked' is SERVICE_BLOCKED, not a transport error."""
        error = classify_error(StatusError("API key blocked", 403), source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.SERVICE_BLOCKED


class TestClassifyErrorAuthConfig:
    """Tests for AUTH_CONFIG_ERROR detection."""

    def test_import_config_error(self):
        """Client ID validation failures are configuration errors."""
        error = classify_error(ImportConfigError("Google Client ID is missing."), source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.AUTH_CONFIG_ERROR
        assert error.message == "Google Client ID is missing."

    @pytest.mark.parametrize("message", [
        "Error 400: redirect_uri_mismatch",
        "origin_mismatch",
        "invalid_client: The OAuth client was not found.",
        "App has not completed the Google verification process",
    ])
    def test_detects_oauth_misconfiguration(self, message):
        error = classify_error(message, source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.AUTH_CONFIG_ERROR

    def test_referrer_block_is_config_not_service_block(self):
        """Restricted-key referrer blocks point at configuration."""
        error = classify_error("API_KEY_HTTP_REFERRER_BLOCKED", source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.AUTH_CONFIG_ERROR

    def test_policy_rejection_from_import(self):
        """Policy rejections during import are configuration errors."""
        error = classify_error(RuntimeError("This request violates a Google policy"), source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.AUTH_CONFIG_ERROR

    def test_policy_without_blocked_from_import(self):
        error = classify_error("Request does not comply with Google's OAuth 2.0 policy", source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.AUTH_CONFIG_ERROR

    def test_status_400_from_import(self):
        """A 400 during import points at configuration."""
        assert classify_error(400, source=FailureSource.IMPORT).category is ErrorCategory.AUTH_CONFIG_ERROR
        assert classify_error("Error 400", source=FailureSource.IMPORT).category is ErrorCategory.AUTH_CONFIG_ERROR

    def test_import_markers_ignored_for_extraction(self):
        """Policy and 400 markers from the AI service are not configuration errors."""
        policy = classify_error("Content violates usage policy", source=FailureSource.EXTRACTION)
        bad_request = classify_error(StatusError("invalid_request_error", 400), source=FailureSource.EXTRACTION)

        assert policy.category is ErrorCategory.UNKNOWN_ERROR
        assert bad_request.category is ErrorCategory.TRANSPORT_ERROR


class TestClassifyErrorAuthDenied:
    """Tests for AUTH_DENIED detection."""

    @pytest.mark.parametrize("failure", [
        "access_denied",
        {"error": "access_denied"},
        "popup_closed_by_user",
    ])
    def test_detects_user_denial(self, failure):
        error = classify_error(failure, source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.AUTH_DENIED
        assert not error.is_surfaced

    def test_other_categories_are_surfaced(self):
        assert classify_error("boom").is_surfaced


class TestClassifyErrorTransport:
    """Tests for TRANSPORT_ERROR detection."""

    def test_non_2xx_status(self):
        """Should classify HTTP errors by status code."""
        error = classify_error(DriveHTTPError(500), source=FailureSource.IMPORT)

        assert error.category is ErrorCategory.TRANSPORT_ERROR
        assert error.message == "Drive Error: HTTP 500"

    def test_status_on_response_object(self):
        """Should read the status from a googleapiclient-style `resp` attribute."""
        exc = Exception("<HttpError 503>")
        exc.resp = MagicMock(status=503)

        assert classify_error(exc, source=FailureSource.IMPORT).category is ErrorCategory.TRANSPORT_ERROR

    def test_builtin_network_exceptions(self):
        assert classify_error(TimeoutError("slow")).category is ErrorCategory.TRANSPORT_ERROR
        assert classify_error(ConnectionResetError()).category is ErrorCategory.TRANSPORT_ERROR

    def test_sdk_connection_error_by_name(self):
        error = classify_error(APIConnectionError("Connection error."), source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.TRANSPORT_ERROR

    def test_network_marker_in_text(self):
        assert classify_error("Network unreachable").category is ErrorCategory.TRANSPORT_ERROR


class TestClassifyErrorFallbacks:
    """Tests for UNKNOWN_ERROR and robustness."""

    def test_unmatched_failure_is_unknown(self):
        error = classify_error(ExtractionError("AI response was not valid JSON"), source=FailureSource.EXTRACTION)

        assert error.category is ErrorCategory.UNKNOWN_ERROR
        assert error.message == "AI response was not valid JSON"
        assert error.hint == ErrorCategory.UNKNOWN_ERROR.hint

    @pytest.mark.parametrize("failure", [None, "", {}, object()])
    def test_never_raises(self, failure):
        """Should classify anything without raising."""
        error = classify_error(failure)

        assert isinstance(error, ClassifiedError)
        assert error.message

    def test_empty_message_gets_default(self):
        error = classify_error(None)

        assert error.category is ErrorCategory.UNKNOWN_ERROR
        assert error.message == "Failed to process journal. Please try again in a moment."

    def test_exception_without_message_uses_class_name(self):
        class Weird(Exception):
            pass

        assert classify_error(Weird()).message == "Weird"

    def test_broken_str_is_unknown(self):
        """An exception whose __str__ fails still classifies."""
        class Broken(Exception):
            def __str__(self):
                raise RuntimeError("no")

        error = classify_error(Broken())

        assert error.category is ErrorCategory.UNKNOWN_ERROR
