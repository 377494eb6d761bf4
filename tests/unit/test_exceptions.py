"""Unit tests for the exception hierarchy."""

from decodedesk.core.exceptions import (
    GENERIC_UNAVAILABLE_MESSAGE,
    ConfigurationError,
    DecodeDeskError,
    ProviderRateLimitError,
    QuotaExceededError,
    TransientProviderError,
    TranslationError,
    TranslationUnavailableError,
)
from decodedesk.core.models import QuotaStatus


def test_str_includes_suggestion():
    error = DecodeDeskError("Broken", suggestion="Fix it")
    assert str(error) == "Broken\nSuggestion: Fix it"


def test_to_dict():
    error = ConfigurationError("Bad mode", config_key="mode", invalid_value="x", valid_values=["a", "b"])
    data = error.to_dict()
    assert data["error_type"] == "ConfigurationError"
    assert data["details"]["invalid_value"] == "x"
    assert data["suggestion"] == "Valid values for mode: a, b"


def test_guest_quota_error_suggests_login():
    status = QuotaStatus(allowed=False, remaining=0, total=8, is_weekly_limit=False)
    error = QuotaExceededError(status, is_authenticated=False)
    assert "8 of 8" in error.message
    assert error.suggestion == "Log in to keep translating."
    assert error.details["identity"] == "guest"


def test_user_quota_error_suggests_waiting():
    status = QuotaStatus(allowed=False, remaining=0, total=13, is_weekly_limit=True, days_until_reset=3)
    error = QuotaExceededError(status, is_authenticated=True)
    assert "wait 3 days" in error.suggestion

    one_day = QuotaStatus(allowed=False, remaining=0, total=5, is_weekly_limit=True, days_until_reset=1)
    assert "wait 1 day " in QuotaExceededError(one_day, is_authenticated=True).suggestion


def test_rate_limit_is_terminal_translation_error():
    error = ProviderRateLimitError()
    assert isinstance(error, TranslationError)
    assert error.status_code == 429
    assert not error.retryable
    assert "Rate limit" in error.message


def test_unavailable_carries_last_error_message():
    last = TransientProviderError("Network error: ConnectError")
    error = TranslationUnavailableError(3, last)
    assert error.message == "Network error: ConnectError"
    assert error.details["attempts"] == 3
    assert error.last_error is last


def test_unavailable_generic_message():
    assert TranslationUnavailableError(3).message == GENERIC_UNAVAILABLE_MESSAGE
