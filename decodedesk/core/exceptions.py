"""
Exception hierarchy for DecodeDesk.

Provides specific exception types so callers can branch on quota state,
provider failures and configuration problems instead of parsing messages.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from decodedesk.core.models import QuotaStatus


GENERIC_UNAVAILABLE_MESSAGE = (
    "Translation service is temporarily unavailable. Please try again later."
)


class DecodeDeskError(Exception):
    """Base exception for all DecodeDesk errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
        suggestion: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Additional error details
            recoverable: Whether the caller can recover by trying again
            suggestion: Suggested fix or workaround
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion
        }

    def __str__(self) -> str:
        """String representation with suggestion if available."""
        result = self.message
        if self.suggestion:
            result += f"\nSuggestion: {self.suggestion}"
        return result


class ConfigurationError(DecodeDeskError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        valid_values: Optional[List[Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that's invalid
            invalid_value: Invalid value provided
            valid_values: List of valid values
        """
        details = {
            "config_key": config_key,
            "invalid_value": invalid_value,
            "valid_values": valid_values
        }

        suggestion = None
        if config_key and valid_values:
            suggestion = f"Valid values for {config_key}: {', '.join(map(str, valid_values))}"
        elif config_key:
            suggestion = f"Check configuration for '{config_key}'"

        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.config_key = config_key
        self.invalid_value = invalid_value
        self.valid_values = valid_values


class StorageError(DecodeDeskError):
    """Raised by quota storage backends when a read or write fails."""

    def __init__(
        self,
        message: str,
        storage_type: Optional[str] = None,
        operation: Optional[str] = None,
        key: Optional[str] = None
    ):
        details = {
            "storage_type": storage_type,
            "operation": operation,
            "key": key
        }
        suggestion = (
            "Storage errors are non-fatal. Quota falls back to a fresh record.\n"
            "To fix: check disk space and permissions for the storage directory."
        )

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.storage_type = storage_type
        self.operation = operation
        self.key = key


class QuotaExceededError(DecodeDeskError):
    """Raised when the local translation allowance is used up."""

    def __init__(self, status: "QuotaStatus", is_authenticated: bool):
        """
        Initialize quota error.

        Args:
            status: Quota status at the time of the check
            is_authenticated: Whether the caller was logged in
        """
        if is_authenticated:
            message = f"Weekly limit reached: {status.total} of {status.total} translations used."
            days = status.days_until_reset
            if days:
                suggestion = f"Upgrade your plan or wait {days} day{'s' if days != 1 else ''} for the weekly reset."
            else:
                suggestion = "Upgrade your plan or wait for the weekly reset."
        else:
            message = f"Free guest translations used up ({status.total} of {status.total})."
            suggestion = "Log in to keep translating."

        details = {
            "remaining": status.remaining,
            "total": status.total,
            "is_weekly_limit": status.is_weekly_limit,
            "days_until_reset": status.days_until_reset,
            "identity": "user" if is_authenticated else "guest"
        }
        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.status = status
        self.is_authenticated = is_authenticated


class TranslationError(DecodeDeskError):
    """Base class for failures of the translation request client."""

    retryable = False

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None
    ):
        details = dict(details or {})
        details.setdefault("status_code", status_code)
        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.status_code = status_code


class CredentialsMissingError(TranslationError):
    """Raised before any network call when no provider API key is configured."""

    def __init__(self, provider: str = "OpenRouter", env_var: str = "OPENROUTER_API_KEY"):
        super().__init__(
            f"{provider} API key is not configured",
            suggestion=f"Set the {env_var} environment variable or api_keys in the config file."
        )
        self.recoverable = False
        self.provider = provider


class ProviderAuthenticationError(TranslationError):
    """HTTP 401 from the provider."""

    def __init__(self):
        super().__init__(
            "API key is invalid. Please check your OpenRouter configuration.",
            status_code=401
        )


class ProviderCreditsError(TranslationError):
    """HTTP 402 from the provider: the service account is out of credits."""

    def __init__(self):
        super().__init__(
            "Insufficient credits. Please check your OpenRouter account.",
            status_code=402
        )


class ProviderRateLimitError(TranslationError):
    """HTTP 429 from the provider."""

    def __init__(self):
        super().__init__(
            "Rate limit exceeded. Please try again in a moment.",
            status_code=429
        )


class TransientProviderError(TranslationError):
    """Network failure or a non-terminal non-2xx status."""

    retryable = True


class EmptyCompletionError(TranslationError):
    """The provider answered OK but the completion body was empty."""

    retryable = True

    def __init__(self):
        super().__init__("Empty response from AI model")


class TranslationUnavailableError(TranslationError):
    """Raised once every attempt of a request has failed."""

    def __init__(
        self,
        attempts: int,
        last_error: Optional[TranslationError] = None
    ):
        message = last_error.message if last_error else GENERIC_UNAVAILABLE_MESSAGE
        super().__init__(
            message,
            status_code=last_error.status_code if last_error else None,
            details={
                "attempts": attempts,
                "last_error": last_error.__class__.__name__ if last_error else None
            },
            suggestion="Please try again later."
        )
        self.attempts = attempts
        self.last_error = last_error
