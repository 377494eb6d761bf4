"""Retry policy for provider calls."""

from dataclasses import dataclass

from decodedesk.core.exceptions import ConfigurationError, TranslationError


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded attempts with linear backoff (``attempt * backoff_seconds``)."""
    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be at least 1, got {self.max_attempts}",
                config_key="retry.max_attempts",
                invalid_value=self.max_attempts
            )
        if self.backoff_seconds < 0:
            raise ConfigurationError(
                f"backoff_seconds must not be negative, got {self.backoff_seconds}",
                config_key="retry.backoff_seconds",
                invalid_value=self.backoff_seconds
            )

    @staticmethod
    def should_retry(error: TranslationError) -> bool:
        """Network failures, non-terminal statuses and empty bodies are retried; 401/402/429 are not."""
        return bool(getattr(error, "retryable", False))

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return attempt * self.backoff_seconds

    def has_attempts_left(self, attempt: int) -> bool:
        return attempt < self.max_attempts
