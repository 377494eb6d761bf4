"""
Base completion backend interface.
Provider backends implement a single attempt; the retry loop lives here.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Optional

from decodedesk.core.exceptions import (
    CredentialsMissingError,
    TranslationError,
    TranslationUnavailableError,
)
from decodedesk.translation.retry import RetryPolicy

logger = logging.getLogger(__name__)


@dataclass
class CompletionRequest:
    """A fully rendered prompt sent as a single user message."""
    prompt: str
    max_tokens: int = 400
    temperature: float = 0.7
    # Only used for logging
    mode: Optional[str] = None


@dataclass
class CompletionResponse:
    """Completion text plus call metadata."""
    content: str
    backend: str
    model: str
    tokens_used: int = 0
    latency: float = 0.0
    attempts: int = 1
    metadata: Dict = field(default_factory=dict)


class CompletionBackend(ABC):
    """Abstract base class for chat-completion backends."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.api_key = api_key
        self.model = model
        self.retry_policy = retry_policy or RetryPolicy()
        self.name = self.__class__.__name__
        self._sleep = sleep
        self._async_sleep = async_sleep

    @abstractmethod
    def _attempt_sync(self, request: CompletionRequest) -> CompletionResponse:
        """
        Make exactly one provider call.

        Raises:
            TranslationError: Classified failure of this attempt
        """

    @abstractmethod
    async def _attempt(self, request: CompletionRequest) -> CompletionResponse:
        """Async counterpart of ``_attempt_sync``."""

    def _ensure_configured(self) -> None:
        if not self.api_key:
            raise CredentialsMissingError()

    def _on_failure(self, error: TranslationError, attempt: int) -> bool:
        """Log a failed attempt; return True if another attempt should follow."""
        max_attempts = self.retry_policy.max_attempts
        if not self.retry_policy.should_retry(error):
            logger.error(f"{self.name} attempt {attempt}/{max_attempts} failed terminally: {error.message}")
            return False
        logger.warning(f"{self.name} attempt {attempt}/{max_attempts} failed: {error.message}")
        return self.retry_policy.has_attempts_left(attempt)

    def complete_sync(self, request: CompletionRequest) -> CompletionResponse:
        """
        Run a completion with bounded retries.

        Args:
            request: Rendered prompt and sampling parameters

        Returns:
            CompletionResponse with non-empty content

        Raises:
            CredentialsMissingError: Before any network call if no API key is set
            TranslationError: Terminal provider error (401/402/429)
            TranslationUnavailableError: After every attempt failed
        """
        self._ensure_configured()
        last_error: Optional[TranslationError] = None

        for attempt in range(1, self.retry_policy.max_attempts + 1):
            logger.info(f"Completion attempt {attempt}/{self.retry_policy.max_attempts} "
                        f"(mode={request.mode}, prompt={len(request.prompt)} chars)")
            try:
                response = self._attempt_sync(request)
            except TranslationError as e:
                last_error = e
                if not self._on_failure(e, attempt):
                    break
                self._sleep(self.retry_policy.delay_for(attempt))
                continue
            response.attempts = attempt
            return response

        if last_error is not None and not self.retry_policy.should_retry(last_error):
            raise last_error
        raise TranslationUnavailableError(self.retry_policy.max_attempts, last_error)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Async counterpart of ``complete_sync``."""
        self._ensure_configured()
        last_error: Optional[TranslationError] = None

        for attempt in range(1, self.retry_policy.max_attempts + 1):
            logger.info(f"Completion attempt {attempt}/{self.retry_policy.max_attempts} "
                        f"(mode={request.mode}, prompt={len(request.prompt)} chars)")
            try:
                response = await self._attempt(request)
            except TranslationError as e:
                last_error = e
                if not self._on_failure(e, attempt):
                    break
                await self._async_sleep(self.retry_policy.delay_for(attempt))
                continue
            response.attempts = attempt
            return response

        if last_error is not None and not self.retry_policy.should_retry(last_error):
            raise last_error
        raise TranslationUnavailableError(self.retry_policy.max_attempts, last_error)

    def is_available(self) -> bool:
        """Check if backend is configured."""
        return bool(self.api_key)

    def get_info(self) -> Dict:
        """Get backend information."""
        return {
            "name": self.name,
            "model": self.model,
            "available": self.is_available(),
            "max_attempts": self.retry_policy.max_attempts
        }
