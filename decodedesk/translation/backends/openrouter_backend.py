"""OpenRouter completion backend (OpenAI-compatible API)."""

import logging
import os
import time
from typing import Optional

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    AsyncOpenAI,
    OpenAI,
    OpenAIError,
)

from decodedesk.core.exceptions import (
    EmptyCompletionError,
    ProviderAuthenticationError,
    ProviderCreditsError,
    ProviderRateLimitError,
    TransientProviderError,
    TranslationError,
)
from ..base import CompletionBackend, CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "deepseek/deepseek-r1-0528-qwen3-8b:free"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

TERMINAL_STATUS_ERRORS = {
    401: ProviderAuthenticationError,
    402: ProviderCreditsError,
    429: ProviderRateLimitError,
}


def classify_error(error: Exception) -> TranslationError:
    """
    Map an SDK exception to a DecodeDesk error.

    Only a status-derived summary is kept; provider payloads are not passed on.
    """
    if isinstance(error, APIStatusError):
        terminal = TERMINAL_STATUS_ERRORS.get(error.status_code)
        if terminal is not None:
            return terminal()
        return TransientProviderError(f"API error: {error.status_code}", status_code=error.status_code)
    if isinstance(error, APIConnectionError):
        return TransientProviderError(f"Network error: {type(error).__name__}")
    return TransientProviderError(f"Provider error: {type(error).__name__}")


class OpenRouterBackend(CompletionBackend):
    """Chat completions through OpenRouter using the OpenAI client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        app_name: str = "DecodeDesk",
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
        **kwargs
    ):
        """
        Args:
            api_key: OpenRouter key; defaults to ``OPENROUTER_API_KEY``
            model: Provider model identifier
            base_url: API root; defaults to ``OPENROUTER_BASE_URL`` or the public endpoint
            timeout: Per-request timeout in seconds
            app_name: Sent as the ``X-Title`` attribution header
            http_client: Optional preconfigured transport for the sync client
            async_http_client: Optional preconfigured transport for the async client
            **kwargs: retry_policy, sleep, async_sleep (see CompletionBackend)
        """
        api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        super().__init__(api_key, model, **kwargs)

        self.base_url = (base_url or os.getenv("OPENROUTER_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

        if self.api_key:
            # The retry loop in CompletionBackend is the only one
            client_options = dict(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=httpx.Timeout(timeout),
                max_retries=0,
                default_headers={"X-Title": app_name},
            )
            self.client = OpenAI(http_client=http_client, **client_options)
            self.async_client = AsyncOpenAI(http_client=async_http_client, **client_options)
        else:
            self.client = None
            self.async_client = None

    def _build_messages(self, request: CompletionRequest):
        """The rendered prompt is sent as one user message."""
        return [{"role": "user", "content": request.prompt}]

    def _to_response(self, completion, start_time: float) -> CompletionResponse:
        choices = getattr(completion, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = (getattr(message, "content", None) or "").strip()
        if not content:
            raise EmptyCompletionError()

        usage = getattr(completion, "usage", None)
        return CompletionResponse(
            content=content,
            backend="openrouter",
            model=getattr(completion, "model", None) or self.model,
            tokens_used=usage.total_tokens if usage else 0,
            latency=time.time() - start_time,
            metadata={
                "prompt_tokens": usage.prompt_tokens if usage else 0,
                "completion_tokens": usage.completion_tokens if usage else 0,
                "finish_reason": getattr(choices[0], "finish_reason", None),
            }
        )

    def _attempt_sync(self, request: CompletionRequest) -> CompletionResponse:
        start_time = time.time()
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(request),
                max_tokens=request.max_tokens,
                temperature=request.temperature,
            )
        except OpenAIError as e:
            logger.debug(f"OpenRouter call failed: {type(e).__name__}: {e}")
            raise classify_error(e) from e
        return self._to_response(completion, start_time)

    async def _attempt(self, request: CompletionRequest) -> CompletionResponse:
        start_time = time.time()
        try:
            completion = await self.async_client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(request),
                max_tokens=request.max_tokens,
                temperature=request.temperature,
            )
        except OpenAIError as e:
            logger.debug(f"OpenRouter call failed: {type(e).__name__}: {e}")
            raise classify_error(e) from e
        return self._to_response(completion, start_time)

    def get_info(self):
        info = super().get_info()
        info["base_url"] = self.base_url
        return info
