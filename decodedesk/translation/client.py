"""
Translation request client.

Turns caller text plus a mode into a structured result: select the mode's
template, substitute sanitized text, call the completion backend (which owns
the retry loop) and parse the reply. The client keeps no state between calls
and never touches quota bookkeeping.
"""

import logging
from typing import Optional, Union

from decodedesk.core.models import (
    CrossTranslationResult,
    GenerationResult,
    TranslationResult,
)
from decodedesk.translation.base import CompletionBackend, CompletionRequest
from decodedesk.translation.modes import TranslationMode
from decodedesk.translation.parsers import parse_reply
from decodedesk.translation.prompts import PromptLibrary
from decodedesk.translation.sanitizer import render_prompt

logger = logging.getLogger(__name__)

AnyResult = Union[TranslationResult, GenerationResult, CrossTranslationResult]


class TranslationClient:
    """Builds prompts, calls the backend and parses replies."""

    def __init__(
        self,
        backend: CompletionBackend,
        prompts: Optional[PromptLibrary] = None,
        max_tokens: int = 400,
        temperature: float = 0.7
    ):
        self.backend = backend
        self.prompts = prompts or PromptLibrary()
        self.max_tokens = max_tokens
        self.temperature = temperature

    def build_request(self, text: str, mode: TranslationMode) -> CompletionRequest:
        """Render the prompt for ``mode`` with the sanitized text."""
        mode = TranslationMode.parse(mode)
        template = self.prompts.get(mode)
        return CompletionRequest(
            prompt=render_prompt(template, text or ""),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            mode=mode.value
        )

    def translate(self, text: str, mode: TranslationMode) -> AnyResult:
        """
        Translate or generate synchronously.

        Args:
            text: Caller text; may be empty for generate modes (forwarded as-is otherwise)
            mode: Requested transformation

        Returns:
            TranslationResult, GenerationResult or CrossTranslationResult

        Raises:
            TranslationError: When the provider call fails
        """
        mode = TranslationMode.parse(mode)
        request = self.build_request(text, mode)
        logger.info(f"Mode: {mode.value}, input length: {len(text or '')} chars")
        response = self.backend.complete_sync(request)
        result = parse_reply(response.content, mode, original=text or "")
        if result.used_fallback:
            logger.info(f"Reply for {mode.value} missed expected labels; fallback values used")
        return result

    async def atranslate(self, text: str, mode: TranslationMode) -> AnyResult:
        """Async counterpart of ``translate``."""
        mode = TranslationMode.parse(mode)
        request = self.build_request(text, mode)
        logger.info(f"Mode: {mode.value}, input length: {len(text or '')} chars")
        response = await self.backend.complete(request)
        result = parse_reply(response.content, mode, original=text or "")
        if result.used_fallback:
            logger.info(f"Reply for {mode.value} missed expected labels; fallback values used")
        return result

    def decode_corporate(self, text: str) -> TranslationResult:
        return self.translate(text, TranslationMode.DECODE)

    def decode_genz(self, text: str) -> TranslationResult:
        return self.translate(text, TranslationMode.DECODE_GENZ)

    def generate_corporate_word(self, seed: Optional[str] = None) -> GenerationResult:
        return self.translate(seed or "", TranslationMode.GENERATE_CORPORATE)

    def generate_genz_word(self, seed: Optional[str] = None) -> GenerationResult:
        return self.translate(seed or "", TranslationMode.GENERATE_GENZ)

    def genz_to_corporate(self, text: str) -> CrossTranslationResult:
        return self.translate(text, TranslationMode.GENZ_TO_CORPORATE)

    def corporate_to_genz(self, text: str) -> CrossTranslationResult:
        return self.translate(text, TranslationMode.CORPORATE_TO_GENZ)
