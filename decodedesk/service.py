"""
DecodeDesk service: the caller that sequences quota and translation.

Order per action: check quota, translate, record consumption. Consumption
is recorded only after a result came back, and the check and the record are
not atomic: two concurrent actions from the same identity can both pass the
check. The quota is a usage nudge, not a billing control.
"""

import logging
from typing import Any, Dict, Optional

from decodedesk.core.exceptions import QuotaExceededError
from decodedesk.core.models import QuotaStatus, QuotaSummary
from decodedesk.quota.manager import QuotaLimits, QuotaManager
from decodedesk.quota.storage import create_storage
from decodedesk.translation.backends.openrouter_backend import OpenRouterBackend
from decodedesk.translation.client import AnyResult, TranslationClient
from decodedesk.translation.modes import TranslationMode
from decodedesk.translation.retry import RetryPolicy

logger = logging.getLogger(__name__)


class DecodeDesk:
    """Quota-gated access to the translation client."""

    def __init__(self, quota: QuotaManager, client: TranslationClient):
        self.quota = quota
        self.client = client

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **backend_options) -> "DecodeDesk":
        """
        Build storage, quota manager, backend and client from a config dict.

        Args:
            config: Configuration as returned by ``load_config``
            **backend_options: Extra OpenRouterBackend arguments (e.g. http_client, sleep)
        """
        config = config or {}
        provider = config.get("openrouter", {}) or {}
        retry = config.get("retry", {}) or {}

        quota = QuotaManager(create_storage(config), limits=QuotaLimits.from_config(config))
        backend = OpenRouterBackend(
            api_key=(config.get("api_keys", {}) or {}).get("openrouter") or None,
            model=provider.get("model") or "deepseek/deepseek-r1-0528-qwen3-8b:free",
            base_url=provider.get("base_url"),
            timeout=float(provider.get("timeout", 30.0)),
            app_name=provider.get("app_name", "DecodeDesk"),
            retry_policy=RetryPolicy(
                max_attempts=int(retry.get("max_attempts", 3)),
                backoff_seconds=float(retry.get("backoff_seconds", 1.0))
            ),
            **backend_options
        )
        client = TranslationClient(
            backend,
            max_tokens=int(provider.get("max_tokens", 400)),
            temperature=float(provider.get("temperature", 0.7))
        )
        return cls(quota, client)

    def _check(self, is_authenticated: bool) -> QuotaStatus:
        status = self.quota.can_translate(is_authenticated)
        if not status.allowed:
            logger.info(f"Quota exhausted for {'user' if is_authenticated else 'guest'}: "
                        f"{status.total - status.remaining}/{status.total}")
            raise QuotaExceededError(status, is_authenticated)
        return status

    def run(self, text: str, mode: TranslationMode, is_authenticated: bool = False) -> AnyResult:
        """
        Perform one quota-counted action.

        Raises:
            QuotaExceededError: Before any network call when no action is left
            TranslationError: When the provider call fails (nothing is recorded)
        """
        self._check(is_authenticated)
        result = self.client.translate(text, mode)
        self.quota.record_consumption(is_authenticated)
        return result

    async def arun(self, text: str, mode: TranslationMode, is_authenticated: bool = False) -> AnyResult:
        """Async counterpart of ``run``."""
        self._check(is_authenticated)
        result = await self.client.atranslate(text, mode)
        self.quota.record_consumption(is_authenticated)
        return result

    def login(self) -> QuotaStatus:
        """Carry guest usage over to the logged-in identity."""
        self.quota.migrate_on_login()
        return self.quota.can_translate(True)

    def status(self, is_authenticated: bool = False) -> QuotaStatus:
        return self.quota.can_translate(is_authenticated)

    def summary(self, is_authenticated: bool = False) -> QuotaSummary:
        return self.quota.get_summary(is_authenticated)

    def close(self) -> None:
        """Close the quota storage."""
        self.quota.storage.close()

    def __enter__(self) -> "DecodeDesk":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
