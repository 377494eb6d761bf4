"""
DecodeDesk: corporate jargon and GenZ slang, in plain English.

Two components sit behind the DecodeDesk service:

1. QuotaManager - guest and weekly user allowances over a rolling 7-day window
2. TranslationClient - prompt templating, bounded retries against the
   OpenRouter chat-completion API and tolerant reply parsing

Usage:
    from decodedesk import DecodeDesk, TranslationMode, load_config

    desk = DecodeDesk.from_config(load_config())
    result = desk.run("Let's circle back", TranslationMode.DECODE)
    print(result.translation)
"""

__version__ = "1.0.0"
__author__ = "DecodeDesk Team"
__license__ = "MIT"

from decodedesk.core.exceptions import (
    DecodeDeskError,
    ConfigurationError,
    StorageError,
    QuotaExceededError,
    TranslationError,
    CredentialsMissingError,
    ProviderAuthenticationError,
    ProviderCreditsError,
    ProviderRateLimitError,
    TranslationUnavailableError,
)
from decodedesk.core.models import (
    QuotaRecord,
    QuotaStatus,
    QuotaSummary,
    TranslationResult,
    GenerationResult,
    CrossTranslationResult,
)
from decodedesk.translation.modes import TranslationMode, ModeKind
from decodedesk.quota.manager import QuotaManager, QuotaLimits
from decodedesk.quota.storage import MemoryQuotaStorage, DiskQuotaStorage, create_storage
from decodedesk.translation.client import TranslationClient
from decodedesk.translation.backends.openrouter_backend import OpenRouterBackend
from decodedesk.service import DecodeDesk
from decodedesk.utils.config_loader import load_config

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "DecodeDeskError", "ConfigurationError", "StorageError", "QuotaExceededError",
    "TranslationError", "CredentialsMissingError", "ProviderAuthenticationError",
    "ProviderCreditsError", "ProviderRateLimitError", "TranslationUnavailableError",
    "QuotaRecord", "QuotaStatus", "QuotaSummary",
    "TranslationResult", "GenerationResult", "CrossTranslationResult",
    "TranslationMode", "ModeKind",
    "QuotaManager", "QuotaLimits", "MemoryQuotaStorage", "DiskQuotaStorage", "create_storage",
    "TranslationClient", "OpenRouterBackend",
    "DecodeDesk",
    "load_config",
]
