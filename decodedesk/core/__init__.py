"""Core exceptions and data models."""

from .exceptions import (
    DecodeDeskError,
    ConfigurationError,
    StorageError,
    QuotaExceededError,
    TranslationError,
)
from .models import (
    QuotaRecord,
    QuotaStatus,
    QuotaSummary,
    TranslationResult,
    GenerationResult,
    CrossTranslationResult,
)
