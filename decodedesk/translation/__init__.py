"""Translation request client: modes, prompts, sanitization, parsing and backends."""

from .modes import TranslationMode, ModeKind

__all__ = [
    'TranslationMode',
    'ModeKind'
]
