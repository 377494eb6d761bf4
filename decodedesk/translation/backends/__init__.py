"""Completion backend implementations."""

from .openrouter_backend import OpenRouterBackend, classify_error

__all__ = [
    'OpenRouterBackend',
    'classify_error'
]
