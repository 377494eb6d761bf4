"""
Sanitization of caller text before it is placed into a prompt template.

The caller's text must not be able to change the instructions given to the
model or forge labelled fields that the reply parsers would then trust.
"""

import re
from typing import Iterable

from decodedesk.translation.prompts import PLACEHOLDER, PromptTemplate

MAX_INPUT_CHARS = 2000

# Labels of every output format; longer labels first so alternation prefers them
RESERVED_LABELS = (
    "New Corporate Word",
    "New GenZ Word",
    "User Description",
    "Corporate Version",
    "GenZ Version",
    "Corporate Says",
    "GenZ Says",
    "Plain English",
    "Actually Means",
    "Explanation",
    "Meaning",
    "Example",
    "Corporate",
    "GenZ",
)

_BRACES = re.compile(r"[{}]")
_SECTION_SEPARATOR = re.compile(r"\n\s*--\s*\n")


def _label_line_pattern(labels: Iterable[str]) -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(label) for label in labels)
    return re.compile(
        rf"^[ \t]*(?:{alternatives})(?:/Phrase)?[ \t]*:.*(?:\r?\n|$)",
        re.IGNORECASE | re.MULTILINE,
    )


_LABEL_LINE = _label_line_pattern(RESERVED_LABELS)


def sanitize_user_input(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    """
    Clean caller text for safe substitution into a prompt.

    Steps, in order:
      1. drop ``{`` and ``}`` so the text cannot re-create the placeholder
      2. drop every line that starts with a reserved output label and a colon
      3. collapse ``--`` section separator lines into a single space
      4. trim and truncate to ``max_chars`` characters

    Args:
        text: Raw caller text (may be empty)
        max_chars: Maximum length of the returned text

    Returns:
        Sanitized text, at most ``max_chars`` long
    """
    cleaned = _BRACES.sub("", text or "")
    cleaned = _LABEL_LINE.sub("", cleaned)
    cleaned = _SECTION_SEPARATOR.sub(" ", cleaned)
    return cleaned.strip()[:max_chars]


def render_prompt(template: PromptTemplate, text: str) -> str:
    """Fill the template's single placeholder with sanitized caller text."""
    return template.template.replace(PLACEHOLDER, sanitize_user_input(text), 1)
