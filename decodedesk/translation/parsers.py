"""
Tolerant parsing of free-text model replies.

The model is asked for a labelled output format but is not trusted to follow
it. Label scanning is an ordered list of rules; a reply with no recognizable
label is a ``Fallback`` rather than an error, and missing fields are filled
with fixed placeholder values.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from decodedesk.core.models import (
    CrossTranslationResult,
    GenerationResult,
    TranslationResult,
)
from decodedesk.translation.modes import ModeKind, TranslationMode


FALLBACK_GENERATION = {
    "word": "Synergistic Alignmentality",
    "meaning": 'A fancy way of saying "working together"',
    "example": "We need more synergistic alignmentality in our quarterly initiatives.",
}

FALLBACK_CROSS_TRANSLATION = {
    "original": "Translation completed",
    "translated": "Successfully converted",
    "meaning": "The message has been transformed between communication styles",
}


@dataclass(frozen=True)
class Recognized:
    """At least one labelled field was found in the reply."""
    fields: Dict[str, str]
    raw_text: str


@dataclass(frozen=True)
class Fallback:
    """No labelled field was found; only the raw reply is available."""
    raw_text: str


ParsedOutcome = Union[Recognized, Fallback]


def after_first_colon(line: str, label: str) -> str:
    """Text following the first colon of the line."""
    _, _, rest = line.partition(":")
    return rest.strip()


def after_label(line: str, label: str) -> str:
    """Remainder of the line after the (case-insensitive) label."""
    start = line.lower().find(label)
    return line[start + len(label):].strip()


@dataclass(frozen=True)
class LabelRule:
    """Assigns ``field_name`` from lines containing any of ``labels``."""
    field_name: str
    labels: Tuple[str, ...]
    extractor: Callable[[str, str], str] = after_first_colon
    first_match_wins: bool = False

    def match(self, line: str) -> Optional[str]:
        """Return the matching label if ``line`` contains one."""
        lowered = line.lower()
        for label in self.labels:
            if label in lowered:
                return label
        return None


@dataclass
class ReplyParser:
    """Scans reply lines against an ordered list of label rules."""
    rules: Sequence[LabelRule] = field(default_factory=list)

    def parse(self, content: str) -> ParsedOutcome:
        """
        Scan each non-blank line; the first rule that matches a line claims it.

        Args:
            content: Raw completion text

        Returns:
            Recognized with the extracted fields, or Fallback with the raw text
        """
        fields: Dict[str, str] = {}
        lines = [line for line in (content or "").split("\n") if line.strip()]

        for line in lines:
            for rule in self.rules:
                label = rule.match(line)
                if label is None:
                    continue
                if not (rule.first_match_wins and rule.field_name in fields):
                    value = rule.extractor(line, label)
                    if value:
                        fields[rule.field_name] = value
                break

        if fields:
            return Recognized(fields=fields, raw_text=content)
        return Fallback(raw_text=content)


DECODE_PARSER = ReplyParser(rules=[
    LabelRule("translation", ("plain english:", "actually means:"),
              extractor=after_label, first_match_wins=True),
])

GENERATION_PARSER = ReplyParser(rules=[
    LabelRule("word", ("new corporate word", "new genz word")),
    LabelRule("meaning", ("meaning:",)),
    LabelRule("example", ("example:",)),
])

CROSS_TRANSLATION_PARSER = ReplyParser(rules=[
    LabelRule("original", ("genz says:", "corporate says:")),
    LabelRule("translated", ("corporate version:", "genz version:")),
    LabelRule("meaning", ("explanation:",)),
])

PARSERS: Dict[ModeKind, ReplyParser] = {
    ModeKind.DECODE: DECODE_PARSER,
    ModeKind.GENERATE: GENERATION_PARSER,
    ModeKind.CROSS: CROSS_TRANSLATION_PARSER,
}


def _fill(outcome: ParsedOutcome, defaults: Dict[str, str]) -> Tuple[Dict[str, str], bool]:
    found = outcome.fields if isinstance(outcome, Recognized) else {}
    values = {name: found.get(name) or default for name, default in defaults.items()}
    used_fallback = any(not found.get(name) for name in defaults)
    return values, used_fallback


def build_decode_result(outcome: ParsedOutcome, original: str, mode: TranslationMode) -> TranslationResult:
    """Decode modes fall back to the whole trimmed reply."""
    if isinstance(outcome, Recognized) and outcome.fields.get("translation"):
        return TranslationResult(original=original, translation=outcome.fields["translation"], mode=mode)
    return TranslationResult(
        original=original,
        translation=outcome.raw_text.strip(),
        mode=mode,
        used_fallback=True
    )


def build_generation_result(outcome: ParsedOutcome, mode: TranslationMode) -> GenerationResult:
    values, used_fallback = _fill(outcome, FALLBACK_GENERATION)
    return GenerationResult(mode=mode, used_fallback=used_fallback, **values)


def build_cross_translation_result(outcome: ParsedOutcome, mode: TranslationMode) -> CrossTranslationResult:
    values, used_fallback = _fill(outcome, FALLBACK_CROSS_TRANSLATION)
    return CrossTranslationResult(mode=mode, used_fallback=used_fallback, **values)


def parse_reply(
    content: str,
    mode: TranslationMode,
    original: str = ""
) -> Union[TranslationResult, GenerationResult, CrossTranslationResult]:
    """
    Parse a completion into the result record for ``mode``.

    Args:
        content: Raw completion text
        mode: Mode the request was made with
        original: Caller text, echoed back by decode results

    Returns:
        TranslationResult, GenerationResult or CrossTranslationResult
    """
    kind = mode.kind
    outcome = PARSERS[kind].parse(content)
    if kind is ModeKind.DECODE:
        return build_decode_result(outcome, original, mode)
    if kind is ModeKind.GENERATE:
        return build_generation_result(outcome, mode)
    return build_cross_translation_result(outcome, mode)

