"""
Core data models for DecodeDesk.

Quota bookkeeping records and the flat result records produced by the
translation client.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from decodedesk.translation.modes import TranslationMode


def week_start(now: datetime) -> datetime:
    """Monday 00:00 of the calendar week containing ``now``."""
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` and naive local times."""
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


@dataclass
class QuotaRecord:
    """Persisted translation usage for the current quota window."""
    guest_used: int = 0
    user_used: int = 0
    week_start_date: Optional[datetime] = None
    first_translation_date: Optional[datetime] = None  # anchor of the rolling window

    @classmethod
    def fresh(cls, now: datetime) -> QuotaRecord:
        """All-zero record for the week containing ``now``."""
        return cls(guest_used=0, user_used=0, week_start_date=week_start(now))

    @property
    def total_used(self) -> int:
        return self.guest_used + self.user_used

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored JSON shape (camelCase keys, ISO timestamps)."""
        data: Dict[str, Any] = {
            "guestUsed": self.guest_used,
            "userUsed": self.user_used,
            "weekStartDate": self.week_start_date.isoformat() if self.week_start_date else None,
        }
        if self.first_translation_date is not None:
            data["firstTranslationDate"] = self.first_translation_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QuotaRecord:
        """
        Build a record from its stored JSON shape.

        Raises:
            ValueError: If counters are missing, not integers or negative,
                or a timestamp cannot be parsed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Quota record must be an object, got {type(data).__name__}")

        guest_used = data.get("guestUsed", 0)
        user_used = data.get("userUsed", 0)
        for name, value in (("guestUsed", guest_used), ("userUsed", user_used)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid {name}: {value!r}")

        week_start_raw = data.get("weekStartDate")
        first_raw = data.get("firstTranslationDate")
        return cls(
            guest_used=guest_used,
            user_used=user_used,
            week_start_date=parse_timestamp(week_start_raw) if week_start_raw else None,
            first_translation_date=parse_timestamp(first_raw) if first_raw else None,
        )


@dataclass
class QuotaStatus:
    """Answer to "may this caller translate right now"."""
    allowed: bool
    remaining: int
    total: int
    is_weekly_limit: bool
    days_until_reset: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class QuotaSummary:
    """Usage summary for dashboard display."""
    used: int
    total: int
    remaining: int
    reset_in: int
    identity: str  # "guest" or "user"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TranslationResult:
    """Decode result: the caller's text and its plain-English meaning."""
    original: str
    translation: str
    mode: TranslationMode = TranslationMode.DECODE
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "translation": self.translation,
            "mode": self.mode.value,
            "used_fallback": self.used_fallback
        }


@dataclass
class GenerationResult:
    """An invented word with its meaning and a usage example."""
    word: str
    meaning: str
    example: str
    mode: TranslationMode = TranslationMode.GENERATE_CORPORATE
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "meaning": self.meaning,
            "example": self.example,
            "mode": self.mode.value,
            "used_fallback": self.used_fallback
        }


@dataclass
class CrossTranslationResult:
    """A phrase rewritten from one communication style into the other."""
    original: str
    translated: str
    meaning: str
    mode: TranslationMode = TranslationMode.CORPORATE_TO_GENZ
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "translated": self.translated,
            "meaning": self.meaning,
            "mode": self.mode.value,
            "used_fallback": self.used_fallback
        }
