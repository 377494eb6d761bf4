"""Translation modes: which prompt template and which reply parser a request uses."""

from enum import Enum
from typing import List

from decodedesk.core.exceptions import ConfigurationError


class ModeKind(Enum):
    """Shape of the result a mode produces."""
    DECODE = "decode"
    GENERATE = "generate"
    CROSS = "cross"


class TranslationMode(Enum):
    """Closed set of text transformations offered by DecodeDesk."""
    DECODE = "decode"
    DECODE_GENZ = "decode-genz"
    GENERATE_CORPORATE = "generate-corporate"
    GENERATE_GENZ = "generate-genz"
    GENZ_TO_CORPORATE = "genz-to-corporate"
    CORPORATE_TO_GENZ = "corporate-to-genz"

    @property
    def kind(self) -> ModeKind:
        return _MODE_KINDS[self]

    @property
    def accepts_empty_input(self) -> bool:
        """Generate modes treat the text as an optional creative seed."""
        return self.kind is ModeKind.GENERATE

    @classmethod
    def values(cls) -> List[str]:
        return [mode.value for mode in cls]

    @classmethod
    def parse(cls, value) -> "TranslationMode":
        """
        Convert a mode name to a TranslationMode.

        Args:
            value: Mode value such as ``"decode-genz"``, or a TranslationMode

        Returns:
            Matching TranslationMode

        Raises:
            ConfigurationError: If the value names no known mode
        """
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ConfigurationError(
            f"Unknown translation mode: {value!r}",
            config_key="mode",
            invalid_value=value,
            valid_values=cls.values()
        )


_MODE_KINDS = {
    TranslationMode.DECODE: ModeKind.DECODE,
    TranslationMode.DECODE_GENZ: ModeKind.DECODE,
    TranslationMode.GENERATE_CORPORATE: ModeKind.GENERATE,
    TranslationMode.GENERATE_GENZ: ModeKind.GENERATE,
    TranslationMode.GENZ_TO_CORPORATE: ModeKind.CROSS,
    TranslationMode.CORPORATE_TO_GENZ: ModeKind.CROSS,
}
