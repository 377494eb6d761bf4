"""Unit tests for translation modes and the prompt library."""

import pytest

from decodedesk.core.exceptions import ConfigurationError
from decodedesk.translation.modes import ModeKind, TranslationMode
from decodedesk.translation.prompts import PLACEHOLDER, PromptLibrary, PromptTemplate


class TestTranslationMode:

    @pytest.mark.parametrize("value, expected", [
        ("decode", TranslationMode.DECODE),
        ("DECODE_GENZ", TranslationMode.DECODE_GENZ),
        (" generate-corporate ", TranslationMode.GENERATE_CORPORATE),
        (TranslationMode.CORPORATE_TO_GENZ, TranslationMode.CORPORATE_TO_GENZ),
    ])
    def test_parse(self, value, expected):
        assert TranslationMode.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TranslationMode.parse("translate-klingon")
        assert "decode-genz" in exc_info.value.valid_values

    def test_kinds(self):
        assert TranslationMode.DECODE_GENZ.kind is ModeKind.DECODE
        assert TranslationMode.GENERATE_GENZ.kind is ModeKind.GENERATE
        assert TranslationMode.GENZ_TO_CORPORATE.kind is ModeKind.CROSS

    def test_only_generate_accepts_empty_input(self):
        accepting = {mode for mode in TranslationMode if mode.accepts_empty_input}
        assert accepting == {TranslationMode.GENERATE_CORPORATE, TranslationMode.GENERATE_GENZ}


class TestPromptLibrary:

    def test_one_template_per_mode(self):
        library = PromptLibrary()
        for mode in TranslationMode:
            template = library.get(mode)
            assert template.mode is mode
            assert template.template.count(PLACEHOLDER) == 1

    def test_get_by_name(self):
        assert PromptLibrary().get("corporate-to-genz").name == "corporate_to_genz"

    def test_templates_show_their_output_labels(self):
        for template in PromptLibrary().templates.values():
            for label in template.output_labels:
                assert f"{label}:" in template.template

    def test_cross_templates_use_parser_labels(self):
        library = PromptLibrary()
        assert "Corporate Says:" in library.get(TranslationMode.CORPORATE_TO_GENZ).template
        assert "GenZ Says:" in library.get(TranslationMode.GENZ_TO_CORPORATE).template

    def test_add_template_replaces(self):
        library = PromptLibrary()
        custom = PromptTemplate(
            name="terse_decode",
            mode=TranslationMode.DECODE,
            template="Explain: {userInput}\nPlain English:",
            output_labels=("Plain English",)
        )
        library.add_template(custom)
        assert library.get(TranslationMode.DECODE) is custom

    def test_template_needs_exactly_one_slot(self):
        with pytest.raises(ConfigurationError):
            PromptTemplate(name="bad", mode=TranslationMode.DECODE, template="no slot")
        with pytest.raises(ConfigurationError):
            PromptTemplate(name="bad", mode=TranslationMode.DECODE, template="{userInput} {userInput}")
