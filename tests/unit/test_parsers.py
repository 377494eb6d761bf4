"""Unit tests for reply parsing and fallback values."""

from decodedesk.translation.modes import TranslationMode
from decodedesk.translation.parsers import (
    DECODE_PARSER,
    FALLBACK_CROSS_TRANSLATION,
    FALLBACK_GENERATION,
    Fallback,
    LabelRule,
    Recognized,
    ReplyParser,
    after_label,
    parse_reply,
)


class TestReplyParser:

    def test_recognized(self):
        outcome = DECODE_PARSER.parse("Corporate: x\nPlain English: Let's talk later\nExplanation: y")
        assert isinstance(outcome, Recognized)
        assert outcome.fields == {"translation": "Let's talk later"}

    def test_fallback_when_no_label(self):
        outcome = DECODE_PARSER.parse("Just some prose.")
        assert isinstance(outcome, Fallback)
        assert outcome.raw_text == "Just some prose."

    def test_empty_value_not_assigned(self):
        assert isinstance(DECODE_PARSER.parse("Plain English:\n"), Fallback)

    def test_first_rule_claims_line(self):
        parser = ReplyParser(rules=[
            LabelRule("a", ("alpha:",)),
            LabelRule("b", ("alpha: beta:",)),
        ])
        outcome = parser.parse("alpha: beta: value")
        assert outcome.fields == {"a": "beta: value"}

    def test_last_match_wins_by_default(self):
        parser = ReplyParser(rules=[LabelRule("meaning", ("meaning:",))])
        assert parser.parse("Meaning: one\nMeaning: two").fields["meaning"] == "two"

    def test_after_label(self):
        assert after_label("The text actually means: be quiet", "actually means:") == "be quiet"


class TestDecodeResults:

    def test_plain_english_label(self):
        reply = 'Corporate: "Circle back"\nPlain English: "Talk later."\nExplanation: Stalling.'
        result = parse_reply(reply, TranslationMode.DECODE, original="Circle back")
        assert result.translation == '"Talk later."'
        assert result.original == "Circle back"
        assert result.used_fallback is False

    def test_first_plain_english_wins(self):
        reply = "Plain English: first\nPlain English: second"
        assert parse_reply(reply, TranslationMode.DECODE_GENZ).translation == "first"

    def test_actually_means_label(self):
        result = parse_reply("It actually means: we are cutting costs", TranslationMode.DECODE)
        assert result.translation == "we are cutting costs"

    def test_fallback_is_whole_reply(self):
        result = parse_reply("  It means nothing really.  \n", TranslationMode.DECODE_GENZ)
        assert result.translation == "It means nothing really."
        assert result.used_fallback is True
        assert result.mode is TranslationMode.DECODE_GENZ


class TestGenerationResults:

    def test_all_fields(self):
        reply = (
            'New Corporate Word/Phrase: "Toolboarding"\n'
            "Meaning: Rapid adoption of a new tool.\n"
            'Example: "Toolboarding starts Monday."'
        )
        result = parse_reply(reply, TranslationMode.GENERATE_CORPORATE)
        assert result.word == '"Toolboarding"'
        assert result.meaning == "Rapid adoption of a new tool."
        assert result.example == '"Toolboarding starts Monday."'
        assert result.used_fallback is False

    def test_genz_word_label(self):
        result = parse_reply("New GenZ Word/Phrase: Inboxplosion", TranslationMode.GENERATE_GENZ)
        assert result.word == "Inboxplosion"
        assert result.meaning == FALLBACK_GENERATION["meaning"]
        assert result.used_fallback is True

    def test_no_labels_gives_placeholders(self):
        result = parse_reply("I refuse to follow formats.", TranslationMode.GENERATE_CORPORATE)
        assert result.word and result.meaning and result.example
        assert (result.word, result.meaning, result.example) == (
            FALLBACK_GENERATION["word"], FALLBACK_GENERATION["meaning"], FALLBACK_GENERATION["example"]
        )
        assert result.used_fallback is True


class TestCrossTranslationResults:

    def test_corporate_to_genz(self):
        reply = (
            'Corporate Says: "Leverage synergies"\n'
            'GenZ Version: "Team up fr"\n'
            "Explanation: Work together."
        )
        result = parse_reply(reply, TranslationMode.CORPORATE_TO_GENZ)
        assert result.original == '"Leverage synergies"'
        assert result.translated == '"Team up fr"'
        assert result.meaning == "Work together."
        assert result.used_fallback is False

    def test_genz_to_corporate(self):
        reply = "GenZ Says: no cap\nCorporate Version: Honestly speaking\nExplanation: Sincerity."
        result = parse_reply(reply, TranslationMode.GENZ_TO_CORPORATE)
        assert result.translated == "Honestly speaking"
        assert result.mode is TranslationMode.GENZ_TO_CORPORATE

    def test_missing_fields_use_placeholders(self):
        result = parse_reply("Corporate Version: Kindly advise", TranslationMode.GENZ_TO_CORPORATE)
        assert result.translated == "Kindly advise"
        assert result.original == FALLBACK_CROSS_TRANSLATION["original"]
        assert result.meaning == FALLBACK_CROSS_TRANSLATION["meaning"]
        assert result.used_fallback is True
