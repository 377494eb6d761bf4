"""
Prompt templates for each translation mode.

Every template ends with the labelled output format the reply parsers look
for and carries exactly one ``{userInput}`` slot for the sanitized caller text.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from decodedesk.core.exceptions import ConfigurationError
from decodedesk.translation.modes import TranslationMode


PLACEHOLDER = "{userInput}"


@dataclass
class PromptTemplate:
    """Template for one translation mode."""
    name: str
    mode: TranslationMode
    template: str
    # Labels of the output format, in the order the model should emit them
    output_labels: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.template.count(PLACEHOLDER) != 1:
            raise ConfigurationError(
                f"Prompt template '{self.name}' must contain exactly one {PLACEHOLDER} slot",
                config_key="prompts"
            )


DECODE_CORPORATE = """
You are a world-class business communication expert. Your task is to translate corporate jargon, buzzwords, and complex business language into plain, clear, and honest English.

When given a corporate phrase, email, or statement, output the true, plain meaning, remove any vague or evasive language, and briefly explain the hidden intent if any.

Instructions:
- Be accurate, concise, and honest.
- Retain professional tone but make the meaning clear to everyone, regardless of business background.
- If there is a hidden subtext or reason why someone might use the phrase, explain it in a friendly, non-judgmental way.

Output format:
Corporate: [Original corporate input]
Plain English: [Translation in plain language]
Explanation: [Brief context or why someone might use this phrase, if applicable]

Example:
Corporate: "Let's circle back after the next quarter's results."
Plain English: "Let's discuss this later, not now."
Explanation: The speaker is postponing the topic, likely to avoid commitment right now.
--

Corporate: "{userInput}"
Plain English:
Explanation:
"""

DECODE_GENZ = """
You are an expert in youth culture and digital communication. Your task is to decode GenZ slang, abbreviations, and expressive language into clear, plain English.

When given a GenZ word, phrase, or message, translate it accurately into standard, easy-to-understand English, and explain the meaning or context if it's not obvious.

Instructions:
- Output should be suitable for people unfamiliar with GenZ lingo.
- If the phrase is ambiguous, explain the possible interpretations.
- Be brief and positive.

Output format:
GenZ: [Original GenZ input]
Plain English: [Translation]
Explanation: [Explanation of the term, context, or usage, if needed]

Example:
GenZ: "That meeting was such a vibe."
Plain English: "That meeting had a good atmosphere."
Explanation: "A vibe" means the general mood or feeling was positive.

--

GenZ: "{userInput}"
Plain English:
Explanation:
"""

GENERATE_CORPORATE = """
You are a creative business consultant and expert in professional language.

Given a description or a scenario in plain English, invent a new, realistic corporate word or phrase that could plausibly be adopted in modern business communication. The word or phrase should be professional, not overly technical, and relevant for workplace use. Also, provide its meaning and an example of how it could be used in a business context.

Instructions:
- The new word/phrase should be original and professional.
- Do not use existing buzzwords. Be creative but realistic.
- Provide a short, clear meaning.
- Give a sample usage in a business sentence or email.

Output format:
New Corporate Word/Phrase: [invented term]
Meaning: [one-sentence definition]
Example: [business context usage]

Example:
User Description: "A word for when everyone in the company has to quickly adapt to a new tool."
New Corporate Word/Phrase: "Toolboarding"
Meaning: The rapid onboarding and adoption of a new digital tool company-wide.
Example: "Next week's focus is on effective toolboarding for our new CRM system."

--

User Description: "{userInput}"
New Corporate Word/Phrase:
Meaning:
Example:
"""

GENERATE_GENZ = """
You are an expert in GenZ internet culture and creative word formation.

Given a description or scenario in plain English, invent a new, fun GenZ word or phrase that feels natural for young people online or in text. Avoid real or existing slang; be creative and expressive. Also, provide its meaning and an example of how it might be used in a chat or post.

Instructions:
- Output should be appropriate and non-offensive.
- Make the word/phrase catchy and easy to say/type.
- Explain the meaning in simple terms.
- Show a natural-sounding example sentence.

Output format:
New GenZ Word/Phrase: [invented term]
Meaning: [plain English meaning]
Example: [sample chat/text/social post usage]

Example:
User Description: "A word for when you suddenly get a lot of emails."
New GenZ Word/Phrase: "Inboxplosion"
Meaning: When your inbox fills up with lots of new messages at once.
Example: "Ugh, just checked my phone and got an inboxplosion!"

--

User Description: "{userInput}"
New GenZ Word/Phrase:
Meaning:
Example:
"""

CORPORATE_TO_GENZ = """
You are a GenZ communication expert with a strong understanding of corporate jargon.

Given a formal corporate phrase or statement, translate it into a lively, modern GenZ style while keeping the core meaning. Make it relatable for young audiences, using current digital or chat-friendly language, but avoid confusing or obscure slang.

Instructions:
- The translation should be fun, expressive, and casual.
- If the corporate input is long, summarize the main idea before translating.
- Keep the translation appropriate and clear; explain any new coined phrases if necessary.

Output format:
Corporate Says: [original phrase]
GenZ Version: [GenZ-style translation]
Explanation: [plain English meaning, and if you made up a new term, explain it]

Example:
Corporate Says: "Let's leverage our core competencies to maximize stakeholder value."
GenZ Version: "Let's flex what we're good at and make everyone happy."
Explanation: This means using your team's main skills to get the best results for everyone involved.

--

Corporate Says: "{userInput}"
GenZ Version:
Explanation:
"""

GENZ_TO_CORPORATE = """
You are an experienced business professional who understands GenZ language and corporate communication.

Given a GenZ word, phrase, or message, translate it into formal, professional business English. Maintain the intent and tone, but make it suitable for a workplace or business setting. Explain your translation briefly.

Instructions:
- Output should be clear, polite, and fit for email or meetings.
- If needed, clarify the meaning for a traditional business audience.
- Avoid unnecessary buzzwords.

Output format:
GenZ Says: [original GenZ phrase]
Corporate Version: [business translation]
Explanation: [clarification or context]

Example:
GenZ Says: "Hard pass on another Zoom marathon."
Corporate Version: "I would prefer not to attend another lengthy video meeting."
Explanation: "Hard pass" means a strong refusal; "Zoom marathon" refers to back-to-back video meetings.

--

GenZ Says: "{userInput}"
Corporate Version:
Explanation:
"""


class PromptLibrary:
    """Library of prompt templates keyed by translation mode."""

    def __init__(self):
        self.templates: Dict[TranslationMode, PromptTemplate] = {}
        self._initialize_default_templates()

    def _initialize_default_templates(self):
        """Register one template per mode."""
        defaults = [
            PromptTemplate(
                name="decode_corporate",
                mode=TranslationMode.DECODE,
                template=DECODE_CORPORATE,
                output_labels=("Corporate", "Plain English", "Explanation")
            ),
            PromptTemplate(
                name="decode_genz",
                mode=TranslationMode.DECODE_GENZ,
                template=DECODE_GENZ,
                output_labels=("GenZ", "Plain English", "Explanation")
            ),
            PromptTemplate(
                name="generate_corporate",
                mode=TranslationMode.GENERATE_CORPORATE,
                template=GENERATE_CORPORATE,
                output_labels=("User Description", "New Corporate Word/Phrase", "Meaning", "Example")
            ),
            PromptTemplate(
                name="generate_genz",
                mode=TranslationMode.GENERATE_GENZ,
                template=GENERATE_GENZ,
                output_labels=("User Description", "New GenZ Word/Phrase", "Meaning", "Example")
            ),
            PromptTemplate(
                name="corporate_to_genz",
                mode=TranslationMode.CORPORATE_TO_GENZ,
                template=CORPORATE_TO_GENZ,
                output_labels=("Corporate Says", "GenZ Version", "Explanation")
            ),
            PromptTemplate(
                name="genz_to_corporate",
                mode=TranslationMode.GENZ_TO_CORPORATE,
                template=GENZ_TO_CORPORATE,
                output_labels=("GenZ Says", "Corporate Version", "Explanation")
            ),
        ]
        for template in defaults:
            self.add_template(template)

        missing = [mode.value for mode in TranslationMode if mode not in self.templates]
        if missing:
            raise ConfigurationError(
                f"No prompt template registered for modes: {', '.join(missing)}",
                config_key="prompts"
            )

    def add_template(self, template: PromptTemplate) -> None:
        """Register or replace the template for ``template.mode``."""
        self.templates[template.mode] = template

    def get(self, mode: TranslationMode) -> PromptTemplate:
        """Get the template for a mode."""
        return self.templates[TranslationMode.parse(mode)]

    def all_output_labels(self) -> List[str]:
        """Every output label used by a registered template."""
        labels: List[str] = []
        for template in self.templates.values():
            for label in template.output_labels:
                if label not in labels:
                    labels.append(label)
        return labels
