"""Prompt templates for LLM-backed intent classification."""

from collections.abc import Iterable

from intentbot.catalog.intent import IntentDefinition

NO_INTENT_LABEL = "none"

CLASSIFICATION_PROMPT_TEMPLATE = (
    "You are an intent classifier for {ident}. Classify the user message "
    "into exactly one of the intents listed below. If none of them applies, "
    "answer with the intent \"{none}\".\n\n"
    "INTENTS:\n"
    "{intents}\n\n"
    "Respond ONLY with a JSON object of the form:\n"
    "{{\"intent\": \"<INTENT_ID>\", \"confidence\": <number between 0 and 1>}}"
)


def format_intent_line(intent: IntentDefinition) -> str:
    """Render one catalog entry for the prompt."""
    examples = ", ".join(f'"{pattern}"' for pattern in intent.patterns[:3])
    description = intent.description or intent.name
    return f"- {intent.id}: {description} (e.g. {examples})"


def build_classification_prompt(
    intents: Iterable[IntentDefinition],
    ident: str = "a Spanish-language shopping assistant",
) -> str:
    """Return the system prompt listing the catalog's intents."""
    return CLASSIFICATION_PROMPT_TEMPLATE.format(
        ident=ident,
        none=NO_INTENT_LABEL,
        intents="\n".join(format_intent_line(intent) for intent in intents),
    )
