"""Rule-based intent classification for utterances.

Patterns are tried in a fixed priority order and the first hit wins. When
nothing specific matches, the utterance is still classified as a general
question, with lower confidence the less question-like it looks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from kontext.context.keywords import extract_keywords
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

Intent = Literal[
    "birthday_query",
    "schedule_query",
    "person_query",
    "project_query",
    "knowledge_store",
    "email_compose",
    "todo_create",
    "knowledge_delete",
    "general_question",
]

PATTERN_CONFIDENCE = 0.9
QUESTION_CONFIDENCE = 0.7
FALLBACK_CONFIDENCE = 0.5

_RETRIEVAL_INTENTS = frozenset(
    {"birthday_query", "schedule_query", "person_query", "project_query", "general_question"}
)
_COMMAND_INTENTS = frozenset({"knowledge_store", "knowledge_delete"})

_ENTITY_TYPES: dict[str, list[str]] = {
    "birthday_query": ["person"],
    "person_query": ["person"],
    "project_query": ["project", "decision", "deadline"],
}

_OUTPUT_TYPES: dict[str, str] = {
    "email_compose": "email",
    "todo_create": "todo",
    "general_question": "question",
}


@dataclass
class IntentDetectionResult:
    intent: str
    confidence: float
    extracted_entity: str | None = None
    keywords: list[str] = field(default_factory=list)


def _clean_entity(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip().rstrip("?!.").strip()
    return cleaned or None


def detect_intent(text: str, locale: Locale | None = None) -> IntentDetectionResult:
    """Classify *text*; never fails and always returns some intent."""
    locale = locale or get_locale()
    normalized = text.strip()
    keywords = extract_keywords(normalized, locale)

    for rule in locale.intent_patterns:
        for pattern in rule.patterns:
            match = pattern.search(normalized)
            if match is None:
                continue
            entity = match.groupdict().get("entity")
            logger.debug("Intent %s matched by %r", rule.intent, pattern.pattern)
            return IntentDetectionResult(
                intent=rule.intent,
                confidence=PATTERN_CONFIDENCE,
                extracted_entity=_clean_entity(entity),
                keywords=keywords,
            )

    is_question = any(p.search(normalized) for p in locale.question_indicators)
    return IntentDetectionResult(
        intent="general_question",
        confidence=QUESTION_CONFIDENCE if is_question else FALLBACK_CONFIDENCE,
        keywords=keywords,
    )


def requires_context_retrieval(intent: str) -> bool:
    return intent in _RETRIEVAL_INTENTS


def get_relevant_entity_types(intent: str) -> list[str] | None:
    """Entity types to restrict retrieval to, or None for no restriction."""
    types = _ENTITY_TYPES.get(intent)
    return list(types) if types is not None else None


def is_command_intent(intent: str) -> bool:
    """Commands act on the knowledge base instead of producing output."""
    return intent in _COMMAND_INTENTS


def get_output_type_from_intent(intent: str) -> str | None:
    return _OUTPUT_TYPES.get(intent)
