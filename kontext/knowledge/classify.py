"""Heuristics deciding whether an utterance should be stored as knowledge.

Questions and requests for output carry no new facts and are not stored
verbatim; explicit "merk dir ..." style requests always are.
"""

from __future__ import annotations

from kontext.knowledge.models import EntityType, ExtractedEntity
from kontext.locale import Locale, get_locale

PRIMARY_TYPE_PRIORITY: tuple[EntityType, ...] = (
    "project",
    "person",
    "decision",
    "deadline",
    "company",
    "technology",
    "fact",
    "preference",
    "unknown",
)
PRIMARY_TYPE_MIN_CONFIDENCE = 0.6

SUMMARY_MAX_CHARS = 200
SUMMARY_PREFIX_CHARS = 100
SUMMARY_MAX_ENTITIES = 5
SUMMARY_MIN_CONFIDENCE = 0.5


def is_explicit_storage_request(text: str, locale: Locale | None = None) -> bool:
    locale = locale or get_locale()
    return any(p.search(text) for p in locale.storage_request)


def is_question_or_request(text: str, locale: Locale | None = None) -> bool:
    """True for questions and for requests asking for output.

    A request that also asks to remember something is not counted.
    """
    locale = locale or get_locale()
    trimmed = text.strip().lower()

    if any(p.search(trimmed) for p in locale.question_patterns):
        return True
    if any(p.search(trimmed) for p in locale.request_patterns):
        return not is_explicit_storage_request(trimmed, locale)
    return False


def should_store_verbatim(text: str, locale: Locale | None = None) -> bool:
    locale = locale or get_locale()
    if is_explicit_storage_request(text, locale):
        return True
    return not is_question_or_request(text, locale)


def get_primary_entity_type(entities: list[ExtractedEntity]) -> EntityType | None:
    """Highest-priority confidently detected type, else the most confident one."""
    if not entities:
        return None
    for entity_type in PRIMARY_TYPE_PRIORITY:
        if any(
            e.type == entity_type and e.confidence >= PRIMARY_TYPE_MIN_CONFIDENCE
            for e in entities
        ):
            return entity_type
    return max(entities, key=lambda e: e.confidence).type


def create_content_summary(text: str, entities: list[ExtractedEntity]) -> str:
    """Shorten long utterances for storage, listing the main entities found."""
    if len(text) <= SUMMARY_MAX_CHARS:
        return text

    names = [e.text for e in entities if e.confidence >= SUMMARY_MIN_CONFIDENCE]
    names = names[:SUMMARY_MAX_ENTITIES]
    if names:
        return f"{text[:SUMMARY_PREFIX_CHARS]}... [{', '.join(names)}]"
    return text[:SUMMARY_MAX_CHARS] + "..."
