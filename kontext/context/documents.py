"""Retrieval over analysed documents.

Documents are matched against their structured analysis (summary, topics,
entities, facts, actions), not their raw text. Each field is scored
independently as the fraction of query keywords it contains, then the
fields are blended by weight. Fields a document does not have are left out
of the blend entirely, so a sparse analysis is not penalised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from kontext.config import settings
from kontext.context.keywords import extract_document_keywords
from kontext.documents.models import DocumentContext, DocumentEntry
from kontext.knowledge.models import KnowledgeReference
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

SUMMARY_WEIGHT = 0.3
TOPICS_WEIGHT = 0.2
ENTITIES_WEIGHT = 0.2
FACTS_WEIGHT = 0.15
ACTIONS_WEIGHT = 0.15

MAX_SNIPPET_TOPICS = 5
MAX_ENTITIES_PER_TYPE = 10
MAX_RELATIONSHIPS = 8
MAX_KEY_FACTS = 8
MAX_ACTION_ITEMS = 5
MAX_DECISIONS = 5

# Entity group order for people questions; remaining groups follow.
PEOPLE_FIRST_ORDER = ("person", "company", "project", "technology", "deadline", "decision")

DOCUMENT_ID_PREFIX = "doc:"


@dataclass
class DocumentRetrievalResult:
    references: list[KnowledgeReference] = field(default_factory=list)
    matched_documents: list[str] = field(default_factory=list)
    total_matches: int = 0


# -- Scoring -----------------------------------------------------------------


def _field_texts(context: DocumentContext) -> list[tuple[str, float]]:
    summary = " ".join(
        [context.summary.brief, context.summary.standard, context.summary.comprehensive]
    )
    topics = " ".join(
        part
        for topic in context.topics
        for part in [topic.name, *topic.subtopics, *topic.related_keywords]
    )
    entities = " ".join(f"{e.text} {e.context}" for e in context.entities)
    facts = " ".join(f.fact for f in context.key_facts)
    actions = " ".join(
        [
            *(f"{a.task} {a.assignee or ''}" for a in context.action_items),
            *(d.decision for d in context.decisions),
            *(d.description for d in context.deadlines),
        ]
    )
    return [
        (summary, SUMMARY_WEIGHT),
        (topics, TOPICS_WEIGHT),
        (entities, ENTITIES_WEIGHT),
        (facts, FACTS_WEIGHT),
        (actions, ACTIONS_WEIGHT),
    ]


def calculate_document_relevance(document: DocumentEntry, keywords: list[str]) -> float:
    """Weighted keyword coverage of the document's analysis, in [0, 1]."""
    if document.context is None or not keywords:
        return 0.0

    score = 0.0
    total_weight = 0.0
    for text, weight in _field_texts(document.context):
        normalized = text.strip().lower()
        if not normalized:
            continue
        matches = sum(1 for kw in keywords if kw in normalized)
        score += matches / len(keywords) * weight
        total_weight += weight

    return score / total_weight if total_weight > 0 else 0.0


# -- Snippets ----------------------------------------------------------------


def _is_people_question(keywords: list[str], locale: Locale) -> bool:
    return any(kw in locale.people_words for kw in keywords)


def _entity_lines(context: DocumentContext, people_question: bool, locale: Locale) -> list[str]:
    other = locale.labels.other_entities
    groups: dict[str, list[str]] = {}
    for entity in context.entities:
        text = f"{entity.text} ({entity.context})" if entity.context else entity.text
        groups.setdefault(entity.type or other, []).append(text)

    if people_question:
        order = [t for t in PEOPLE_FIRST_ORDER if t in groups]
        order += [t for t in groups if t not in order]
    else:
        order = list(groups)

    lines = []
    for entity_type in order:
        items = groups[entity_type]
        if not (people_question and entity_type == "person"):
            items = items[:MAX_ENTITIES_PER_TYPE]
        label = locale.labels.entity_types.get(entity_type, entity_type)
        lines.append(f"{label}: {'; '.join(items)}")
    return lines


def build_document_snippet(
    document: DocumentEntry, keywords: list[str] | None = None, locale: Locale | None = None
) -> str:
    """Multi-line digest of a document's analysis for the generation prompt.

    For people questions ("wer", "team", ...) the person group comes first
    and is never truncated.
    """
    locale = locale or get_locale()
    labels = locale.labels
    if document.context is None:
        return f'{labels.document}: "{document.filename}"'

    context = document.context
    people_question = _is_people_question(keywords or [], locale)
    parts = [f'{labels.document}: "{document.filename}"']

    if context.summary.brief:
        parts.append(f"{labels.summary}: {context.summary.brief}")
    if context.topics:
        names = [t.name for t in context.topics[:MAX_SNIPPET_TOPICS]]
        parts.append(f"{labels.topics}: {', '.join(names)}")
    parts.extend(_entity_lines(context, people_question, locale))
    if context.relationships:
        rels = [
            f"{r.entity1} → {r.entity2}: {r.description}"
            for r in context.relationships[:MAX_RELATIONSHIPS]
        ]
        parts.append(f"{labels.relationships}: {'; '.join(rels)}")
    if context.key_facts:
        facts = [f.fact for f in context.key_facts[:MAX_KEY_FACTS]]
        parts.append(f"{labels.key_facts}: {'; '.join(facts)}")
    if context.action_items:
        actions = [
            f"{a.task} ({a.assignee})" if a.assignee else a.task
            for a in context.action_items[:MAX_ACTION_ITEMS]
        ]
        parts.append(f"{labels.action_items}: {'; '.join(actions)}")
    if context.decisions:
        decisions = [d.decision for d in context.decisions[:MAX_DECISIONS]]
        parts.append(f"{labels.decisions}: {'; '.join(decisions)}")
    if context.deadlines:
        deadlines = [f"{d.description} ({d.date})" for d in context.deadlines]
        parts.append(f"{labels.deadlines}: {'; '.join(deadlines)}")

    return "\n".join(parts)


# -- Retrieval ---------------------------------------------------------------


def retrieve_document_context(
    documents: Iterable[DocumentEntry],
    query: str,
    mode: str,
    *,
    limit: int | None = None,
    min_relevance: float | None = None,
) -> DocumentRetrievalResult:
    """Rank completed document analyses in *mode* against *query*.

    A query with no usable keywords matches nothing.
    """
    if limit is None:
        limit = settings.document_limit
    if min_relevance is None:
        min_relevance = settings.document_min_relevance

    candidates = [doc for doc in documents if doc.mode == mode and doc.is_searchable]
    if not candidates:
        return DocumentRetrievalResult()

    keywords = extract_document_keywords(query)
    if not keywords:
        return DocumentRetrievalResult()

    scored = [(doc, calculate_document_relevance(doc, keywords)) for doc in candidates]
    ranked = sorted(
        (pair for pair in scored if pair[1] >= min_relevance),
        key=lambda pair: pair[1],
        reverse=True,
    )[: max(limit, 0)]

    references = [
        KnowledgeReference(
            id=f"{DOCUMENT_ID_PREFIX}{doc.id}",
            snippet=build_document_snippet(doc, keywords),
            relevance_score=score,
            source="files",
        )
        for doc, score in ranked
    ]
    logger.debug(
        "Document retrieval: %d candidate(s), %d returned", len(candidates), len(references)
    )
    return DocumentRetrievalResult(
        references=references,
        matched_documents=[doc.filename for doc, _ in ranked],
        total_matches=len(ranked),
    )
