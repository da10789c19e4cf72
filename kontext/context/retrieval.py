"""Knowledge retrieval: filter by mode and entity type, score, rank, truncate."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from kontext.config import settings
from kontext.context.keywords import extract_keywords
from kontext.context.scoring import score_entry
from kontext.knowledge.models import KnowledgeEntry, KnowledgeReference
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

SNIPPET_MAX_LENGTH = 150
ELLIPSIS = "..."


@dataclass
class ContextRetrievalResult:
    context: list[KnowledgeReference] = field(default_factory=list)
    matched_keywords: list[str] = field(default_factory=list)
    total_matches: int = 0


def create_snippet(content: str, max_length: int = SNIPPET_MAX_LENGTH) -> str:
    """Cut *content* to *max_length* characters, ending in an ellipsis when cut."""
    if len(content) <= max_length:
        return content
    return content[: max_length - len(ELLIPSIS)] + ELLIPSIS


def _passes_filters(
    entry: KnowledgeEntry, mode: str, entity_types: Iterable[str] | None
) -> bool:
    if entry.mode != mode:
        return False
    if entity_types:
        return entry.entity_type is not None and entry.entity_type in entity_types
    return True


def retrieve_context(
    entries: Iterable[KnowledgeEntry],
    query: str,
    mode: str,
    *,
    limit: int | None = None,
    entity_types: list[str] | None = None,
    min_relevance: float | None = None,
    now: datetime | None = None,
) -> ContextRetrievalResult:
    """Rank knowledge entries in *mode* against *query*.

    Entries are never mutated. Ties in score keep input order; callers
    should not rely on that order.

    Args:
        entries: The knowledge collection snapshot.
        query: Free-text utterance.
        mode: Partition to search; entries of other modes are never returned.
        limit: Max references (default from settings).
        entity_types: If non-empty, only entries tagged with one of these.
        min_relevance: Score floor (default from settings).
        now: Reference time for recency scoring.

    Returns:
        ContextRetrievalResult with at most *limit* references.
    """
    if limit is None:
        limit = settings.knowledge_limit
    if min_relevance is None:
        min_relevance = settings.knowledge_min_relevance
    now = now or datetime.now(UTC)

    keywords = extract_keywords(query)
    scored = [
        score_entry(entry, keywords, now)
        for entry in entries
        if _passes_filters(entry, mode, entity_types)
    ]
    ranked = sorted(
        (s for s in scored if s.score >= min_relevance),
        key=lambda s: s.score,
        reverse=True,
    )[: max(limit, 0)]

    context = [
        KnowledgeReference(
            id=s.entry.id,
            snippet=create_snippet(s.entry.content),
            relevance_score=s.score,
            source="knowledge",
        )
        for s in ranked
    ]
    matched = list(dict.fromkeys(term for s in ranked for term in s.matched_terms))

    logger.debug(
        "Knowledge retrieval: %d candidate(s), %d returned, keywords=%s",
        len(scored),
        len(context),
        keywords,
    )
    return ContextRetrievalResult(
        context=context, matched_keywords=matched, total_matches=len(ranked)
    )


def build_context_string(
    references: list[KnowledgeReference], locale: Locale | None = None
) -> str:
    """Render references as a numbered block for the generation prompt."""
    if not references:
        return ""
    locale = locale or get_locale()
    lines = [f"[{i}] {ref.snippet}" for i, ref in enumerate(references, start=1)]
    return f"{locale.labels.knowledge_heading}\n" + "\n".join(lines)
