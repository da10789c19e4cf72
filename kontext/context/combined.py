"""Merge knowledge and document retrieval into one ranked reference list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from kontext.context.documents import DocumentRetrievalResult, retrieve_document_context
from kontext.context.retrieval import ContextRetrievalResult, retrieve_context
from kontext.documents.models import DocumentEntry
from kontext.knowledge.models import KnowledgeEntry, KnowledgeReference
from kontext.locale import Locale, get_locale


@dataclass
class CombinedContextResult:
    references: list[KnowledgeReference] = field(default_factory=list)
    knowledge: ContextRetrievalResult = field(default_factory=ContextRetrievalResult)
    documents: DocumentRetrievalResult = field(default_factory=DocumentRetrievalResult)
    context_string: str = ""

    @property
    def total_matches(self) -> int:
        return self.knowledge.total_matches + self.documents.total_matches


def _numbered(references: list[KnowledgeReference]) -> str:
    return "\n".join(f"[{i}] {ref.snippet}" for i, ref in enumerate(references, start=1))


def build_combined_context_string(
    knowledge_refs: list[KnowledgeReference],
    document_refs: list[KnowledgeReference],
    locale: Locale | None = None,
) -> str:
    """Two-part prompt block; a section is omitted when it has no references."""
    locale = locale or get_locale()
    sections = []
    if knowledge_refs:
        sections.append(f"{locale.labels.knowledge_heading}\n{_numbered(knowledge_refs)}")
    if document_refs:
        sections.append(f"{locale.labels.document_heading}\n{_numbered(document_refs)}")
    return "\n\n".join(sections)


def retrieve_combined_context(
    entries: Iterable[KnowledgeEntry],
    documents: Iterable[DocumentEntry],
    query: str,
    mode: str,
    *,
    knowledge_limit: int | None = None,
    document_limit: int | None = None,
    entity_types: list[str] | None = None,
    now: datetime | None = None,
) -> CombinedContextResult:
    """Run both retrievers (each with its own limit) and merge by score."""
    knowledge = retrieve_context(
        entries, query, mode, limit=knowledge_limit, entity_types=entity_types, now=now
    )
    docs = retrieve_document_context(documents, query, mode, limit=document_limit)

    merged = sorted(
        [*knowledge.context, *docs.references],
        key=lambda ref: ref.relevance_score,
        reverse=True,
    )
    return CombinedContextResult(
        references=merged,
        knowledge=knowledge,
        documents=docs,
        context_string=build_combined_context_string(knowledge.context, docs.references),
    )
