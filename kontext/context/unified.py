"""Single entry point for assembling generation context.

Combines knowledge and document retrieval with the conversation so far.
References cited on earlier assistant turns are carried over, so a source
mentioned a few turns ago stays available without being named again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from kontext.context.combined import retrieve_combined_context
from kontext.context.conversation import (
    build_conversation_context,
    extract_conversation_references,
)
from kontext.context.intent import get_relevant_entity_types, requires_context_retrieval
from kontext.conversation.models import Conversation
from kontext.documents.models import DocumentEntry
from kontext.knowledge.models import KnowledgeEntry, KnowledgeReference

logger = logging.getLogger(__name__)


@dataclass
class UnifiedContext:
    references: list[KnowledgeReference] = field(default_factory=list)
    total_matches: int = 0
    knowledge_matches: int = 0
    document_matches: int = 0
    context_string: str = ""
    conversation_context: str | None = None
    topic_summary: str | None = None
    conversation_references: list[KnowledgeReference] = field(default_factory=list)


def _prior_messages(conversation: Conversation, query: str) -> Conversation:
    """Drop the trailing message when it is the current utterance itself."""
    messages = conversation.messages
    if messages and messages[-1].role == "user" and messages[-1].content.strip() == query.strip():
        return conversation.model_copy(update={"messages": messages[:-1]})
    return conversation


def assemble_context(
    query: str,
    mode: str,
    knowledge_entries: Iterable[KnowledgeEntry],
    documents: Iterable[DocumentEntry] = (),
    conversation: Conversation | None = None,
    *,
    intent: str | None = None,
    knowledge_limit: int | None = None,
    document_limit: int | None = None,
    now: datetime | None = None,
) -> UnifiedContext:
    """Gather everything the generator should see for *query*.

    Args:
        query: The current utterance.
        mode: Partition to search.
        knowledge_entries: Knowledge collection snapshot.
        documents: Document collection snapshot.
        conversation: The active conversation. If its last message is the
            current utterance, that message is not treated as history.
        intent: Optional detected intent. Intents that do not need context
            skip retrieval; others may narrow the entity types searched.
        knowledge_limit: Max knowledge references (default from settings).
        document_limit: Max document references (default from settings).
        now: Reference time for recency scoring.
    """
    result = UnifiedContext()

    if intent is None or requires_context_retrieval(intent):
        entity_types = get_relevant_entity_types(intent) if intent else None
        combined = retrieve_combined_context(
            knowledge_entries,
            documents,
            query,
            mode,
            knowledge_limit=knowledge_limit,
            document_limit=document_limit,
            entity_types=entity_types,
            now=now,
        )
        result.references = list(combined.references)
        result.knowledge_matches = combined.knowledge.total_matches
        result.document_matches = combined.documents.total_matches
        result.total_matches = combined.total_matches
        result.context_string = combined.context_string

    if conversation is not None:
        history = _prior_messages(conversation, query)
        if history.messages:
            conv = build_conversation_context(history)
            result.conversation_context = conv.context_string
            result.topic_summary = conv.topic_summary or None

            carried = extract_conversation_references(history)
            seen = {ref.id for ref in result.references}
            result.conversation_references = carried
            result.references.extend(ref for ref in carried if ref.id not in seen)

    logger.debug(
        "Assembled context: %d knowledge, %d document, %d reference(s) total",
        result.knowledge_matches,
        result.document_matches,
        len(result.references),
    )
    return result
