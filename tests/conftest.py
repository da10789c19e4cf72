"""Shared test fixtures."""

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from kontext.conversation.models import Conversation, ConversationMessage, MessageMetadata
from kontext.documents.models import DocumentContext, DocumentEntry, DocumentSummary
from kontext.knowledge.models import KnowledgeEntry, KnowledgeMetadata, KnowledgeReference

# A Wednesday, midday in Berlin.
NOW = datetime(2026, 10, 14, 10, 0, tzinfo=UTC)

_ids = itertools.count(1)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_entry() -> Callable[..., KnowledgeEntry]:
    """Factory for knowledge entries created at NOW unless told otherwise."""

    def _make(
        content: str,
        mode: str = "work",
        *,
        entry_id: str | None = None,
        entity_type: str | None = None,
        access_count: int = 0,
        age: timedelta = timedelta(0),
    ) -> KnowledgeEntry:
        created = NOW - age
        return KnowledgeEntry(
            id=entry_id or f"k{next(_ids)}",
            mode=mode,
            content=content,
            metadata=KnowledgeMetadata(
                entity_type=entity_type,
                access_count=access_count,
                last_accessed_at=created,
            ),
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture
def make_document() -> Callable[..., DocumentEntry]:
    def _make(
        filename: str = "bericht.pdf",
        mode: str = "work",
        *,
        doc_id: str | None = None,
        status: str = "complete",
        **context_fields,
    ) -> DocumentEntry:
        summary = context_fields.pop("summary", DocumentSummary())
        doc_id = doc_id or f"d{next(_ids)}"
        return DocumentEntry(
            id=doc_id,
            filename=filename,
            file_type="pdf",
            status=status,
            mode=mode,
            context=DocumentContext(
                id=f"ctx-{doc_id}",
                document_id=doc_id,
                summary=summary,
                **context_fields,
            ),
        )

    return _make


@pytest.fixture
def make_conversation() -> Callable[..., Conversation]:
    """Build a conversation from (role, content) or (role, content, used_refs) tuples."""

    def _make(turns: list[tuple], mode: str = "work") -> Conversation:
        messages = []
        for i, turn in enumerate(turns):
            role, content = turn[0], turn[1]
            used: list[KnowledgeReference] = turn[2] if len(turn) > 2 else []
            messages.append(
                ConversationMessage(
                    id=f"m{i}",
                    role=role,
                    content=content,
                    timestamp=NOW + timedelta(minutes=i),
                    metadata=MessageMetadata(used_context=used) if used else None,
                )
            )
        return Conversation(
            id="c1", mode=mode, messages=messages, created_at=NOW, updated_at=NOW
        )

    return _make
