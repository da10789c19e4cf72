"""Read-only document analyses produced by the document-processing service."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from kontext.knowledge.models import Mode, StoreModel, Timestamp

DocumentStatus = Literal["pending", "extracting", "analyzing", "complete", "error"]
DocumentFileType = Literal["pdf", "docx", "pptx"]


class DocumentSummary(StoreModel):
    brief: str = ""
    standard: str = ""
    comprehensive: str = ""


class DocumentTopic(StoreModel):
    name: str
    relevance: float = 0.0
    subtopics: list[str] = Field(default_factory=list)
    related_keywords: list[str] = Field(default_factory=list)


class DocumentEntity(StoreModel):
    text: str
    # Free-form here: the analyser may emit types outside the knowledge set.
    type: str | None = None
    mentions: int = 0
    context: str = ""
    confidence: float = 0.0


class KeyFact(StoreModel):
    fact: str
    category: str = "other"
    source: str = ""
    confidence: float = 0.0


class EntityRelationship(StoreModel):
    entity1: str
    entity2: str
    relationship_type: str = ""
    description: str = ""


class ActionItem(StoreModel):
    task: str
    assignee: str | None = None
    deadline: str | None = None
    priority: Literal["high", "medium", "low"] = "medium"
    context: str = ""


class DocumentDecision(StoreModel):
    decision: str
    rationale: str | None = None
    stakeholders: list[str] = Field(default_factory=list)
    date: str | None = None


class DocumentDeadline(StoreModel):
    description: str
    date: str
    associated_task: str | None = None


class DocumentContext(StoreModel):
    """Structured analysis of one document."""

    id: str
    document_id: str
    summary: DocumentSummary = Field(default_factory=DocumentSummary)
    topics: list[DocumentTopic] = Field(default_factory=list)
    entities: list[DocumentEntity] = Field(default_factory=list)
    key_facts: list[KeyFact] = Field(default_factory=list)
    relationships: list[EntityRelationship] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    decisions: list[DocumentDecision] = Field(default_factory=list)
    deadlines: list[DocumentDeadline] = Field(default_factory=list)
    confidence: float = 0.0
    processing_timestamp: Timestamp | None = None


class DocumentEntry(StoreModel):
    """An uploaded file together with its (possibly pending) analysis."""

    id: str
    filename: str
    file_type: DocumentFileType | None = None
    status: DocumentStatus = "pending"
    mode: Mode
    context: DocumentContext | None = None
    knowledge_entry_ids: list[str] = Field(default_factory=list)
    uploaded_at: Timestamp | None = None
    processed_at: Timestamp | None = None

    @property
    def is_searchable(self) -> bool:
        return self.status == "complete" and self.context is not None
