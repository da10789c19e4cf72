"""Data models for stored knowledge and the references derived from it."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any, Literal, get_args

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# Timestamps without an offset are read as UTC so age arithmetic never mixes
# naive and aware values.
Timestamp = Annotated[datetime, AfterValidator(_assume_utc)]

Mode = Literal["private", "work"]

EntityType = Literal[
    "person",
    "project",
    "technology",
    "company",
    "deadline",
    "decision",
    "fact",
    "preference",
    "unknown",
]

KnowledgeSource = Literal["voice", "import", "generated"]

ReferenceSource = Literal["knowledge", "contacts", "calendar", "email", "files"]

MODES: tuple[str, ...] = get_args(Mode)
ENTITY_TYPES: tuple[str, ...] = get_args(EntityType)


class StoreModel(BaseModel):
    """Base for models persisted by the external key-value store (camelCase JSON)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class KnowledgeMetadata(StoreModel):
    source: KnowledgeSource = "voice"
    tags: list[str] = Field(default_factory=list)
    entity_type: EntityType | None = None
    access_count: int = Field(default=0, ge=0)
    last_accessed_at: Timestamp = Field(default_factory=lambda: datetime.now(UTC))
    relevance_decay: float = 1.0


class KnowledgeEntry(StoreModel):
    """A stored personal fact.

    ``mode`` partitions all retrieval and never changes after creation.
    ``embedding`` is reserved; nothing in the engine computes or reads it.
    """

    id: str
    mode: Mode
    content: str = Field(min_length=1)
    embedding: list[float] = Field(default_factory=list)
    metadata: KnowledgeMetadata = Field(default_factory=KnowledgeMetadata)
    created_at: Timestamp
    updated_at: Timestamp

    @property
    def entity_type(self) -> str | None:
        return self.metadata.entity_type


class KnowledgeReference(StoreModel):
    """A ranked pointer into knowledge or documents. Produced per retrieval."""

    id: str
    snippet: str
    relevance_score: float
    source: ReferenceSource | None = None


class ExtractedEntity(StoreModel):
    """An entity found in an utterance by the (external) fact extractor."""

    text: str
    type: EntityType
    confidence: float = Field(ge=0.0, le=1.0)
    start_index: int = 0
    end_index: int = 0


# -- Construction ------------------------------------------------------------


def create_knowledge_entry(
    content: str,
    mode: Mode,
    entity_type: EntityType | None = None,
    tags: list[str] | None = None,
    source: KnowledgeSource = "voice",
    now: datetime | None = None,
) -> KnowledgeEntry:
    """Build a fresh entry with a new id and zeroed access statistics."""
    now = now or datetime.now(UTC)
    return KnowledgeEntry(
        id=str(uuid.uuid4()),
        mode=mode,
        content=content,
        metadata=KnowledgeMetadata(
            source=source,
            tags=list(tags or []),
            entity_type=entity_type,
            access_count=0,
            last_accessed_at=now,
            relevance_decay=1.0,
        ),
        created_at=now,
        updated_at=now,
    )


def record_access(entry: KnowledgeEntry, now: datetime | None = None) -> KnowledgeEntry:
    """Return a copy of *entry* with the access counter bumped.

    Retrieval itself never calls this; callers that persist reads apply it.
    """
    now = now or datetime.now(UTC)
    metadata = entry.metadata.model_copy(
        update={"access_count": entry.metadata.access_count + 1, "last_accessed_at": now}
    )
    return entry.model_copy(update={"metadata": metadata})


# -- Serialization -----------------------------------------------------------

_entries_adapter = TypeAdapter(list[KnowledgeEntry])


def serialize_entries(entries: list[KnowledgeEntry]) -> list[dict[str, Any]]:
    """Dump entries to JSON-compatible dicts in the store's camelCase format."""
    return [entry.model_dump(mode="json", by_alias=True) for entry in entries]


def deserialize_entries(raw: list[dict[str, Any]]) -> list[KnowledgeEntry]:
    """Validate store records into entries. Raises ``ValidationError`` on bad input."""
    return _entries_adapter.validate_python(raw)
