"""Personal knowledge entries and their maintenance."""

from kontext.knowledge.classify import (
    create_content_summary,
    get_primary_entity_type,
    is_explicit_storage_request,
    is_question_or_request,
    should_store_verbatim,
)
from kontext.knowledge.cleanup import CleanupResult, DuplicateGroup, cleanup_knowledge_entries
from kontext.knowledge.models import (
    ExtractedEntity,
    KnowledgeEntry,
    KnowledgeMetadata,
    KnowledgeReference,
    create_knowledge_entry,
    deserialize_entries,
    record_access,
    serialize_entries,
)

__all__ = [
    "CleanupResult",
    "DuplicateGroup",
    "ExtractedEntity",
    "KnowledgeEntry",
    "KnowledgeMetadata",
    "KnowledgeReference",
    "cleanup_knowledge_entries",
    "create_content_summary",
    "create_knowledge_entry",
    "deserialize_entries",
    "get_primary_entity_type",
    "is_explicit_storage_request",
    "is_question_or_request",
    "record_access",
    "serialize_entries",
    "should_store_verbatim",
]
