"""Context retrieval and assembly for the generation step."""

from kontext.context.combined import CombinedContextResult, retrieve_combined_context
from kontext.context.conversation import (
    ConversationContextResult,
    build_conversation_context,
    build_conversation_instruction,
)
from kontext.context.documents import DocumentRetrievalResult, retrieve_document_context
from kontext.context.intent import IntentDetectionResult, detect_intent
from kontext.context.live import DebouncedFetcher, LiveSuggestion, create_debounced_fetcher
from kontext.context.request import ContextRequest, ContextRetrieveResponse, retrieve_for_request
from kontext.context.retrieval import ContextRetrievalResult, retrieve_context
from kontext.context.unified import UnifiedContext, assemble_context

__all__ = [
    "CombinedContextResult",
    "ContextRequest",
    "ContextRetrievalResult",
    "ContextRetrieveResponse",
    "ConversationContextResult",
    "DebouncedFetcher",
    "DocumentRetrievalResult",
    "IntentDetectionResult",
    "LiveSuggestion",
    "UnifiedContext",
    "assemble_context",
    "build_conversation_context",
    "build_conversation_instruction",
    "create_debounced_fetcher",
    "detect_intent",
    "retrieve_combined_context",
    "retrieve_context",
    "retrieve_document_context",
    "retrieve_for_request",
]
