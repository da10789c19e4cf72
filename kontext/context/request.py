"""Validated request/response boundary for context retrieval."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kontext.context.intent import (
    detect_intent,
    get_relevant_entity_types,
    requires_context_retrieval,
)
from kontext.context.retrieval import (
    ContextRetrievalResult,
    build_context_string,
    retrieve_context,
)
from kontext.knowledge.models import EntityType, KnowledgeEntry, KnowledgeReference, Mode

logger = logging.getLogger(__name__)


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContextRequest(_ApiModel):
    query: str = Field(min_length=1)
    mode: Mode
    limit: int = Field(default=5, ge=1, le=20)
    entity_types: list[EntityType] | None = None


class ContextRetrieveResponse(_ApiModel):
    context: list[KnowledgeReference] = Field(default_factory=list)
    intent: str
    intent_confidence: float
    sources: list[str] = Field(default_factory=lambda: ["knowledge"])
    context_string: str = ""
    extracted_entity: str | None = None


def retrieve_for_request(
    payload: ContextRequest | Mapping[str, Any],
    entries: Iterable[KnowledgeEntry],
    *,
    now: datetime | None = None,
) -> ContextRetrieveResponse:
    """Validate *payload*, classify the query and retrieve if the intent needs it.

    Raises:
        pydantic.ValidationError: If the payload is malformed.
    """
    request = (
        payload if isinstance(payload, ContextRequest) else ContextRequest.model_validate(payload)
    )
    start = time.monotonic()

    detected = detect_intent(request.query)
    entity_types = request.entity_types or get_relevant_entity_types(detected.intent)

    if requires_context_retrieval(detected.intent):
        result = retrieve_context(
            entries,
            request.query,
            request.mode,
            limit=request.limit,
            entity_types=entity_types,
            now=now,
        )
    else:
        result = ContextRetrievalResult()

    logger.info(
        "Context request: intent=%s, %d reference(s) in %.1fms",
        detected.intent,
        len(result.context),
        (time.monotonic() - start) * 1000,
    )
    return ContextRetrieveResponse(
        context=result.context,
        intent=detected.intent,
        intent_confidence=detected.confidence,
        context_string=build_context_string(result.context),
        extracted_entity=detected.extracted_entity,
    )
