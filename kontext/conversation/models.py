"""Conversation data models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from kontext.knowledge.models import KnowledgeReference, Mode, StoreModel, Timestamp

MessageRole = Literal["user", "assistant"]

TITLE_MAX_LENGTH = 50


class MessageMetadata(StoreModel):
    transcription_id: str | None = None
    output_id: str | None = None
    used_context: list[KnowledgeReference] = Field(default_factory=list)
    output_type: str | None = None


class ConversationMessage(StoreModel):
    """A single conversation turn."""

    id: str
    role: MessageRole
    content: str
    timestamp: Timestamp
    metadata: MessageMetadata | None = None


class Conversation(StoreModel):
    """Ordered, append-only history of turns in one mode."""

    id: str
    title: str = ""
    mode: Mode
    messages: list[ConversationMessage] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp
    is_active: bool = True


def generate_conversation_title(first_message: str) -> str:
    """Derive a title from the first message: whitespace collapsed, max 50 chars."""
    cleaned = " ".join(first_message.split())
    if len(cleaned) <= TITLE_MAX_LENGTH:
        return cleaned
    return cleaned[: TITLE_MAX_LENGTH - 3] + "..."
