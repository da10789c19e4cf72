"""Conversation history models."""

from kontext.conversation.models import (
    Conversation,
    ConversationMessage,
    MessageMetadata,
    generate_conversation_title,
)

__all__ = [
    "Conversation",
    "ConversationMessage",
    "MessageMetadata",
    "generate_conversation_title",
]
