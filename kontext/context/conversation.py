"""Conversation-aware context: history windowing, topics and follow-up detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kontext.config import settings
from kontext.conversation.models import Conversation, ConversationMessage
from kontext.knowledge.models import KnowledgeReference
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

APPROX_CHARS_PER_TOKEN = 4
MAX_TOPICS = 10
MAX_MESSAGE_CHARS = 1500

# Window used when rendering the instruction for the current query.
INSTRUCTION_MAX_MESSAGES = 8
INSTRUCTION_MAX_TOKENS = 3000


@dataclass
class ConversationContextResult:
    context_string: str = ""
    message_count: int = 0
    included_messages: list[ConversationMessage] = field(default_factory=list)
    topic_summary: str = ""


def extract_conversation_topics(
    messages: list[ConversationMessage], locale: Locale | None = None
) -> list[str]:
    """Names, quoted terms and "Projekt X" / "über X" subjects, first seen first."""
    locale = locale or get_locale()
    topics: dict[str, None] = {}

    for msg in messages:
        for phrase in locale.capitalized_phrase.findall(msg.content):
            if len(phrase) > 2 and phrase.lower() not in locale.topic_stop_words:
                topics.setdefault(phrase, None)
        for term in locale.quoted_term.findall(msg.content):
            topics.setdefault(term, None)
        for term in locale.topic_indicator.findall(msg.content):
            if len(term) > 1:
                topics.setdefault(term, None)

    return list(topics)[:MAX_TOPICS]


def _render_message(msg: ConversationMessage, locale: Locale) -> str:
    role = locale.labels.user_role if msg.role == "user" else locale.labels.assistant_role
    content = msg.content
    if len(content) > MAX_MESSAGE_CHARS:
        content = content[:MAX_MESSAGE_CHARS] + "..."
    return f"[{role}]: {content}"


def build_conversation_context(
    conversation: Conversation,
    *,
    max_messages: int | None = None,
    max_tokens: int | None = None,
    locale: Locale | None = None,
) -> ConversationContextResult:
    """Render recent history within an approximate token budget.

    The last *max_messages* turns are considered, newest first, until the
    next one would exceed ``max_tokens * 4`` characters; included turns are
    rendered oldest first. Topics are drawn from the whole conversation so
    they survive trimming.
    """
    locale = locale or get_locale()
    if max_messages is None:
        max_messages = settings.conversation_max_messages
    if max_tokens is None:
        max_tokens = settings.conversation_max_tokens

    if not conversation.messages:
        return ConversationContextResult()

    recent = conversation.messages[-max_messages:] if max_messages > 0 else []
    topics = extract_conversation_topics(conversation.messages, locale)
    topic_summary = (
        f"{locale.labels.topic_summary_prefix} {', '.join(topics)}" if topics else ""
    )

    max_chars = max_tokens * APPROX_CHARS_PER_TOKEN
    total_chars = len(topic_summary)
    included: list[tuple[ConversationMessage, str]] = []
    for msg in reversed(recent):
        line = _render_message(msg, locale)
        if total_chars + len(line) > max_chars:
            break
        included.append((msg, line))
        total_chars += len(line)
    included.reverse()

    lines: list[str] = []
    if topic_summary:
        lines += [topic_summary, ""]
    lines += [locale.labels.history_heading, ""]
    for _, line in included:
        lines += [line, ""]

    return ConversationContextResult(
        context_string="\n".join(lines),
        message_count=len(included),
        included_messages=[msg for msg, _ in included],
        topic_summary=topic_summary,
    )


def is_implicit_follow_up(query: str, locale: Locale | None = None) -> bool:
    """True if *query* looks like a question that leans on the previous topic."""
    locale = locale or get_locale()
    trimmed = query.strip().lower()
    return any(p.search(trimmed) for p in locale.implicit_follow_up)


def is_follow_up_question(text: str, locale: Locale | None = None) -> bool:
    """Looser follow-up check ("und ...", "warum", "kannst du ...")."""
    locale = locale or get_locale()
    trimmed = text.strip().lower()
    return any(p.search(trimmed) for p in locale.follow_up)


def build_conversation_instruction(
    conversation: Conversation, current_query: str, locale: Locale | None = None
) -> str:
    """Instruction block telling the generator how to use prior turns.

    The last message is taken to be the current query and is excluded. A
    conversation with a single message has no prior turns and yields "".
    """
    locale = locale or get_locale()
    if len(conversation.messages) <= 1:
        return ""

    previous = conversation.model_copy(update={"messages": conversation.messages[:-1]})
    result = build_conversation_context(
        previous,
        max_messages=INSTRUCTION_MAX_MESSAGES,
        max_tokens=INSTRUCTION_MAX_TOKENS,
        locale=locale,
    )
    if result.message_count == 0:
        return ""

    if is_implicit_follow_up(current_query, locale):
        logger.debug("Treating query as implicit follow-up: %s", current_query[:80])
        return locale.labels.follow_up_instruction.format(
            context=result.context_string, query=current_query
        )
    return locale.labels.general_instruction.format(context=result.context_string)


def extract_conversation_references(
    conversation: Conversation, limit: int | None = None
) -> list[KnowledgeReference]:
    """References recorded as used on earlier turns, newest first, unique by id."""
    if limit is None:
        limit = settings.conversation_reference_limit

    references: dict[str, KnowledgeReference] = {}
    for msg in reversed(conversation.messages):
        if msg.metadata is None:
            continue
        for ref in msg.metadata.used_context:
            if len(references) >= limit:
                return list(references.values())
            references.setdefault(ref.id, ref)
    return list(references.values())[:limit]
