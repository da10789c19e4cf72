"""Locale table types.

Every language-specific literal the engine relies on (stop words, day
names, regex batteries, prompt labels) lives in a ``Locale`` instance so
the scoring, clustering and date arithmetic stay language-neutral.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class IntentPattern:
    """Patterns for one intent, tested in order.

    A pattern may define a named group ``entity``; its match becomes the
    extracted entity of the detection result.
    """

    intent: str
    patterns: tuple[re.Pattern[str], ...]


@dataclass(frozen=True)
class DatePattern:
    """A relative date expression and the resolver that turns it into a date.

    ``resolver`` names a function in ``kontext.knowledge.dates.RESOLVERS``.
    """

    pattern: re.Pattern[str]
    resolver: str


@dataclass(frozen=True)
class PromptLabels:
    knowledge_heading: str
    document_heading: str
    live_general_title: str
    user_role: str
    assistant_role: str
    topic_summary_prefix: str
    history_heading: str
    follow_up_instruction: str  # format keys: context, query
    general_instruction: str  # format keys: context
    document: str
    summary: str
    topics: str
    relationships: str
    key_facts: str
    action_items: str
    decisions: str
    deadlines: str
    entity_types: dict[str, str] = field(default_factory=dict)
    other_entities: str = "other"


@dataclass(frozen=True)
class Locale:
    name: str

    # Keyword extraction
    stop_words: frozenset[str]
    document_stop_words: frozenset[str]
    question_words: frozenset[str]
    people_words: frozenset[str]

    # Topic / entity spotting
    topic_stop_words: frozenset[str]
    capitalized_phrase: re.Pattern[str]
    quoted_term: re.Pattern[str]
    topic_indicator: re.Pattern[str]
    entity_indicators: tuple[re.Pattern[str], ...]

    # Conversation pragmatics
    implicit_follow_up: tuple[re.Pattern[str], ...]
    follow_up: tuple[re.Pattern[str], ...]

    # Intents
    intent_patterns: tuple[IntentPattern, ...]
    question_indicators: tuple[re.Pattern[str], ...]

    # Storage gating
    question_patterns: tuple[re.Pattern[str], ...]
    request_patterns: tuple[re.Pattern[str], ...]
    storage_request: tuple[re.Pattern[str], ...]

    # Calendar (weekday numbers follow ``date.weekday()``: Monday is 0)
    weekdays: dict[str, int]
    day_names: tuple[str, ...]
    month_names: tuple[str, ...]
    relative_dates: tuple[DatePattern, ...]
    absolute_date: re.Pattern[str]
    appointment_label: str

    labels: PromptLabels

    @property
    def enriched_suffix(self) -> re.Pattern[str]:
        """Matches a trailing ``(<label>: ...)`` annotation added by enrichment."""
        return re.compile(rf"\({re.escape(self.appointment_label)}:\s+[^)]+\)$")
