"""Live suggestions for partial (still being spoken) utterances."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from kontext.config import settings
from kontext.context.retrieval import retrieve_context
from kontext.knowledge.models import KnowledgeEntry, KnowledgeReference
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 3
PER_CANDIDATE_LIMIT = 2
CANDIDATE_MIN_RELEVANCE = 0.4

FALLBACK_WORDS = 5
FALLBACK_MIN_CHARS = 5
FALLBACK_LIMIT = 3
FALLBACK_MIN_RELEVANCE = 0.3
FALLBACK_DISCOUNT = 0.8

MAX_SUGGESTIONS = 5
MIN_INPUT_CHARS = 3


@dataclass
class LiveSuggestion:
    id: str
    title: str
    snippet: str
    relevance_score: float
    type: Literal["entity", "context", "action"] = "context"
    entity_type: str | None = None


def reference_to_suggestion(ref: KnowledgeReference, title: str) -> LiveSuggestion:
    return LiveSuggestion(
        id=ref.id, title=title, snippet=ref.snippet, relevance_score=ref.relevance_score
    )


def extract_potential_entities(text: str, locale: Locale | None = None) -> list[str]:
    """Capitalised phrases, quoted strings and "über X" style objects, deduplicated."""
    locale = locale or get_locale()
    found: dict[str, None] = {}
    for phrase in locale.capitalized_phrase.findall(text):
        found.setdefault(phrase, None)
    for term in locale.quoted_term.findall(text):
        found.setdefault(term, None)
    for indicator in locale.entity_indicators:
        for term in indicator.findall(text):
            found.setdefault(term, None)
    return list(found)


def fetch_live_suggestions(
    partial_text: str,
    mode: str,
    entries: Iterable[KnowledgeEntry],
    *,
    now: datetime | None = None,
    locale: Locale | None = None,
) -> list[LiveSuggestion]:
    """Up to five suggestions for *partial_text*, best first, unique by id."""
    locale = locale or get_locale()
    entries = list(entries)
    suggestions: dict[str, LiveSuggestion] = {}

    def add(suggestion: LiveSuggestion) -> None:
        current = suggestions.get(suggestion.id)
        if current is None or suggestion.relevance_score > current.relevance_score:
            suggestions[suggestion.id] = suggestion

    for candidate in extract_potential_entities(partial_text, locale)[:MAX_CANDIDATES]:
        result = retrieve_context(
            entries,
            candidate,
            mode,
            limit=PER_CANDIDATE_LIMIT,
            min_relevance=CANDIDATE_MIN_RELEVANCE,
            now=now,
        )
        for ref in result.context:
            add(reference_to_suggestion(ref, candidate))

    last_words = " ".join(partial_text.split()[-FALLBACK_WORDS:])
    if len(last_words) > FALLBACK_MIN_CHARS:
        result = retrieve_context(
            entries,
            last_words,
            mode,
            limit=FALLBACK_LIMIT,
            min_relevance=FALLBACK_MIN_RELEVANCE,
            now=now,
        )
        for ref in result.context:
            if ref.id in suggestions:
                continue
            suggestion = reference_to_suggestion(ref, locale.labels.live_general_title)
            suggestion.relevance_score = ref.relevance_score * FALLBACK_DISCOUNT
            add(suggestion)

    ranked = sorted(suggestions.values(), key=lambda s: s.relevance_score, reverse=True)
    return ranked[:MAX_SUGGESTIONS]


# -- Debounce ----------------------------------------------------------------


class DebouncedFetcher:
    """Rate-limits live suggestion lookups for a bursty stream of partials.

    Each call to :meth:`fetch` supersedes the pending one; only the last
    call within the delay window runs the lookup. Superseded and skipped
    calls resolve to an empty list.
    """

    def __init__(self, delay_ms: int) -> None:
        self.delay = delay_ms / 1000
        self._task: asyncio.Task[list[LiveSuggestion]] | None = None
        self._last_text = ""

    async def _run(
        self, text: str, mode: str, entries: list[KnowledgeEntry]
    ) -> list[LiveSuggestion]:
        await asyncio.sleep(self.delay)
        return fetch_live_suggestions(text, mode, entries)

    async def fetch(
        self, text: str, mode: str, entries: Iterable[KnowledgeEntry]
    ) -> list[LiveSuggestion]:
        if text == self._last_text:
            logger.debug("Skipping unchanged partial text")
            return []
        if len(text) < MIN_INPUT_CHARS:
            self.cancel()
            logger.debug("Skipping partial text shorter than %d chars", MIN_INPUT_CHARS)
            return []

        self.cancel()
        self._last_text = text
        task = asyncio.create_task(self._run(text, mode, list(entries)))
        self._task = task

        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            logger.debug("Live suggestion call superseded")
            return []
        if self._task is task:
            self._task = None
        return task.result()

    def cancel(self) -> None:
        """Drop the pending lookup, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._last_text = ""


def create_debounced_fetcher(delay_ms: int | None = None) -> DebouncedFetcher:
    if delay_ms is None:
        delay_ms = settings.live_suggestion_debounce_ms
    return DebouncedFetcher(delay_ms)
