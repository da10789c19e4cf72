"""Tests for live suggestions and the debounced fetcher."""

import asyncio

import pytest

from kontext.context.live import (
    DebouncedFetcher,
    create_debounced_fetcher,
    extract_potential_entities,
    fetch_live_suggestions,
    reference_to_suggestion,
)
from kontext.knowledge.models import KnowledgeReference


# -- Candidate extraction -----------------------------------------------------


def test_extracts_names_quotes_and_indicator_objects() -> None:
    found = extract_potential_entities('Treffen mit Anna Schmidt über "Q3 Budget"')
    assert "Anna Schmidt" in found
    assert "Q3 Budget" in found
    assert "Treffen" in found
    assert len(found) == len(set(found))


def test_indicator_needs_word_boundary() -> None:
    # "damit" must not yield a "mit" candidate.
    assert extract_potential_entities("damit klappt") == []


# -- Suggestions --------------------------------------------------------------


def test_candidate_match(make_entry, now) -> None:
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    suggestions = fetch_live_suggestions(
        "Ich habe mit Anna Schmidt gesprochen", "work", [entry], now=now
    )

    assert len(suggestions) == 1
    assert suggestions[0].id == entry.id
    assert suggestions[0].title == "Anna Schmidt"
    assert suggestions[0].relevance_score == pytest.approx(0.8)
    assert suggestions[0].type == "context"


def test_fallback_search_is_discounted(make_entry, now) -> None:
    entry = make_entry("Budget Freigabe")

    suggestions = fetch_live_suggestions("das budget freigabe morgen", "work", [entry], now=now)

    assert len(suggestions) == 1
    assert suggestions[0].title == "Relevanter Kontext"
    assert suggestions[0].relevance_score == pytest.approx((2 / 3 * 0.5 + 0.3) * 0.8)


def test_capped_sorted_and_unique(make_entry, now) -> None:
    entries = [make_entry(f"Anna Projekt {i}", access_count=i * 10) for i in range(10)]

    suggestions = fetch_live_suggestions(
        "Anna und Projekt Apollo mit Anna Bericht", "work", entries, now=now
    )

    assert len(suggestions) <= 5
    ids = [s.id for s in suggestions]
    assert len(ids) == len(set(ids))
    scores = [s.relevance_score for s in suggestions]
    assert scores == sorted(scores, reverse=True)


def test_other_mode_never_suggested(make_entry, now) -> None:
    entry = make_entry("Anna Schmidt leitet Vertrieb", "private")
    assert fetch_live_suggestions("mit Anna Schmidt", "work", [entry], now=now) == []


def test_reference_to_suggestion() -> None:
    ref = KnowledgeReference(id="x", snippet="s", relevance_score=0.4)
    suggestion = reference_to_suggestion(ref, "Titel")
    assert (suggestion.id, suggestion.title, suggestion.relevance_score) == ("x", "Titel", 0.4)


# -- Debounce -----------------------------------------------------------------


async def test_debounced_fetch_resolves(make_entry) -> None:
    fetcher = DebouncedFetcher(delay_ms=1)
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    suggestions = await fetcher.fetch("mit Anna Schmidt", "work", [entry])

    assert [s.id for s in suggestions] == [entry.id]


async def test_newer_call_supersedes_pending(make_entry) -> None:
    fetcher = DebouncedFetcher(delay_ms=20)
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    first = asyncio.create_task(fetcher.fetch("mit Anna", "work", [entry]))
    await asyncio.sleep(0)
    second = await fetcher.fetch("mit Anna Schmidt", "work", [entry])

    assert await first == []
    assert [s.id for s in second] == [entry.id]


async def test_short_input_skipped_and_cancels_pending(make_entry) -> None:
    fetcher = DebouncedFetcher(delay_ms=20)
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    pending = asyncio.create_task(fetcher.fetch("mit Anna", "work", [entry]))
    await asyncio.sleep(0)

    assert await fetcher.fetch("mi", "work", [entry]) == []
    assert await pending == []


async def test_unchanged_text_skipped(make_entry) -> None:
    fetcher = DebouncedFetcher(delay_ms=1)
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    assert await fetcher.fetch("mit Anna", "work", [entry])
    assert await fetcher.fetch("mit Anna", "work", [entry]) == []


async def test_cancel_drops_pending(make_entry) -> None:
    fetcher = DebouncedFetcher(delay_ms=20)
    entry = make_entry("Anna Schmidt leitet Vertrieb")

    pending = asyncio.create_task(fetcher.fetch("mit Anna", "work", [entry]))
    await asyncio.sleep(0)
    fetcher.cancel()

    assert await pending == []


def test_default_delay_from_settings() -> None:
    assert create_debounced_fetcher().delay == pytest.approx(0.3)
    assert create_debounced_fetcher(50).delay == pytest.approx(0.05)
