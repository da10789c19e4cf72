"""Relevance scoring for knowledge entries.

Intentionally cheap and explainable: keyword overlap, a recency step
function and saturating access frequency, blended with fixed weights.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from kontext.knowledge.models import KnowledgeEntry

KEYWORD_WEIGHT = 0.5
RECENCY_WEIGHT = 0.3
ACCESS_WEIGHT = 0.2

# Roughly 100 accesses counts as "well used".
ACCESS_SATURATION = 100

# (max age, score), checked in order; anything older scores RECENCY_FLOOR.
RECENCY_STEPS: tuple[tuple[timedelta, float], ...] = (
    (timedelta(hours=24), 1.0),
    (timedelta(days=7), 0.8),
    (timedelta(days=30), 0.5),
)
RECENCY_FLOOR = 0.2


@dataclass
class ScoredEntry:
    entry: KnowledgeEntry
    score: float
    matched_terms: list[str] = field(default_factory=list)


def keyword_score(content: str, keywords: list[str]) -> tuple[float, list[str]]:
    """Fraction of keywords found as substrings of *content*, plus the matches."""
    if not keywords:
        return 0.0, []
    normalized = content.lower()
    matched = [kw for kw in keywords if kw in normalized]
    return len(matched) / len(keywords), matched


def recency_score(created_at: datetime, now: datetime) -> float:
    age = now - created_at
    for max_age, score in RECENCY_STEPS:
        if age <= max_age:
            return score
    return RECENCY_FLOOR


def access_score(access_count: int) -> float:
    return min(1.0, max(access_count, 0) / ACCESS_SATURATION)


def combine_scores(keyword: float, recency: float, access: float) -> float:
    return keyword * KEYWORD_WEIGHT + recency * RECENCY_WEIGHT + access * ACCESS_WEIGHT


def score_entry(entry: KnowledgeEntry, keywords: list[str], now: datetime) -> ScoredEntry:
    """Score one entry against the extracted query keywords."""
    kw_score, matched = keyword_score(entry.content, keywords)
    score = combine_scores(
        kw_score,
        recency_score(entry.created_at, now),
        access_score(entry.metadata.access_count),
    )
    return ScoredEntry(entry=entry, score=score, matched_terms=matched)
