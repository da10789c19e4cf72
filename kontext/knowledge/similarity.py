"""Fuzzy string similarity used for duplicate detection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from rapidfuzz.distance import Levenshtein

SimilarityFn = Callable[[str, str], float]

JACCARD_WEIGHT = 0.6
LEVENSHTEIN_WEIGHT = 0.4


class HasContent(Protocol):
    @property
    def content(self) -> str: ...


T = TypeVar("T", bound=HasContent)


def jaccard_similarity(a: str, b: str) -> float:
    """Word-level Jaccard coefficient of two strings, case-insensitive."""
    s1 = a.lower().strip()
    s2 = b.lower().strip()
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    words1 = set(s1.split())
    words2 = set(s2.split())
    return len(words1 & words2) / len(words1 | words2)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings."""
    return Levenshtein.distance(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """1 - edit distance / longer length, case-insensitive."""
    s1 = a.lower().strip()
    s2 = b.lower().strip()
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return Levenshtein.normalized_similarity(s1, s2)


def combined_similarity(a: str, b: str) -> float:
    """Weighted blend: Jaccard catches reworded content, Levenshtein catches typos."""
    return (
        jaccard_similarity(a, b) * JACCARD_WEIGHT
        + levenshtein_similarity(a, b) * LEVENSHTEIN_WEIGHT
    )


def is_duplicate(
    content: str,
    existing: Sequence[HasContent],
    threshold: float = 0.75,
    similarity: SimilarityFn = combined_similarity,
) -> bool:
    """True if *content* is at least *threshold* similar to any existing entry."""
    return any(similarity(content, item.content) >= threshold for item in existing)


def find_most_similar(
    content: str,
    existing: Sequence[T],
    similarity: SimilarityFn = combined_similarity,
) -> tuple[T, float] | None:
    """Return the closest entry and its score, or None if nothing scores above zero."""
    best: T | None = None
    best_score = 0.0
    for item in existing:
        score = similarity(content, item.content)
        if score > best_score:
            best, best_score = item, score
    if best is None:
        return None
    return best, best_score


def find_similar_entries(
    content: str,
    existing: Sequence[T],
    threshold: float = 0.5,
    similarity: SimilarityFn = combined_similarity,
) -> list[tuple[T, float]]:
    """All entries scoring at least *threshold*, most similar first."""
    scored = [(item, similarity(content, item.content)) for item in existing]
    matches = [pair for pair in scored if pair[1] >= threshold]
    matches.sort(key=lambda pair: pair[1], reverse=True)
    return matches
