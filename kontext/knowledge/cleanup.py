"""Load-time maintenance of the knowledge collection.

Two independent passes run over a snapshot of entries:

1. Duplicate clustering: near-identical entries are grouped with a
   disjoint-set forest and collapsed to their most recently created member.
2. Date enrichment: relative date phrases are resolved against the entry's
   creation date and appended as ``(Termin: Montag, 5. Oktober 2026)``.

Nothing is mutated in place. The caller receives new entry values plus the
list of removals and decides what to persist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from kontext.config import settings
from kontext.knowledge.dates import find_relative_date, format_date_long, local_date
from kontext.knowledge.models import KnowledgeEntry
from kontext.knowledge.similarity import SimilarityFn, combined_similarity
from kontext.locale import Locale, get_locale

logger = logging.getLogger(__name__)

LENGTH_BUCKET_SIZE = 50


@dataclass
class DuplicateGroup:
    kept: KnowledgeEntry
    removed: list[KnowledgeEntry]


@dataclass
class CleanupResult:
    entries: list[KnowledgeEntry] = field(default_factory=list)
    groups: list[DuplicateGroup] = field(default_factory=list)
    removed: list[KnowledgeEntry] = field(default_factory=list)
    modified: list[KnowledgeEntry] = field(default_factory=list)


class DisjointSet:
    """Union-find over ``0..size-1`` with path compression and union by rank."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def union(self, x: int, y: int) -> None:
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return
        if self._rank[rx] < self._rank[ry]:
            self._parent[rx] = ry
        elif self._rank[rx] > self._rank[ry]:
            self._parent[ry] = rx
        else:
            self._parent[ry] = rx
            self._rank[rx] += 1

    def groups(self) -> dict[int, list[int]]:
        """Members per root, in index order."""
        out: dict[int, list[int]] = {}
        for i in range(len(self._parent)):
            out.setdefault(self.find(i), []).append(i)
        return out


# -- Duplicates --------------------------------------------------------------


def _comparable(content: str, locale: Locale) -> str:
    """Content without a trailing date annotation added by enrichment."""
    return locale.enriched_suffix.sub("", content).rstrip()


def _length_buckets(contents: list[str]) -> dict[int, list[int]]:
    """Bucket indices by content length; each entry also joins both neighbours."""
    buckets: dict[int, list[int]] = {}
    for i, content in enumerate(contents):
        bucket = len(content) // LENGTH_BUCKET_SIZE
        for b in (bucket - 1, bucket, bucket + 1):
            if b >= 0:
                buckets.setdefault(b, []).append(i)
    return buckets


def find_duplicate_groups(
    entries: list[KnowledgeEntry],
    threshold: float | None = None,
    similarity: SimilarityFn = combined_similarity,
    locale: Locale | None = None,
) -> list[DuplicateGroup]:
    """Cluster entries whose pairwise similarity reaches *threshold*.

    Date annotations from earlier enrichment are ignored when comparing, so
    a shared ``(Termin: ...)`` suffix never makes distinct facts look alike.
    Within each cluster of two or more, the newest entry (by ``created_at``)
    is kept; ties keep the earlier one in input order.
    """
    if threshold is None:
        threshold = settings.duplicate_threshold
    if len(entries) < 2:
        return []

    locale = locale or get_locale()
    contents = [_comparable(entry.content, locale) for entry in entries]
    forest = DisjointSet(len(entries))
    compared: set[tuple[int, int]] = set()

    for indices in _length_buckets(contents).values():
        for pos, i in enumerate(indices):
            for j in indices[pos + 1 :]:
                pair = (i, j) if i < j else (j, i)
                if pair in compared:
                    continue
                compared.add(pair)
                if similarity(contents[i], contents[j]) >= threshold:
                    forest.union(i, j)

    groups: list[DuplicateGroup] = []
    for members in forest.groups().values():
        if len(members) < 2:
            continue
        ordered = sorted(members, key=lambda i: entries[i].created_at, reverse=True)
        groups.append(
            DuplicateGroup(
                kept=entries[ordered[0]],
                removed=[entries[i] for i in ordered[1:]],
            )
        )
    return groups


# -- Date enrichment ---------------------------------------------------------


def enrich_entry_with_date(
    entry: KnowledgeEntry,
    *,
    max_age: timedelta | None = None,
    now: datetime | None = None,
    timezone: str | None = None,
    locale: Locale | None = None,
) -> KnowledgeEntry | None:
    """Append the resolved date of the first relative date phrase in *entry*.

    Returns the enriched copy, or None when the entry is left as-is: too old
    (deadlines are exempt), already annotated, already carrying an absolute
    date, or containing no resolvable phrase.
    """
    locale = locale or get_locale()
    now = now or datetime.now(UTC)
    if max_age is None:
        max_age = timedelta(days=settings.date_enrichment_max_age_days)

    if now - entry.created_at > max_age and entry.entity_type != "deadline":
        return None
    if locale.enriched_suffix.search(entry.content):
        return None
    if locale.absolute_date.search(entry.content):
        return None

    found = find_relative_date(entry.content, locale)
    if found is None:
        return None

    reference = local_date(entry.created_at, timezone or settings.timezone)
    resolved = found.resolve(reference, locale)
    if resolved is None:
        return None

    annotation = f"({locale.appointment_label}: {format_date_long(resolved, locale)})"
    return entry.model_copy(
        update={"content": f"{entry.content} {annotation}", "updated_at": now}
    )


# -- Orchestration -----------------------------------------------------------


def cleanup_knowledge_entries(
    entries: list[KnowledgeEntry],
    *,
    duplicate_threshold: float | None = None,
    date_max_age: timedelta | None = None,
    similarity: SimilarityFn = combined_similarity,
    now: datetime | None = None,
) -> CleanupResult:
    """Run duplicate clustering, then date enrichment on the survivors.

    Must not run concurrently with retrieval against the same snapshot.
    """
    if not entries:
        return CleanupResult()

    now = now or datetime.now(UTC)
    groups = find_duplicate_groups(entries, duplicate_threshold, similarity)
    removed = [entry for group in groups for entry in group.removed]
    removed_ids = {entry.id for entry in removed}

    survivors: list[KnowledgeEntry] = []
    modified: list[KnowledgeEntry] = []
    for entry in entries:
        if entry.id in removed_ids:
            continue
        enriched = enrich_entry_with_date(entry, max_age=date_max_age, now=now)
        if enriched is not None:
            modified.append(enriched)
            survivors.append(enriched)
        else:
            survivors.append(entry)

    if removed:
        logger.info("Removed %d duplicate knowledge entries", len(removed))
    if modified:
        logger.info("Enriched %d knowledge entries with dates", len(modified))

    return CleanupResult(entries=survivors, groups=groups, removed=removed, modified=modified)
