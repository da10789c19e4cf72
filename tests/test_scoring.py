"""Tests for relevance scoring."""

from datetime import timedelta

import pytest

from kontext.context.scoring import (
    access_score,
    combine_scores,
    keyword_score,
    recency_score,
    score_entry,
)


class TestKeywordScore:
    def test_fraction_of_keywords_matched(self):
        score, matched = keyword_score("Anna arbeitet bei Siemens", ["anna", "bosch"])
        assert score == 0.5
        assert matched == ["anna"]

    def test_substring_match(self):
        score, _ = keyword_score("Projektplanung Q3", ["planung"])
        assert score == 1.0

    def test_no_keywords_scores_zero(self):
        assert keyword_score("anything", []) == (0.0, [])


class TestRecencyScore:
    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            (timedelta(hours=1), 1.0),
            (timedelta(hours=24), 1.0),
            (timedelta(days=3), 0.8),
            (timedelta(days=7), 0.8),
            (timedelta(days=20), 0.5),
            (timedelta(days=90), 0.2),
        ],
    )
    def test_steps(self, now, age, expected):
        assert recency_score(now - age, now) == expected


class TestAccessScore:
    def test_saturates(self):
        assert access_score(0) == 0.0
        assert access_score(50) == 0.5
        assert access_score(100) == 1.0
        assert access_score(5000) == 1.0

    def test_negative_clamped(self):
        assert access_score(-3) == 0.0


class TestScoreEntry:
    def test_weights(self):
        assert combine_scores(1.0, 1.0, 1.0) == pytest.approx(1.0)
        assert combine_scores(1.0, 0.0, 0.0) == pytest.approx(0.5)

    def test_fresh_full_match(self, make_entry, now):
        entry = make_entry("Anna arbeitet bei Siemens")
        scored = score_entry(entry, ["arbeitet", "anna"], now)
        assert scored.score == pytest.approx(0.8)
        assert scored.matched_terms == ["arbeitet", "anna"]

    def test_always_within_bounds(self, make_entry, now):
        entry = make_entry("x" * 10, access_count=10_000, age=timedelta(days=400))
        scored = score_entry(entry, ["nothing"], now)
        assert 0.0 <= scored.score <= 1.0
