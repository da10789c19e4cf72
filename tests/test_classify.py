"""Tests for storage-gating heuristics."""

import pytest

from kontext.knowledge.classify import (
    create_content_summary,
    get_primary_entity_type,
    is_explicit_storage_request,
    is_question_or_request,
    should_store_verbatim,
)
from kontext.knowledge.models import ExtractedEntity


def _entity(text: str, type_: str, confidence: float) -> ExtractedEntity:
    return ExtractedEntity(text=text, type=type_, confidence=confidence)


class TestQuestionOrRequest:
    @pytest.mark.parametrize(
        "text",
        [
            "Was ist der Stand?",
            "wer hat das Budget freigegeben",
            "Schreib eine Mail an Anna",
            "Kannst du mir erklären, was passiert ist",
            "Ich brauche eine Übersicht",
            "Anna kommt morgen?",
        ],
    )
    def test_detected(self, text):
        assert is_question_or_request(text)

    def test_statement_is_not(self):
        assert not is_question_or_request("Anna arbeitet jetzt im Vertrieb")

    def test_request_to_remember_is_not(self):
        assert not is_question_or_request("Mach dir eine Notiz und merk dir, dass Anna Tee mag")


class TestStorage:
    def test_explicit_request(self):
        assert is_explicit_storage_request("Merk dir: Anna mag Tee")
        assert is_explicit_storage_request("Bitte notiere das")
        assert not is_explicit_storage_request("Anna mag Tee")

    def test_should_store_verbatim(self):
        assert should_store_verbatim("Anna mag Tee")
        assert should_store_verbatim("Was? Merk dir das")
        assert not should_store_verbatim("Was mag Anna?")


class TestPrimaryEntityType:
    def test_empty(self):
        assert get_primary_entity_type([]) is None

    def test_priority_order(self):
        entities = [_entity("Anna", "person", 0.9), _entity("Apollo", "project", 0.7)]
        assert get_primary_entity_type(entities) == "project"

    def test_low_confidence_falls_back_to_most_confident(self):
        entities = [_entity("Apollo", "project", 0.3), _entity("Tee", "preference", 0.5)]
        assert get_primary_entity_type(entities) == "preference"


class TestContentSummary:
    def test_short_text_unchanged(self):
        assert create_content_summary("kurz", []) == "kurz"

    def test_long_text_lists_entities(self):
        text = "a" * 250
        summary = create_content_summary(
            text, [_entity("Anna", "person", 0.9), _entity("Vage", "unknown", 0.2)]
        )
        assert summary == "a" * 100 + "... [Anna]"

    def test_long_text_without_entities(self):
        summary = create_content_summary("b" * 250, [])
        assert summary == "b" * 200 + "..."
