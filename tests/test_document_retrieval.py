"""Tests for document-context retrieval and snippet rendering."""

import pytest

from kontext.context.documents import (
    build_document_snippet,
    calculate_document_relevance,
    retrieve_document_context,
)
from kontext.documents.models import (
    ActionItem,
    DocumentDeadline,
    DocumentEntity,
    DocumentSummary,
    DocumentTopic,
    KeyFact,
)


# -- Scoring ------------------------------------------------------------------


def test_relevance_normalised_by_present_fields(make_document) -> None:
    doc = make_document(summary=DocumentSummary(brief="Budget Planung 2026"))
    # Only the summary is present, so a full summary match scores 1.0.
    assert calculate_document_relevance(doc, ["budget", "planung"]) == pytest.approx(1.0)


def test_relevance_blends_fields(make_document) -> None:
    doc = make_document(
        summary=DocumentSummary(brief="Budget"),
        topics=[DocumentTopic(name="Personal")],
    )
    # summary 1/1 * 0.3, topics 0/1 * 0.2, normalised by 0.5.
    assert calculate_document_relevance(doc, ["budget"]) == pytest.approx(0.6)


def test_relevance_without_keywords(make_document) -> None:
    doc = make_document(summary=DocumentSummary(brief="Budget"))
    assert calculate_document_relevance(doc, []) == 0.0


# -- Retrieval ----------------------------------------------------------------


def test_only_complete_documents_in_mode(make_document) -> None:
    summary = DocumentSummary(brief="Quartalsbericht Budget")
    good = make_document("q3.pdf", summary=summary)
    pending = make_document("draft.pdf", status="analyzing", summary=summary)
    private = make_document("home.pdf", "private", summary=summary)

    result = retrieve_document_context([good, pending, private], "Budget", "work")

    assert [ref.id for ref in result.references] == [f"doc:{good.id}"]
    assert result.references[0].source == "files"
    assert result.matched_documents == ["q3.pdf"]


def test_no_keywords_returns_empty(make_document) -> None:
    doc = make_document(summary=DocumentSummary(brief="Budget"))
    result = retrieve_document_context([doc], "und die", "work")
    assert result.references == []
    assert result.total_matches == 0


def test_limit_applies(make_document) -> None:
    docs = [make_document(f"{i}.pdf", summary=DocumentSummary(brief="Budget")) for i in range(5)]
    result = retrieve_document_context(docs, "Budget", "work", limit=2)
    assert len(result.references) == 2


# -- Snippets -----------------------------------------------------------------


def test_snippet_sections(make_document) -> None:
    doc = make_document(
        "plan.pdf",
        summary=DocumentSummary(brief="Projektplan Apollo"),
        topics=[DocumentTopic(name="Zeitplan"), DocumentTopic(name="Budget")],
        key_facts=[KeyFact(fact="Start im Mai")],
        action_items=[ActionItem(task="Angebot einholen", assignee="Eva")],
        deadlines=[DocumentDeadline(description="Abgabe", date="2026-11-01")],
    )

    snippet = build_document_snippet(doc, ["apollo"])

    assert snippet.splitlines() == [
        '📄 Dokument: "plan.pdf"',
        "Zusammenfassung: Projektplan Apollo",
        "Themen: Zeitplan, Budget",
        "Wichtige Fakten: Start im Mai",
        "Aufgaben: Angebot einholen (Eva)",
        "Fristen: Abgabe (2026-11-01)",
    ]


def test_people_question_lists_people_first_untruncated(make_document) -> None:
    people = [DocumentEntity(text=f"Person {i}", type="person") for i in range(15)]
    doc = make_document(
        entities=[DocumentEntity(text="ACME", type="company"), *people],
    )

    snippet = build_document_snippet(doc, ["wer", "team"])
    lines = snippet.splitlines()

    assert lines[1].startswith("Personen/Teammitglieder: ")
    assert lines[1].count("Person ") == 15
    assert lines[2] == "Unternehmen: ACME"


def test_entity_groups_capped_for_other_questions(make_document) -> None:
    people = [DocumentEntity(text=f"Person {i}", type="person") for i in range(15)]
    doc = make_document(entities=people)

    snippet = build_document_snippet(doc, ["budget"])

    assert snippet.splitlines()[1].count("Person ") == 10


def test_untyped_entities_grouped_as_other(make_document) -> None:
    doc = make_document(entities=[DocumentEntity(text="Foo", context="bar")])
    assert "Sonstiges: Foo (bar)" in build_document_snippet(doc)
