"""Tests for combined knowledge + document retrieval."""

from kontext.context.combined import build_combined_context_string, retrieve_combined_context
from kontext.documents.models import DocumentSummary
from kontext.knowledge.models import KnowledgeReference


def _ref(ref_id: str, snippet: str, score: float = 0.5) -> KnowledgeReference:
    return KnowledgeReference(id=ref_id, snippet=snippet, relevance_score=score)


class TestBuildCombinedContextString:
    def test_both_sections(self):
        text = build_combined_context_string([_ref("a", "Fakt")], [_ref("doc:1", "Dok")])
        assert text == (
            "Relevanter Kontext aus der Knowledge Base:\n[1] Fakt\n\n"
            "Relevanter Kontext aus Dokumenten:\n[1] Dok"
        )

    def test_omits_empty_section(self):
        text = build_combined_context_string([], [_ref("doc:1", "Dok")])
        assert text == "Relevanter Kontext aus Dokumenten:\n[1] Dok"

    def test_nothing(self):
        assert build_combined_context_string([], []) == ""


def test_merges_sorted_by_score(make_entry, make_document, now) -> None:
    entry = make_entry("Budget Freigabe durch Anna")
    doc = make_document("budget.pdf", summary=DocumentSummary(brief="Budget 2026"))

    result = retrieve_combined_context([entry], [doc], "Budget", "work", now=now)

    assert {ref.id for ref in result.references} == {entry.id, f"doc:{doc.id}"}
    scores = [ref.relevance_score for ref in result.references]
    assert scores == sorted(scores, reverse=True)
    assert result.total_matches == 2
    assert "Relevanter Kontext aus Dokumenten:" in result.context_string


def test_separate_limits(make_entry, make_document, now) -> None:
    entries = [make_entry(f"Budget {i}") for i in range(4)]
    docs = [make_document(f"{i}.pdf", summary=DocumentSummary(brief="Budget")) for i in range(4)]

    result = retrieve_combined_context(
        entries, docs, "Budget", "work", knowledge_limit=1, document_limit=2, now=now
    )

    assert len(result.knowledge.context) == 1
    assert len(result.documents.references) == 2
    assert len(result.references) == 3
