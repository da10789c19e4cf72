"""Tests for the unified context assembler."""

from kontext.context.unified import assemble_context
from kontext.documents.models import DocumentSummary
from kontext.knowledge.models import KnowledgeReference


def test_without_conversation(make_entry, make_document, now) -> None:
    entry = make_entry("Budget Freigabe")
    doc = make_document(summary=DocumentSummary(brief="Budget 2026"))

    result = assemble_context("Budget", "work", [entry], [doc], now=now)

    assert result.total_matches == 2
    assert result.knowledge_matches == 1
    assert result.document_matches == 1
    assert result.conversation_context is None
    assert result.conversation_references == []


def test_single_message_conversation_adds_no_history(make_entry, make_conversation, now) -> None:
    conv = make_conversation([("user", "Budget")])
    result = assemble_context("Budget", "work", [make_entry("Budget")], [], conv, now=now)
    assert result.conversation_context is None


def test_carries_references_from_earlier_turns(make_entry, make_conversation, now) -> None:
    cited = KnowledgeReference(
        id="doc:42", snippet="Quartalsbericht", relevance_score=0.7, source="files"
    )
    conv = make_conversation(
        [
            ("user", "Was steht im Quartalsbericht?"),
            ("assistant", "Der Umsatz stieg.", [cited]),
            ("user", "Und die Kosten?"),
        ]
    )
    entry = make_entry("Kosten gesunken")

    result = assemble_context("Und die Kosten?", "work", [entry], [], conv, now=now)

    ids = [ref.id for ref in result.references]
    assert ids == [entry.id, "doc:42"]
    assert result.conversation_references == [cited]
    assert result.conversation_context is not None
    assert "[ASSISTENT]: Der Umsatz stieg." in result.conversation_context
    assert "Und die Kosten?" not in result.conversation_context


def test_carried_reference_not_duplicated(make_entry, make_conversation, now) -> None:
    entry = make_entry("Kosten gesunken")
    cited = KnowledgeReference(id=entry.id, snippet=entry.content, relevance_score=0.4)
    conv = make_conversation([("user", "Kosten?"), ("assistant", "Gesunken.", [cited])])

    result = assemble_context("Kosten", "work", [entry], [], conv, now=now)

    assert [ref.id for ref in result.references] == [entry.id]


def test_command_intent_skips_retrieval(make_entry, now) -> None:
    result = assemble_context(
        "Merke: Budget", "work", [make_entry("Budget")], intent="knowledge_store", now=now
    )
    assert result.references == []
    assert result.context_string == ""


def test_intent_narrows_entity_types(make_entry, now) -> None:
    person = make_entry("Anna leitet Vertrieb", entity_type="person")
    fact = make_entry("Anna mag Tee", entity_type="fact")

    result = assemble_context("Anna", "work", [person, fact], intent="person_query", now=now)

    assert [ref.id for ref in result.references] == [person.id]
