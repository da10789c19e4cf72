"""Tests for Settings configuration model."""

import pytest

from kontext.config import Settings
from kontext.locale import GERMAN, get_locale


class TestDefaults:
    def test_retrieval_limits(self):
        s = Settings()
        assert s.knowledge_limit == 5
        assert s.knowledge_min_relevance == 0.3
        assert s.document_limit == 3
        assert s.document_min_relevance == 0.1

    def test_conversation_budget(self):
        s = Settings()
        assert s.conversation_max_messages == 10
        assert s.conversation_max_tokens == 4000
        assert s.conversation_reference_limit == 5

    def test_maintenance(self):
        s = Settings()
        assert s.duplicate_threshold == 0.75
        assert s.date_enrichment_max_age_days == 7
        assert s.timezone == "Europe/Berlin"

    def test_debounce(self):
        assert Settings().live_suggestion_debounce_ms == 300


class TestGetLocale:
    def test_default_is_german(self):
        assert Settings().get_locale() is GERMAN

    def test_normalises_name(self):
        assert Settings(locale=" DE ").get_locale() is GERMAN

    def test_unknown_locale_raises(self):
        with pytest.raises(KeyError):
            Settings(locale="xx").get_locale()

    def test_module_helper(self):
        assert get_locale("de") is GERMAN
        assert get_locale() is GERMAN
