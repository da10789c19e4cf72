"""Engine settings loaded from environment variables."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from kontext.locale import Locale


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """kontext configuration. All values come from environment variables."""

    # Language / calendar
    locale: str = Field(default="de")
    timezone: str = Field(default="Europe/Berlin")

    # Knowledge retrieval
    knowledge_limit: int = Field(default=5)
    knowledge_min_relevance: float = Field(default=0.3)

    # Document retrieval
    document_limit: int = Field(default=3)
    document_min_relevance: float = Field(default=0.1)

    # Conversation
    conversation_max_messages: int = Field(default=10)
    conversation_max_tokens: int = Field(default=4000)
    conversation_reference_limit: int = Field(default=5)

    # Live suggestions
    live_suggestion_debounce_ms: int = Field(default=300)

    # Maintenance
    duplicate_threshold: float = Field(default=0.75)
    date_enrichment_max_age_days: int = Field(default=7)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def get_locale(self) -> Locale:
        """Return the locale table named by LOCALE. Raises KeyError if unknown."""
        from kontext.locale import LOCALES

        return LOCALES[self.locale.strip().lower()]


settings = Settings()
