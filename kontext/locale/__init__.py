"""Pluggable language tables."""

from kontext.locale.base import DatePattern, IntentPattern, Locale, PromptLabels
from kontext.locale.de import GERMAN

LOCALES: dict[str, Locale] = {
    GERMAN.name: GERMAN,
}


def get_locale(name: str | None = None) -> Locale:
    """Return the locale table for *name*, or the configured default."""
    if name is None:
        from kontext.config import settings

        return settings.get_locale()
    return LOCALES[name.strip().lower()]


__all__ = [
    "GERMAN",
    "LOCALES",
    "DatePattern",
    "IntentPattern",
    "Locale",
    "PromptLabels",
    "get_locale",
]
