"""Keyword extraction from short utterances."""

import re

from kontext.locale import Locale, get_locale

MIN_KEYWORD_LENGTH = 3

_NON_WORD = re.compile(r"[\W_]+")


def extract_keywords(query: str, locale: Locale | None = None) -> list[str]:
    """Content tokens of *query*, lower-cased, in order, duplicates kept.

    Punctuation is stripped from each token (letters such as ä/ß survive),
    then stop words and tokens shorter than three characters are dropped.
    """
    locale = locale or get_locale()
    keywords: list[str] = []
    for raw in query.lower().split():
        word = _NON_WORD.sub("", raw)
        if len(word) < MIN_KEYWORD_LENGTH or word in locale.stop_words:
            continue
        keywords.append(word)
    return keywords


def extract_document_keywords(text: str, locale: Locale | None = None) -> list[str]:
    """Keywords for document matching.

    Uses the larger document stop list and keeps interrogatives ("wer",
    "was", ...) so snippet rendering can tell what kind of question it is.
    """
    locale = locale or get_locale()
    words = [w for w in _NON_WORD.sub(" ", text.lower()).split() if len(w) > 1]
    return [
        word
        for word in words
        if word in locale.question_words
        or (len(word) >= MIN_KEYWORD_LENGTH and word not in locale.document_stop_words)
    ]
