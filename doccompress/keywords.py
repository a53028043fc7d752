"""Query keyword extraction for query-aware compression."""

from typing import Iterable

FRENCH_STOP_WORDS = frozenset(
    {
        "le", "la", "les", "de", "du", "des", "un", "une", "et", "ou",
        "dans", "sur", "avec", "pour", "par", "à", "au", "aux", "ce",
        "ces", "cet", "cette", "qui", "que", "quoi", "dont", "où",
    }
)

MAX_KEYWORDS = 10
MIN_KEYWORD_LENGTH = 4


def extract_keywords_from_query(
    query: str,
    stop_words: Iterable[str] = FRENCH_STOP_WORDS,
    limit: int = MAX_KEYWORDS,
) -> list[str]:
    """
    Extract keywords from a user query.

    Words are kept in order of first appearance; there is no frequency
    ranking.

    Args:
        query: Free-text user query
        stop_words: Words to ignore
        limit: Maximum number of keywords returned

    Returns:
        At most ``limit`` lowercase keywords longer than 3 characters
    """
    stop_words = frozenset(stop_words)
    words = [
        word
        for word in query.lower().split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in stop_words
    ]
    return words[: max(0, limit)]
