"""Word tokenization shared by the bias classifier and the summarizer.

Both call sites use the same filtering logic and differ only in their
character class and stopword set.
"""

from __future__ import annotations

import re
from collections.abc import Collection

# ---------------------------------------------------------------------------
# Token patterns
# ---------------------------------------------------------------------------

ALPHA_PATTERN = re.compile(r"[a-z]+")
ALNUM_PATTERN = re.compile(r"[a-z0-9]+")

MIN_TOKEN_LENGTH = 3

# ---------------------------------------------------------------------------
# Stopword sets
# ---------------------------------------------------------------------------

#: Stop words removed before Naive Bayes training and prediction.
CLASSIFIER_STOPWORDS: frozenset[str] = frozenset({
    "the", "and", "for", "that", "with", "this", "from", "have", "has",
    "had", "are", "was", "were", "but", "not", "you", "your", "our",
    "their", "they", "his", "her", "its", "who", "what", "when", "where",
    "why", "how", "can", "will", "would", "could", "should", "said",
    "says", "say", "into", "over", "under", "than", "then", "also",
    "more", "most", "some", "any", "all", "because", "been", "after",
    "before", "about", "against", "between", "during", "without",
    "within", "while", "onto", "off", "per", "via", "as", "by", "at",
    "on", "in", "to", "of", "a", "an", "it",
})

#: Stop words removed when scoring sentences and picking keywords.
SUMMARY_STOPWORDS: frozenset[str] = frozenset({
    "the", "is", "in", "and", "to", "of", "a", "for", "on", "that",
    "with", "as", "by", "at", "from", "be", "this", "it", "an", "are",
    "was", "were", "or", "but", "not", "has", "have", "had", "their",
    "they", "his", "her", "its", "you", "your", "our", "them", "who",
    "what", "when", "where", "why", "how",
})


def tokenize(
    text: str,
    stopwords: Collection[str] = frozenset(),
    pattern: re.Pattern[str] = ALPHA_PATTERN,
    min_length: int = MIN_TOKEN_LENGTH,
) -> list[str]:
    """Lowercase *text* and return the filtered tokens in order of appearance.

    Args:
        text: Raw input text.
        stopwords: Tokens to discard.
        pattern: Compiled regex matching one candidate token.
        min_length: Tokens shorter than this are discarded.

    Returns:
        List of tokens (duplicates preserved).
    """
    return [
        token
        for token in pattern.findall(text.lower())
        if len(token) >= min_length and token not in stopwords
    ]


def tokenize_for_classifier(text: str) -> list[str]:
    """Alphabetic tokens filtered with :data:`CLASSIFIER_STOPWORDS`."""
    return tokenize(text, CLASSIFIER_STOPWORDS, ALPHA_PATTERN)


def tokenize_for_summary(text: str) -> list[str]:
    """Alphanumeric tokens filtered with :data:`SUMMARY_STOPWORDS`."""
    return tokenize(text, SUMMARY_STOPWORDS, ALNUM_PATTERN)
