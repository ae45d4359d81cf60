"""Extractive bullet-point summarizer for news articles.

Scores sentences by the global frequency of their words and returns the
best ones as ``- `` bullets in document order. Short inputs, where
sentence selection would just echo the text back, get a structured
summary (topic, key terms, facts, gist) instead. No external models are
required.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass

from .tokenizer import tokenize_for_summary

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Inputs shorter than this (in characters) take the structured path.
SHORT_TEXT_CHARS = 280

ELLIPSIS = "…"
EMPTY_SUMMARY = "- No content provided."
CONTEXT_BULLET = "- Context: brief update"

_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?;:])\s+")
_WHITESPACE_RE = re.compile(r"\s+")

_NUMBER_RE = re.compile(r"\b(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?(?:%|\b)")
_DATE_RE = re.compile(
    r"\b(?:\d{4}|Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?"
    r"|Jul(?:y)?|Aug(?:ust)?|Sep(?:tember|t)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\b",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _canonical(text: str) -> str:
    return normalize_whitespace(text).lower()


def split_sentences(text: str) -> list[str]:
    """Split normalized text after ``.``, ``!``, ``?``, ``;`` or ``:``.

    Text without any boundary is returned as a single sentence.
    """
    sentences = [s for s in _SENTENCE_BOUNDARY_RE.split(text) if s]
    return sentences or [text]


def truncate(text: str, max_length: int = 180) -> str:
    """Shorten *text* to at most *max_length* characters plus an ellipsis.

    The cut backtracks to the last period, comma or space, provided it lies
    beyond the first 40 characters, to avoid ending mid-word.
    """
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    last_break = max(cut.rfind("."), cut.rfind(","), cut.rfind(" "))
    if last_break > 40:
        cut = cut[:last_break]
    return cut.strip() + ELLIPSIS


def top_keywords(text: str, n: int = 5) -> list[str]:
    """Most frequent summary tokens; ties keep first-occurrence order."""
    return [token for token, _ in Counter(tokenize_for_summary(text)).most_common(n)]


def extract_facts(text: str, limit: int = 6) -> list[str]:
    """Numbers (grouped thousands, decimals, percentages), months and years."""
    found = _NUMBER_RE.findall(text) + _DATE_RE.findall(text)
    return list(dict.fromkeys(found))[:limit]


# ---------------------------------------------------------------------------
# Summarizer
# ---------------------------------------------------------------------------

@dataclass
class SentenceScore:
    """A scored sentence with its position in the document."""

    text: str
    position: int
    score: int


class ExtractiveSummarizer:
    """Frequency-based extractive summarizer.

    The output is never empty for non-empty input and never equal to the
    input itself (compared case- and whitespace-insensitively).

    Example::

        summarizer = ExtractiveSummarizer(max_bullets=5)
        print(summarizer.summarize(article_text))

    Args:
        max_bullets: Default maximum number of bullets.

    Raises:
        ValueError: If *max_bullets* is less than 1.
    """

    def __init__(self, max_bullets: int = 5) -> None:
        if max_bullets < 1:
            raise ValueError("max_bullets must be at least 1")
        self.max_bullets = max_bullets

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def summarize(self, text: str, max_bullets: int | None = None) -> str:
        """Summarize *text* as newline-separated ``- `` bullets.

        Args:
            text: Article text.
            max_bullets: Override the instance-level :attr:`max_bullets`.

        Returns:
            The bullet summary.
        """
        limit = max(1, max_bullets if max_bullets is not None else self.max_bullets)
        normalized = normalize_whitespace(text)
        if not normalized:
            return EMPTY_SUMMARY

        sentences = split_sentences(normalized)
        if len(normalized) < SHORT_TEXT_CHARS or len(sentences) <= 2:
            bullets = self._structured_bullets(normalized, sentences, limit)
        else:
            bullets = self._extractive_bullets(sentences, limit)

        result = "\n".join(bullets)
        if _canonical(result) == _canonical(normalized):
            return "\n".join(["- Summary:", "- " + truncate(normalized, 200)])
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _structured_bullets(self, normalized: str, sentences: list[str], limit: int) -> list[str]:
        keywords = top_keywords(normalized, 6)
        facts = extract_facts(normalized)

        bullets = [f"- Topic: {truncate(self._topic(sentences[0]), 90)}"]
        if keywords:
            bullets.append(f"- Key terms: {', '.join(keywords[:5])}")
        if facts:
            bullets.append(f"- Facts: {', '.join(facts)}")
        bullets.append(f"- Summary: {truncate(normalized, 160)}")

        while len(bullets) < min(3, limit):
            bullets.append(CONTEXT_BULLET)
        return bullets[:limit]

    @staticmethod
    def _topic(first_sentence: str) -> str:
        """Headline-like rendering of the first sentence's keywords."""
        tokens = tokenize_for_summary(first_sentence)[:12]
        if not tokens:
            return truncate(first_sentence, 80)
        topic = " ".join(tokens)
        return topic[0].upper() + topic[1:]

    def _extractive_bullets(self, sentences: list[str], limit: int) -> list[str]:
        scored = self._score_sentences(sentences)
        target = min(limit, max(3, math.ceil(len(sentences) / 4)))

        chosen = sorted(scored, key=lambda s: s.score, reverse=True)[:target]
        chosen.sort(key=lambda s: s.position)
        return ["- " + truncate(s.text, 180) for s in chosen]

    @staticmethod
    def _score_sentences(sentences: list[str]) -> list[SentenceScore]:
        tokenized = [tokenize_for_summary(s) for s in sentences]
        freq: Counter[str] = Counter(t for tokens in tokenized for t in tokens)
        return [
            SentenceScore(text=sentence, position=i, score=sum(freq[t] for t in tokens))
            for i, (sentence, tokens) in enumerate(zip(sentences, tokenized))
        ]
