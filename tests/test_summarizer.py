"""Tests for the ExtractiveSummarizer and its text helpers."""

from __future__ import annotations

import pytest

from news_bias_analyzer.summarizer import (
    CONTEXT_BULLET,
    ELLIPSIS,
    EMPTY_SUMMARY,
    ExtractiveSummarizer,
    extract_facts,
    normalize_whitespace,
    split_sentences,
    top_keywords,
    truncate,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def summarizer() -> ExtractiveSummarizer:
    return ExtractiveSummarizer(max_bullets=5)


def _canonical(text: str) -> str:
    return " ".join(text.split()).lower()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestNormalizeWhitespace:
    def test_collapses_runs(self):
        assert normalize_whitespace("  a \n\t b  ") == "a b"


class TestSplitSentences:
    def test_splits_on_all_boundaries(self):
        text = "One. Two! Three? Four; five: six"
        assert split_sentences(text) == ["One.", "Two!", "Three?", "Four;", "five:", "six"]

    def test_requires_whitespace_after_punctuation(self):
        assert split_sentences("Version 2.5 shipped") == ["Version 2.5 shipped"]

    def test_no_boundary(self):
        assert split_sentences("no punctuation here") == ["no punctuation here"]


class TestTruncate:
    def test_within_budget_unchanged(self):
        assert truncate("short text", 20) == "short text"

    def test_exact_length_unchanged(self):
        assert truncate("x" * 20, 20) == "x" * 20

    def test_cuts_at_word_boundary(self):
        text = "word " * 50
        assert truncate(text, 100) == ("word " * 19) + "word" + ELLIPSIS

    def test_cuts_at_comma(self):
        text = "a" * 45 + ", then " + "b" * 60
        assert truncate(text, 60) == "a" * 45 + ", then" + ELLIPSIS

    def test_hard_cut_without_late_boundary(self):
        assert truncate("a" * 100, 50) == "a" * 50 + ELLIPSIS

    def test_early_boundary_ignored(self):
        text = "short " + "x" * 100
        assert truncate(text, 50) == text[:50] + ELLIPSIS


class TestTopKeywords:
    def test_frequency_then_first_occurrence(self):
        assert top_keywords("beta alpha beta alpha gamma", 3) == ["beta", "alpha", "gamma"]

    def test_excludes_stopwords(self):
        assert "the" not in top_keywords("the the the council council")


class TestExtractFacts:
    def test_numbers_months_and_years(self):
        facts = extract_facts("Revenue rose 12.5% to 1,200,000 in March 2024")
        assert facts == ["12.5%", "1,200,000", "2024", "March"]

    def test_deduplicates(self):
        assert extract_facts("In 2024 and again in 2024") == ["2024"]

    def test_limit(self):
        assert len(extract_facts("1 2 3 4 5 6 7 8")) == 6

    def test_none(self):
        assert extract_facts("no figures here") == []


# ---------------------------------------------------------------------------
# ExtractiveSummarizer
# ---------------------------------------------------------------------------


class TestExtractiveSummarizerInit:
    def test_invalid_max_bullets(self):
        with pytest.raises(ValueError):
            ExtractiveSummarizer(max_bullets=0)


class TestShortPath:
    def test_structured_bullets(self, summarizer: ExtractiveSummarizer, short_text: str):
        lines = summarizer.summarize(short_text).split("\n")
        assert len(lines) >= 3
        assert lines[0].startswith("- Topic: ")
        assert lines[1].startswith("- Key terms: ")
        assert lines[2] == "- Facts: 2030"
        assert lines[3].startswith("- Summary: ")

    def test_topic_is_capitalized_keywords(self, summarizer: ExtractiveSummarizer):
        lines = summarizer.summarize("officials announced the budget cuts").split("\n")
        assert lines[0] == "- Topic: Officials announced budget cuts"

    def test_key_terms_capped_at_five(self, summarizer: ExtractiveSummarizer):
        text = "alpha bravo charlie delta echo foxtrot golf"
        key_terms = summarizer.summarize(text).split("\n")[1]
        assert key_terms == "- Key terms: alpha, bravo, charlie, delta, echo"

    def test_pads_with_context(self, summarizer: ExtractiveSummarizer):
        lines = summarizer.summarize("It is what it is").split("\n")
        assert lines == [
            "- Topic: It is what it is",
            "- Summary: It is what it is",
            CONTEXT_BULLET,
        ]

    @pytest.mark.parametrize("max_bullets, expected", [(1, 1), (2, 2), (3, 3)])
    def test_respects_max_bullets(self, summarizer: ExtractiveSummarizer, short_text: str, max_bullets: int, expected: int):
        lines = summarizer.summarize(short_text, max_bullets=max_bullets).split("\n")
        assert len(lines) == expected
        assert lines[0].startswith("- Topic:")

    def test_two_long_sentences_use_short_path(self, summarizer: ExtractiveSummarizer):
        text = ("The committee reviewed the proposal in detail " * 5) + ". " + ("Members voted to approve it " * 5)
        assert len(text) >= 280
        assert summarizer.summarize(text).startswith("- Topic:")

    def test_summary_bullet_truncated(self, summarizer: ExtractiveSummarizer):
        text = "Lawmakers debated " + "the infrastructure package at length " * 6
        summary_line = next(line for line in summarizer.summarize(text).split("\n") if line.startswith("- Summary:"))
        assert summary_line.endswith(ELLIPSIS)
        assert len(summary_line) <= len("- Summary: ") + 161


class TestStandardPath:
    def test_selects_sentences_in_document_order(self, summarizer: ExtractiveSummarizer, long_article: str):
        lines = summarizer.summarize(long_article).split("\n")
        assert len(lines) == 3
        assert all(line.startswith("- ") for line in lines)
        positions = [long_article.index(line[2:]) for line in lines]
        assert positions == sorted(positions)

    def test_prefers_high_frequency_sentences(self, summarizer: ExtractiveSummarizer, long_article: str):
        summary = summarizer.summarize(long_article)
        assert "transit budget" in summary

    def test_bullet_count_grows_with_length(self, summarizer: ExtractiveSummarizer, long_article: str):
        text = " ".join([long_article] * 3)
        assert len(summarizer.summarize(text).split("\n")) == 5

    def test_max_bullets_override(self, summarizer: ExtractiveSummarizer, long_article: str):
        assert len(summarizer.summarize(long_article, max_bullets=2).split("\n")) == 2

    def test_long_sentences_truncated(self, summarizer: ExtractiveSummarizer):
        sentence = "The regional authority " + "approved another round of funding for the river project " * 4 + "."
        text = " ".join([sentence] * 4)
        for line in summarizer.summarize(text).split("\n"):
            assert len(line) <= 2 + 181
            assert line.endswith(ELLIPSIS)


class TestGuarantees:
    def test_empty_input(self, summarizer: ExtractiveSummarizer):
        assert summarizer.summarize("") == EMPTY_SUMMARY
        assert summarizer.summarize("   \n ") == EMPTY_SUMMARY

    @pytest.mark.parametrize(
        "text",
        [
            "x",
            "Breaking news",
            "- Topic: something",
            "Officials said on Monday. The bridge is closed.",
            "The storm hit the coast. " * 20,
        ],
    )
    def test_never_empty_never_echo(self, summarizer: ExtractiveSummarizer, text: str):
        result = summarizer.summarize(text)
        assert result.strip()
        assert _canonical(result) != _canonical(text)

    def test_long_article_not_echoed(self, summarizer: ExtractiveSummarizer, long_article: str):
        assert _canonical(summarizer.summarize(long_article)) != _canonical(long_article)

    def test_echo_replaced_with_forced_summary(self, summarizer: ExtractiveSummarizer, long_article: str, monkeypatch):
        monkeypatch.setattr(
            ExtractiveSummarizer,
            "_extractive_bullets",
            lambda self, sentences, limit: [" ".join(sentences)],
        )
        result = summarizer.summarize(long_article)
        lines = result.split("\n")
        assert lines[0] == "- Summary:"
        assert lines[1] == "- " + truncate(normalize_whitespace(long_article), 200)
