"""Shared test fixtures for news-bias-analyzer tests."""

from __future__ import annotations

import pytest

from news_bias_analyzer.classifier import BiasModel, train_naive_bayes
from news_bias_analyzer.config import Settings
from news_bias_analyzer.dataset import balanced_seed


@pytest.fixture
def seed_model() -> BiasModel:
    """Model trained on the built-in seed corpus."""
    return train_naive_bayes(balanced_seed())


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at unroutable test URLs, with a dataset token."""
    return Settings(
        dataset_token="hf_test_token",
        dataset_urls=(
            "https://data.test/train.csv",
            "https://data.test/data.csv",
            "https://data.test/full.csv",
            "https://data.test/extra.csv",
        ),
        fetch_timeout=2.0,
    )


@pytest.fixture
def long_article() -> str:
    """A multi-paragraph news article (standard summarization path)."""
    return (
        "The city council approved a new transit budget on Tuesday after a lengthy debate. "
        "The budget allocates 45 million dollars to expand bus service across the northern districts. "
        "Council members said the transit expansion would reduce commute times for thousands of residents. "
        "Opponents argued that the budget ignores road maintenance needs in older neighborhoods. "
        "The mayor is expected to sign the transit budget later this week. "
        "Construction on the first bus corridors could begin in March 2025. "
        "Transit advocates praised the council for prioritizing bus service. "
        "A public hearing on the construction schedule will be held next month."
    )


@pytest.fixture
def short_text() -> str:
    """Short unpunctuated text (structured summarization path)."""
    return "Government announces new climate policy targeting emissions reductions across industrial sectors by 2030"
