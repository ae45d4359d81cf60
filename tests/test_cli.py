"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from news_bias_analyzer import cli
from news_bias_analyzer.classifier import train_naive_bayes
from news_bias_analyzer.dataset import balanced_seed


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def offline_model(monkeypatch):
    """Skip the network: every command trains on the seed corpus."""
    monkeypatch.setattr(cli, "_load_model", lambda: train_naive_bayes(balanced_seed()))


def _json_output(output: str) -> dict:
    return json.loads(output[output.index("{"):])


class TestClassify:
    def test_json_output(self, runner: CliRunner):
        text = "The piece denounces opponents as dishonest propaganda."
        result = runner.invoke(cli.main, ["classify", "--text", text, "-o", "json"])
        assert result.exit_code == 0, result.output
        data = _json_output(result.output)
        assert data["label"] == "highly-biased"
        assert data["modelInfo"]["trainedOn"] == 60

    def test_rich_output(self, runner: CliRunner):
        result = runner.invoke(cli.main, ["classify", "--text", "Officials released the annual report."])
        assert result.exit_code == 0, result.output
        assert "Bias Estimate" in result.output

    def test_reads_file(self, runner: CliRunner, tmp_path):
        article = tmp_path / "article.txt"
        article.write_text("The report lists figures and quotes officials.", encoding="utf-8")
        result = runner.invoke(cli.main, ["classify", str(article), "-o", "json"])
        assert result.exit_code == 0, result.output
        assert _json_output(result.output)["label"] in {"neutral", "slightly-biased", "highly-biased"}

    def test_no_input(self, runner: CliRunner):
        result = runner.invoke(cli.main, ["classify"])
        assert result.exit_code == 2

    def test_blank_text(self, runner: CliRunner):
        result = runner.invoke(cli.main, ["classify", "--text", "   "])
        assert result.exit_code == 2
        assert "Missing text" in result.output


class TestSummarize:
    def test_extractive_json(self, runner: CliRunner, long_article: str):
        result = runner.invoke(cli.main, ["summarize", "--no-llm", "--text", long_article, "-o", "json"])
        assert result.exit_code == 0, result.output
        data = _json_output(result.output)
        assert data["usedFallback"] is True
        assert len(data["summary"].split("\n")) == 3

    def test_max_bullets(self, runner: CliRunner, long_article: str):
        args = ["summarize", "--no-llm", "-n", "2", "--text", long_article, "-o", "json"]
        result = runner.invoke(cli.main, args)
        assert result.exit_code == 0, result.output
        assert len(_json_output(result.output)["summary"].split("\n")) == 2

    def test_text_output(self, runner: CliRunner, short_text: str):
        result = runner.invoke(cli.main, ["summarize", "--no-llm", "--text", short_text])
        assert result.exit_code == 0, result.output
        assert "Extractive summary" in result.output
        assert "Topic:" in result.output


class TestModelInfo:
    def test_lists_labels(self, runner: CliRunner):
        result = runner.invoke(cli.main, ["model-info", "--top", "3"])
        assert result.exit_code == 0, result.output
        assert "Rows: 60" in result.output
        for label in ("neutral", "slightly-biased", "highly-biased"):
            assert label in result.output
