"""Command-line interface for News Bias Analyzer.

Provides ``classify``, ``summarize``, ``model-info`` and ``serve`` commands
with rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    news-bias-analyzer classify article.txt
    news-bias-analyzer summarize --text "Officials said on Monday..."
    news-bias-analyzer model-info --top 8
    news-bias-analyzer serve --port 8000
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .cache import create_model_cache
from .classifier import BiasModel, most_informative_tokens, predict
from .config import load_settings
from .logging_utils import setup_logging
from .models import BiasLabel, PredictionResult
from .service import SummaryService

console = Console()


def _get_label_style(label: BiasLabel) -> str:
    """Return a rich style string for a bias label."""
    return {
        BiasLabel.NEUTRAL: "bold green",
        BiasLabel.SLIGHTLY_BIASED: "bold yellow",
        BiasLabel.HIGHLY_BIASED: "bold red",
    }.get(label, "")


def _read_input(file: Path | None, text: str | None) -> str:
    """Resolve the article text from a file argument or ``--text``."""
    if text is not None:
        content = text
    elif file is not None:
        content = file.read_text(encoding="utf-8")
    else:
        raise click.UsageError("Provide a FILE argument or --text.")
    if not content.strip():
        raise click.UsageError("Missing text")
    return content


def _load_model() -> BiasModel:
    settings = load_settings()
    return asyncio.run(create_model_cache(settings).get_model())


@click.group()
@click.version_option(package_name="news-bias-analyzer")
@click.option("--log-level", default=None, help="Logging level (default: WARNING).")
def main(log_level: str | None) -> None:
    """📰 News Bias Analyzer: bias estimation and summaries for news articles."""
    setup_logging((log_level or "WARNING").upper())


@main.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--text", "-t", default=None, help="Article text (instead of FILE).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify(file: Path | None, text: str | None, output: str) -> None:
    """Estimate the bias intensity of an article.

    Example: news-bias-analyzer classify article.txt
    """
    content = _read_input(file, text)

    with console.status("[bold blue]Training bias model...", spinner="dots"):
        try:
            model = _load_model()
            result = predict(model, content)
        except Exception as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    if output == "json":
        click.echo(json.dumps({**result.to_dict(), "modelInfo": model.to_dict()}, indent=2))
    else:
        _render_prediction(result, model)


@main.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--text", "-t", default=None, help="Article text (instead of FILE).")
@click.option("--max-bullets", "-n", type=click.IntRange(min=1), default=None,
              help="Maximum number of bullets in the extractive summary.")
@click.option("--no-llm", is_flag=True, help="Always use the extractive summarizer.")
@click.option("--output", "-o", type=click.Choice(["text", "json"]), default="text",
              help="Output format.")
def summarize(file: Path | None, text: str | None, max_bullets: int | None, no_llm: bool, output: str) -> None:
    """Summarize an article as bullet points.

    Example: news-bias-analyzer summarize --no-llm article.txt
    """
    content = _read_input(file, text)
    settings = load_settings()
    service = SummaryService.from_settings(settings)
    if max_bullets is not None:
        service.extractive.max_bullets = max_bullets
    if no_llm:
        service.llm = None

    with console.status("[bold blue]Summarizing article...", spinner="dots"):
        try:
            outcome = asyncio.run(service.get_summary(content))
        except Exception as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    if output == "json":
        click.echo(json.dumps({**outcome.to_dict(), "usedFallback": outcome.used_fallback}, indent=2))
        return

    title = "Extractive summary" if outcome.used_fallback else "LLM summary"
    console.print(Panel(outcome.text, title=f"📰 {title}", border_style="blue"))
    if outcome.provider_error:
        console.print(f"[yellow]Provider error:[/] {outcome.provider_error}")


@main.command("model-info")
@click.option("--top", type=click.IntRange(min=1), default=10,
              help="Number of informative tokens to show per label.")
def model_info(top: int) -> None:
    """Train the model and show its counts and most informative tokens."""
    with console.status("[bold blue]Training bias model...", spinner="dots"):
        try:
            model = _load_model()
        except Exception as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    console.print(Panel(
        f"Rows: {model.trained_on} | Vocabulary: {model.vocabulary_size}",
        title="📰 Bias Model",
        border_style="blue",
    ))

    table = Table(title="Most informative tokens", show_lines=True)
    table.add_column("Label", style="cyan", width=16)
    table.add_column("Docs", justify="right", width=6)
    table.add_column("Tokens", style="white")
    for label in model.labels:
        tokens = most_informative_tokens(model, label, top_n=top)
        table.add_row(
            label.value,
            str(model.document_count[label]),
            ", ".join(token for token, _ in tokens) or "-",
        )
    console.print(table)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("news_bias_analyzer.api:create_app", factory=True, host=host, port=port)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_prediction(result: PredictionResult, model: BiasModel) -> None:
    """Render a PredictionResult with rich formatting."""
    style = _get_label_style(result.label)
    console.print()
    console.print(Panel(
        f"[{style}]{result.label.value.upper()}[/] ({result.confidence:.0%})\n"
        f"[dim]Trained on {model.trained_on} rows, vocabulary {model.vocabulary_size}[/]",
        title="📰 Bias Estimate",
        border_style="blue",
    ))

    table = Table(show_lines=False)
    table.add_column("Label", style="cyan", width=16)
    table.add_column("Probability", justify="right", width=12)
    table.add_column("", width=30)
    for label, score in result.probabilities:
        bar = "█" * round(score * 30)
        table.add_row(label.value, f"{score:.1%}", f"[{_get_label_style(label)}]{bar}[/]")
    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
