"""Bernoulli Naive Bayes bias classifier.

Pure-Python training and prediction over a bag of distinct words:

- Presence counting (a token counts once per document, however often it
  repeats)
- Laplace smoothing of both class priors and token likelihoods, so that
  empty models and unseen tokens never produce zero probabilities
- Softmax-normalized class probabilities computed from log-scores
- Most informative tokens per label for inspection

The trained :class:`BiasModel` is immutable; a new model is always built
from scratch.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .models import LABELS, BiasLabel, DatasetRow, PredictionResult
from .tokenizer import tokenize_for_classifier

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BiasModel:
    """Smoothed bag-of-words counts for each bias label.

    Attributes:
        labels: Label order used for scoring and tie-breaking.
        vocabulary: Every distinct token seen during training.
        document_count: Training documents per label.
        token_presence_count: Per label, the number of documents containing
            each token at least once.
        total_token_presence: Per label, the sum of its presence counts.
        trained_on: Number of rows the model was built from.
    """

    labels: tuple[BiasLabel, ...]
    vocabulary: frozenset[str] = field(repr=False)
    document_count: Mapping[BiasLabel, int]
    token_presence_count: Mapping[BiasLabel, Mapping[str, int]] = field(repr=False)
    total_token_presence: Mapping[BiasLabel, int]
    trained_on: int

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    def to_dict(self) -> dict:
        """Model description for API responses."""
        return {
            "trainedOn": self.trained_on,
            "labels": [label.value for label in self.labels],
            "vocabularySize": self.vocabulary_size,
        }


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def train_naive_bayes(rows: Iterable[DatasetRow]) -> BiasModel:
    """Build a :class:`BiasModel` from labeled rows.

    Args:
        rows: Training examples. An empty iterable yields a model with zero
            counts everywhere.

    Returns:
        The trained, read-only model.
    """
    document_count: dict[BiasLabel, int] = {label: 0 for label in LABELS}
    presence: dict[BiasLabel, dict[str, int]] = {label: {} for label in LABELS}
    total_presence: dict[BiasLabel, int] = {label: 0 for label in LABELS}
    vocabulary: set[str] = set()
    trained_on = 0

    for row in rows:
        trained_on += 1
        document_count[row.label] += 1
        counts = presence[row.label]
        for token in set(tokenize_for_classifier(row.text)):
            counts[token] = counts.get(token, 0) + 1
            total_presence[row.label] += 1
            vocabulary.add(token)

    logger.info(
        "Trained bias model: rows=%d vocab=%d docs=%s",
        trained_on,
        len(vocabulary),
        {label.value: count for label, count in document_count.items()},
    )

    return BiasModel(
        labels=LABELS,
        vocabulary=frozenset(vocabulary),
        document_count=MappingProxyType(document_count),
        token_presence_count=MappingProxyType(
            {label: MappingProxyType(counts) for label, counts in presence.items()}
        ),
        total_token_presence=MappingProxyType(total_presence),
        trained_on=trained_on,
    )


# ---------------------------------------------------------------------------
# Prediction
# ---------------------------------------------------------------------------

def log_scores(model: BiasModel, tokens: Iterable[str]) -> dict[BiasLabel, float]:
    """Compute unnormalized log posterior scores for each label.

    Tokens missing from the vocabulary still contribute their smoothed
    likelihood, which pulls the scores toward the class priors.
    """
    distinct = set(tokens)
    n_docs = sum(model.document_count[label] for label in model.labels)
    vocab_size = max(1, model.vocabulary_size)
    n_labels = len(model.labels)

    scores: dict[BiasLabel, float] = {}
    for label in model.labels:
        score = math.log((model.document_count[label] + 1) / (n_docs + n_labels))
        counts = model.token_presence_count[label]
        denominator = model.total_token_presence[label] + vocab_size
        for token in distinct:
            score += math.log((counts.get(token, 0) + 1) / denominator)
        scores[label] = score
    return scores


def softmax(scores: Mapping[BiasLabel, float]) -> dict[BiasLabel, float]:
    """Normalize log-scores into probabilities (max-subtracted for stability).

    Falls back to a uniform distribution if normalization is impossible.
    """
    if not scores:
        return {}
    max_score = max(scores.values())
    exps = {label: math.exp(s - max_score) for label, s in scores.items()}
    total = sum(exps.values())
    if total <= 0 or not math.isfinite(total):
        uniform = 1.0 / len(scores)
        return {label: uniform for label in scores}
    return {label: value / total for label, value in exps.items()}


def predict(model: BiasModel, text: str) -> PredictionResult:
    """Classify *text* with a trained model.

    The predicted label is the argmax of the raw log-scores (first label in
    model order wins ties), independent of the sorted probability list.

    Args:
        model: A trained :class:`BiasModel`.
        text: Raw article text.

    Returns:
        PredictionResult with the label and probabilities sorted by
        descending score.
    """
    scores = log_scores(model, tokenize_for_classifier(text))

    best = model.labels[0]
    best_score = -math.inf
    for label in model.labels:
        if scores[label] > best_score:
            best_score = scores[label]
            best = label

    probs = softmax(scores)
    ordered = sorted(
        ((label, probs[label]) for label in model.labels),
        key=lambda item: item[1],
        reverse=True,
    )
    return PredictionResult(label=best, probabilities=ordered, log_scores=scores)


def most_informative_tokens(
    model: BiasModel,
    label: BiasLabel,
    top_n: int = 10,
) -> list[tuple[str, float]]:
    """Return the tokens that most favour *label* over the other labels.

    Measures the smoothed log-likelihood of each vocabulary token under
    *label* against the average of the other labels.

    Args:
        model: A trained model.
        label: Target label.
        top_n: Number of tokens to return.

    Returns:
        List of (token, log_likelihood_ratio) tuples, strongest first.

    Raises:
        ValueError: If *label* is not one of the model's labels.
    """
    if label not in model.labels:
        raise ValueError(f"Unknown label: {label}. Known: {list(model.labels)}")

    vocab_size = max(1, model.vocabulary_size)

    def token_log_prob(lbl: BiasLabel, token: str) -> float:
        count = model.token_presence_count[lbl].get(token, 0)
        return math.log((count + 1) / (model.total_token_presence[lbl] + vocab_size))

    others = [lbl for lbl in model.labels if lbl != label]
    ratios: list[tuple[str, float]] = []
    for token in model.vocabulary:
        target = token_log_prob(label, token)
        if others:
            avg_other = sum(token_log_prob(o, token) for o in others) / len(others)
        else:
            avg_other = 0.0
        ratios.append((token, round(target - avg_other, 4)))

    ratios.sort(key=lambda x: (-x[1], x[0]))
    return ratios[:top_n]
