"""Data models for news bias classification and summarization."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BiasLabel(str, Enum):
    """Bias intensity labels."""

    NEUTRAL = "neutral"
    SLIGHTLY_BIASED = "slightly-biased"
    HIGHLY_BIASED = "highly-biased"


#: Fixed label order used for iteration and tie-breaking.
LABELS: tuple[BiasLabel, ...] = (
    BiasLabel.NEUTRAL,
    BiasLabel.SLIGHTLY_BIASED,
    BiasLabel.HIGHLY_BIASED,
)


@dataclass(frozen=True)
class DatasetRow:
    """A single labeled training example."""

    text: str
    label: BiasLabel


@dataclass
class PredictionResult:
    """Outcome of scoring one text against a trained model."""

    label: BiasLabel
    probabilities: list[tuple[BiasLabel, float]]
    log_scores: dict[BiasLabel, float] = field(default_factory=dict, repr=False)

    @property
    def confidence(self) -> float:
        """Probability assigned to the predicted label."""
        for label, score in self.probabilities:
            if label == self.label:
                return score
        return 0.0

    def to_dict(self) -> dict:
        return {
            "label": self.label.value,
            "probabilities": [
                {"label": label.value, "score": score} for label, score in self.probabilities
            ],
        }


@dataclass(frozen=True)
class SummaryOutcome:
    """Result of the summarizer facade."""

    text: str
    used_fallback: bool
    provider_error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"summary": self.text}
        if self.provider_error:
            data["providerError"] = self.provider_error
        return data
