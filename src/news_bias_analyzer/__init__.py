"""News Bias Analyzer -- bias intensity estimation and summaries for news articles."""

__version__ = "0.1.0"

from .cache import ModelCache, create_model_cache, get_default_cache
from .classifier import (
    BiasModel,
    most_informative_tokens,
    predict,
    softmax,
    train_naive_bayes,
)
from .config import Settings, load_settings
from .dataset import DatasetLoader, balanced_seed, build_model, normalize_label
from .exceptions import (
    EmptyDatasetError,
    NewsBiasError,
    ParseError,
    UpstreamFetchError,
    ValidationError,
)
from .llm import LLMSummarizer, Summarizer
from .models import LABELS, BiasLabel, DatasetRow, PredictionResult, SummaryOutcome
from .parsers import parse_csv
from .service import SummaryService
from .summarizer import ExtractiveSummarizer, truncate
from .tokenizer import tokenize

__all__ = [
    # Models
    "BiasLabel",
    "LABELS",
    "DatasetRow",
    "PredictionResult",
    "SummaryOutcome",
    # Classification
    "BiasModel",
    "train_naive_bayes",
    "predict",
    "softmax",
    "most_informative_tokens",
    "ModelCache",
    "create_model_cache",
    "get_default_cache",
    # Data
    "DatasetLoader",
    "balanced_seed",
    "build_model",
    "normalize_label",
    "parse_csv",
    "tokenize",
    # Summarization
    "ExtractiveSummarizer",
    "Summarizer",
    "LLMSummarizer",
    "SummaryService",
    "truncate",
    # Configuration and errors
    "Settings",
    "load_settings",
    "NewsBiasError",
    "ValidationError",
    "UpstreamFetchError",
    "ParseError",
    "EmptyDatasetError",
]
