"""Environment-driven configuration.

Settings are read once per process. Every credential is optional: a
missing dataset token means the remote dataset is fetched anonymously
(and usually falls back to the built-in seed corpus), and a missing LLM
key means summaries are always produced extractively.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DATASET_TOKEN_VARS: tuple[str, ...] = ("HUGGINGFACE_TOKEN", "HF_TOKEN")

#: Recognized LLM credential variables, in priority order, with their provider.
LLM_KEY_VARS: tuple[tuple[str, str], ...] = (
    ("OPENAI_API_KEY", "openai"),
    ("ANTHROPIC_API_KEY", "anthropic"),
)

DEFAULT_LLM_MODELS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}

_DATASET_BASE = "https://huggingface.co/datasets/newsmediabias/news-bias-full-data/resolve/main"

DEFAULT_DATASET_URLS: tuple[str, ...] = (
    f"{_DATASET_BASE}/train.csv",
    f"{_DATASET_BASE}/data.csv",
    f"{_DATASET_BASE}/news_bias_full.csv",
    f"{_DATASET_BASE}/news-bias-full-data.csv",
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the analyzer."""

    dataset_token: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_provider: Optional[str] = None
    llm_model: Optional[str] = None
    dataset_urls: tuple[str, ...] = DEFAULT_DATASET_URLS
    fetch_timeout: float = 15.0
    llm_timeout: float = 30.0
    row_limit: int = 2000
    max_bullets: int = 5
    max_llm_chars: int = 12000
    log_level: str = "INFO"

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_key and self.llm_provider)


def _first_present(env: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = env.get(name, "").strip()
        if value:
            return value
    return None


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from environment variables.

    When *env* is ``None`` a ``.env`` file is loaded (if present) and the
    process environment is used.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    llm_api_key = None
    llm_provider = None
    for var, provider in LLM_KEY_VARS:
        value = env.get(var, "").strip()
        if value:
            llm_api_key, llm_provider = value, provider
            break

    llm_model = env.get("NEWS_BIAS_LLM_MODEL", "").strip() or None
    if llm_model is None and llm_provider:
        llm_model = DEFAULT_LLM_MODELS[llm_provider]

    urls_raw = env.get("NEWS_BIAS_DATASET_URLS", "")
    urls = tuple(u.strip() for u in urls_raw.split(",") if u.strip()) or DEFAULT_DATASET_URLS

    return Settings(
        dataset_token=_first_present(env, DATASET_TOKEN_VARS),
        llm_api_key=llm_api_key,
        llm_provider=llm_provider,
        llm_model=llm_model,
        dataset_urls=urls,
        fetch_timeout=_number(env, "NEWS_BIAS_FETCH_TIMEOUT", 15.0, float),
        llm_timeout=_number(env, "NEWS_BIAS_LLM_TIMEOUT", 30.0, float),
        row_limit=_number(env, "NEWS_BIAS_ROW_LIMIT", 2000, int),
        max_bullets=_number(env, "NEWS_BIAS_MAX_BULLETS", 5, int),
        max_llm_chars=_number(env, "NEWS_BIAS_MAX_LLM_CHARS", 12000, int),
        log_level=env.get("NEWS_BIAS_LOG_LEVEL", "").strip().upper() or "INFO",
    )
