"""
LLM-backed abstractive summarization.
Uses OpenAI or Anthropic models, selected by which API key is configured.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from tenacity import retry, stop_after_attempt, wait_exponential

from .config import Settings
from .exceptions import UpstreamFetchError
from .prompts import SUMMARY_PROMPT, SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class Summarizer(ABC):
    """An external summarization capability."""

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """Return a summary of *text*; raise on any provider failure."""
        ...


class LLMSummarizer(Summarizer):
    """
    Summarizes articles with a chat model.
    Supports both OpenAI and Anthropic models.
    """

    def __init__(
        self,
        api_key: str,
        provider: str = "openai",
        model: str = "gpt-4o-mini",
        max_chars: int = 12000,
        timeout: float = 30.0,
    ):
        """
        Initialize the summarizer with the specified provider and model.

        Args:
            api_key: Provider API key
            provider: "openai" or "anthropic"
            model: Model name (gpt-4o-mini, claude-3-5-haiku-latest, etc.)
            max_chars: Article text beyond this many characters is dropped
            timeout: Per-request timeout in seconds
        """
        if provider not in ("openai", "anthropic"):
            raise ValueError(f"Unsupported LLM provider: {provider}")
        self.provider = provider
        self.model = model
        self.max_chars = max_chars
        self.timeout = timeout
        self._init_client(api_key)

    def _init_client(self, api_key: str):
        """Initialize the appropriate async API client.

        SDK retries are disabled; the @retry decorator on _call_llm is the only retry layer.
        """
        if self.provider == "anthropic":
            from anthropic import AsyncAnthropic

            self.client = AsyncAnthropic(api_key=api_key, timeout=self.timeout, max_retries=0)
        else:
            from openai import AsyncOpenAI

            self.client = AsyncOpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=1, max=8), reraise=True)
    async def _call_llm(self, prompt: str) -> str:
        """
        Make a call to the LLM with retry logic.

        Args:
            prompt: The user prompt

        Returns:
            The model's response text
        """
        if self.provider == "anthropic":
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
            )
            return response.content[0].text if response.content else ""
        else:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.2,  # Low randomness for factual summaries
                max_tokens=1024,
            )
            return response.choices[0].message.content or ""

    async def summarize(self, text: str) -> str:
        """
        Summarize an article.

        Raises:
            UpstreamFetchError: If the provider returns no text
        """
        prompt = SUMMARY_PROMPT.format(article_text=text[: self.max_chars])
        output = (await self._call_llm(prompt)).strip()
        if not output:
            raise UpstreamFetchError(f"{self.provider} returned an empty summary")
        return output


def create_llm_summarizer(settings: Settings) -> Optional[LLMSummarizer]:
    """Build the configured LLM summarizer, or ``None`` when no key is set."""
    if not settings.llm_enabled:
        return None
    logger.info("LLM summarization enabled (provider=%s, model=%s)", settings.llm_provider, settings.llm_model)
    return LLMSummarizer(
        api_key=settings.llm_api_key,
        provider=settings.llm_provider,
        model=settings.llm_model,
        max_chars=settings.max_llm_chars,
        timeout=settings.llm_timeout,
    )
