"""Summary facade: LLM first, extractive fallback."""

from __future__ import annotations

import logging
from typing import Optional

from .config import Settings
from .llm import Summarizer, create_llm_summarizer
from .models import SummaryOutcome
from .summarizer import ExtractiveSummarizer

logger = logging.getLogger(__name__)


class SummaryService:
    """Chooses between an external summarizer and the extractive fallback.

    Provider failures never fail the request: the error is logged and
    reported alongside the extractive summary.

    Args:
        extractive: Local summarizer used as fallback.
        llm: Optional external summarizer.
    """

    def __init__(
        self,
        extractive: Optional[ExtractiveSummarizer] = None,
        llm: Optional[Summarizer] = None,
    ) -> None:
        self.extractive = extractive or ExtractiveSummarizer()
        self.llm = llm

    @classmethod
    def from_settings(cls, settings: Settings) -> "SummaryService":
        return cls(
            extractive=ExtractiveSummarizer(max_bullets=settings.max_bullets),
            llm=create_llm_summarizer(settings),
        )

    async def get_summary(self, text: str) -> SummaryOutcome:
        """Summarize *text*, falling back to extractive bullets on failure."""
        logger.debug("Summarizing text of length %d (llm=%s)", len(text), self.llm is not None)
        if self.llm is None:
            return SummaryOutcome(text=self.extractive.summarize(text), used_fallback=True)

        try:
            summary = await self.llm.summarize(text)
        except Exception as e:
            logger.warning("LLM summarization failed, using extractive fallback: %s", e)
            return SummaryOutcome(
                text=self.extractive.summarize(text),
                used_fallback=True,
                provider_error=str(e) or type(e).__name__,
            )
        return SummaryOutcome(text=summary, used_fallback=False)
