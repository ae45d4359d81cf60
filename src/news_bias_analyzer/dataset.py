"""Training data loading: gated remote CSV with a built-in seed fallback.

The remote dataset requires accepting its terms and a bearer token, so
the loader is expected to fail regularly. Every failure is absorbed:
``DatasetLoader.load_training_rows`` returns an empty list and
``build_model`` substitutes the deterministic :func:`balanced_seed` corpus.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .classifier import BiasModel, train_naive_bayes
from .config import DATASET_TOKEN_VARS, Settings
from .exceptions import EmptyDatasetError, ParseError, UpstreamFetchError
from .models import BiasLabel, DatasetRow
from .parsers import LABEL_COLUMNS, TEXT_COLUMNS, find_column, parse_csv

logger = logging.getLogger(__name__)

#: Keyword fragments checked in order; the first match wins.
_LABEL_KEYWORDS: tuple[tuple[tuple[str, ...], BiasLabel], ...] = (
    (("neutral",), BiasLabel.NEUTRAL),
    (("slight",), BiasLabel.SLIGHTLY_BIASED),
    (("high", "extreme", "strong"), BiasLabel.HIGHLY_BIASED),
)


def normalize_label(raw: str) -> Optional[BiasLabel]:
    """Map a raw dataset label onto a :class:`BiasLabel`.

    Returns ``None`` for labels matching no keyword; such rows are dropped
    rather than assigned a default class.
    """
    value = raw.strip().lower()
    for keywords, label in _LABEL_KEYWORDS:
        if any(keyword in value for keyword in keywords):
            return label
    return None


def rows_from_csv(text: str, limit: int) -> list[DatasetRow]:
    """Extract labeled rows from CSV text.

    Args:
        text: Raw CSV content with a header row.
        limit: Maximum number of accepted rows.

    Returns:
        Accepted rows in file order (possibly empty).

    Raises:
        ParseError: If the CSV is empty or lacks a text or label column.
    """
    table = parse_csv(text)
    if not table:
        raise ParseError("CSV contains no rows")

    header = table[0]
    text_idx = find_column(header, TEXT_COLUMNS)
    label_idx = find_column(header, LABEL_COLUMNS)
    if text_idx is None or label_idx is None:
        raise ParseError(f"CSV header lacks text/label columns: {header[:10]}")

    rows: list[DatasetRow] = []
    dropped = 0
    for record in table[1:]:
        if len(rows) >= limit:
            break
        body = record[text_idx] if text_idx < len(record) else ""
        raw_label = record[label_idx] if label_idx < len(record) else ""
        label = normalize_label(raw_label)
        if not body or label is None:
            dropped += 1
            continue
        rows.append(DatasetRow(text=body, label=label))

    if dropped:
        logger.debug("Dropped %d rows with empty text or unrecognized label", dropped)
    return rows


class DatasetLoader:
    """Fetches training rows from the candidate dataset URLs.

    Candidates are tried strictly in order and the first one yielding at
    least one row wins.

    Args:
        settings: Runtime settings (URLs, token, timeout, row limit).
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        token = self._settings.dataset_token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _fetch_candidate(self, client: httpx.AsyncClient, url: str, limit: int) -> list[DatasetRow]:
        response = await client.get(url)
        logger.info(
            "Dataset fetch %s -> %d (token=%s)",
            url,
            response.status_code,
            bool(self._settings.dataset_token),
        )
        if not response.is_success:
            raise UpstreamFetchError(f"HTTP {response.status_code} for {url}", response.status_code)
        return rows_from_csv(response.text, limit)

    async def fetch_rows(self, limit: Optional[int] = None) -> list[DatasetRow]:
        """Return rows from the first candidate that yields any.

        Raises:
            EmptyDatasetError: If no candidate produced a usable row.
        """
        limit = self._settings.row_limit if limit is None else limit
        async with httpx.AsyncClient(
            headers=self._headers(),
            timeout=self._settings.fetch_timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            for url in self._settings.dataset_urls:
                try:
                    rows = await self._fetch_candidate(client, url, limit)
                except (UpstreamFetchError, ParseError) as e:
                    logger.info("Skipping dataset candidate %s: %s", url, e)
                    continue
                except Exception as e:
                    logger.warning("Dataset fetch error for %s: %s", url, e)
                    continue
                if rows:
                    logger.info("Loaded %d training rows from %s", len(rows), url)
                    return rows
        raise EmptyDatasetError("no dataset candidate yielded usable rows")

    async def load_training_rows(self, limit: Optional[int] = None) -> list[DatasetRow]:
        """Like :meth:`fetch_rows` but returns an empty list instead of raising."""
        try:
            return await self.fetch_rows(limit)
        except EmptyDatasetError:
            return []


# ---------------------------------------------------------------------------
# Seed corpus
# ---------------------------------------------------------------------------

_SEED_NEUTRAL: tuple[str, ...] = (
    "The report outlines the timeline of events and quotes multiple sources without editorializing.",
    "Officials provided details about the incident; no conclusions were drawn pending investigation.",
    "Data from the study is presented with methodology and limitations clearly described.",
    "The article summarizes statements from both parties without implying motives.",
    "Key facts were verified against public records and official documents.",
    "The briefing covered the policy proposal with quotes from proponents and opponents.",
    "Market results are reported with historical context and analyst perspectives.",
    "International reactions are listed with minimal interpretation.",
    "The court filing is summarized with references to the original documents.",
    "The piece outlines procedural steps taken by the committee this week.",
)

_SEED_SLIGHT: tuple[str, ...] = (
    "Experts say the plan could raise concerns, though supporters downplay the risk.",
    "Critics argue the measure may go too far, while backers call it a necessary step.",
    "The article frames the issue as contentious, highlighting possible drawbacks.",
    "Some observers contend the language in the bill is vague and open to abuse.",
    "Opponents questioned the timing, suggesting political motives could be at play.",
    "Supporters maintain the change is overdue despite logistical challenges.",
    "Analysts warn there might be unintended consequences in certain regions.",
    "Commentators note the messaging strategy favors one side's narrative.",
    "Some reports emphasize the dispute more than the underlying data.",
    "Coverage points out inconsistencies without fully exploring alternative views.",
)

_SEED_HIGH: tuple[str, ...] = (
    "The piece denounces opponents in strong terms, suggesting malicious intent.",
    "Language repeatedly labels one side as dishonest without presenting evidence.",
    "The article uses charged descriptions to portray the policy as catastrophic.",
    "Opposing views are dismissed as propaganda rather than addressed on merits.",
    "Hyperbolic claims are made with little sourcing, implying a foregone conclusion.",
    "The narrative implies conspiratorial motives throughout the coverage.",
    "Selective quoting and loaded adjectives frame the debate as a moral battle.",
    "The report ridicules certain groups while ignoring counter-evidence.",
    "It amplifies unverified allegations and treats speculation as fact.",
    "One-sided framing presents dissenting experts as bad-faith actors.",
)


def balanced_seed() -> list[DatasetRow]:
    """Built-in balanced corpus: 10 texts per label, duplicated (60 rows)."""
    rows = (
        [DatasetRow(text, BiasLabel.NEUTRAL) for text in _SEED_NEUTRAL]
        + [DatasetRow(text, BiasLabel.SLIGHTLY_BIASED) for text in _SEED_SLIGHT]
        + [DatasetRow(text, BiasLabel.HIGHLY_BIASED) for text in _SEED_HIGH]
    )
    # Duplicated to raise token counts without changing class balance
    return rows + rows


async def build_model(loader: DatasetLoader, limit: Optional[int] = None) -> BiasModel:
    """Load training rows (or the seed corpus) and train a model."""
    logger.info("Bias model training started")
    try:
        rows = await loader.load_training_rows(limit)
    except Exception as e:
        logger.warning("Dataset loading failed: %s", e)
        rows = []
    if not rows:
        logger.warning(
            "Using balanced seed corpus; the dataset is gated, set %s after accepting its terms",
            " or ".join(DATASET_TOKEN_VARS),
        )
        rows = balanced_seed()
    return train_naive_bayes(rows)
