"""Exception hierarchy for the news bias analyzer."""

from __future__ import annotations


class NewsBiasError(Exception):
    """Base class for all analyzer errors."""


class ValidationError(NewsBiasError, ValueError):
    """Request input is missing or blank."""


class UpstreamFetchError(NewsBiasError):
    """A remote dataset or LLM provider could not be reached or refused access."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(NewsBiasError, ValueError):
    """Fetched dataset text is empty or lacks the expected columns."""


class EmptyDatasetError(NewsBiasError):
    """No dataset candidate produced a usable row."""
