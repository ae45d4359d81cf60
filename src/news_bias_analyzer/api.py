"""HTTP API exposing bias classification and summarization.

Endpoints::

    POST /bias       {"text": "..."} -> label, probabilities, modelInfo
    POST /summarize  {"text": "..."} -> summary (+ providerError)
    GET  /health

Both POST endpoints answer ``400 {"error": "Missing text"}`` for absent or
blank text and ``500 {"error": "Internal error"}`` for anything unexpected.
Run with ``news-bias-analyzer serve``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .cache import ModelCache, create_model_cache
from .classifier import predict
from .config import Settings, load_settings
from .exceptions import ValidationError
from .logging_utils import setup_logging
from .service import SummaryService

logger = logging.getLogger(__name__)


async def _read_text(request: Request) -> str:
    """Return the non-blank ``text`` field of a JSON body."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    text = body.get("text") if isinstance(body, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Missing text")
    return text


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ModelCache] = None,
    summary_service: Optional[SummaryService] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        cache: Model cache; one training from *settings* when omitted.
        summary_service: Summary facade; built from *settings* when omitted.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    cache = cache or create_model_cache(settings)
    summary_service = summary_service or SummaryService.from_settings(settings)

    app = FastAPI(title="News Bias Analyzer", version=__version__)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(str(exc), 400)

    @app.post("/bias")
    async def bias(request: Request):
        text = await _read_text(request)
        try:
            model = await cache.get_model()
            result = predict(model, text)
        except Exception:
            logger.exception("Bias classification failed")
            return _error("Internal error", 500)
        return {
            **result.to_dict(),
            "modelInfo": {
                "trainedOn": model.trained_on,
                "labels": [label.value for label in model.labels],
            },
        }

    @app.post("/summarize")
    async def summarize(request: Request):
        text = await _read_text(request)
        logger.info("Summarize request, text length %d", len(text))
        try:
            outcome = await summary_service.get_summary(text)
        except Exception:
            logger.exception("Summarization failed")
            return _error("Internal error", 500)
        return outcome.to_dict()

    @app.get("/health")
    async def health():
        return {"status": "ok", "modelLoaded": cache.model is not None}

    return app
