"""Process-wide memoization of the trained bias model.

``ModelCache.get_model`` coalesces concurrent first requests onto a single
pending build task, so the (rate-limited) dataset fetch and the training
run happen at most once at a time. A successful result is kept for the
lifetime of the process; a failed build is not cached and the next call
retries.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from .classifier import BiasModel
from .config import Settings, load_settings
from .dataset import DatasetLoader, build_model

logger = logging.getLogger(__name__)

ModelBuilder = Callable[[], Awaitable[BiasModel]]


class ModelCache:
    """Single-flight cache around an async model builder.

    Example::

        cache = ModelCache(lambda: build_model(DatasetLoader(settings)))
        model = await cache.get_model()

    Args:
        builder: Zero-argument coroutine function producing a new model.
    """

    def __init__(self, builder: ModelBuilder) -> None:
        self._builder = builder
        self._model: Optional[BiasModel] = None
        self._pending: Optional[asyncio.Task[BiasModel]] = None
        self._build_count = 0
        self._generation = 0

    @property
    def model(self) -> Optional[BiasModel]:
        """The cached model, or ``None`` if none has been built yet."""
        return self._model

    @property
    def build_count(self) -> int:
        """Number of builds started so far."""
        return self._build_count

    async def get_model(self) -> BiasModel:
        """Return the cached model, building it on first use.

        Raises:
            Exception: Whatever the builder raised; the failure is not cached.
        """
        if self._model is not None:
            return self._model
        if self._pending is None:
            self._build_count += 1
            self._pending = asyncio.ensure_future(self._build(self._generation))
        # A cancelled caller must not cancel the build other callers share
        return await asyncio.shield(self._pending)

    async def _build(self, generation: int) -> BiasModel:
        try:
            model = await self._builder()
        except Exception:
            logger.exception("Bias model build failed")
            raise
        finally:
            if generation == self._generation:
                self._pending = None
        # A build started before reset() still answers its waiters but is not kept
        if generation == self._generation:
            self._model = model
        return model

    def reset(self) -> None:
        """Drop the cached model so the next call rebuilds."""
        self._generation += 1
        self._model = None
        self._pending = None


_default_cache: Optional[ModelCache] = None


def create_model_cache(settings: Settings) -> ModelCache:
    """Cache that trains from the configured dataset (or the seed corpus)."""
    loader = DatasetLoader(settings)
    return ModelCache(lambda: build_model(loader, settings.row_limit))


def get_default_cache() -> ModelCache:
    """Return the process-wide cache, creating it from the environment."""
    global _default_cache
    if _default_cache is None:
        _default_cache = create_model_cache(load_settings())
    return _default_cache
