"""Logging setup shared by the CLI and the HTTP API."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure a single stream handler on the root logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
