"""Shared CLI utilities for consistent logging setup."""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def setup_logging(level: str, stream: Optional[IO[str]] = None) -> None:
    """Configure logging with consistent format.

    Log records go to stderr by default so stdout only carries the report.

    Args:
        level: Logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG)
        stream: Optional stream override
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream or sys.stderr,
    )


def normalize_log_level(level: str) -> str:
    """Return `level` upper-cased, falling back to INFO for unknown names."""
    upper = level.upper()
    return upper if upper in LOG_LEVELS else "INFO"
