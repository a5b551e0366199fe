"""Lazy read-side initializers."""

from __future__ import annotations

import logging
from typing import BinaryIO

from .once import Once

logger = logging.getLogger(__name__)


def open_reader(file_path: str) -> Once[BinaryIO]:
    """Open ``file_path`` for binary reading on first call, never again."""

    def load() -> BinaryIO:
        logger.debug("opening %s for reading", file_path)
        try:
            return open(file_path, "rb")
        except OSError as exc:
            logger.debug("open %s for reading failed: %s", file_path, exc)
            raise

    return Once(load)


def static_reader(source) -> Once[BinaryIO]:
    def load():
        return source

    return Once(load)


def failing_reader(exc: Exception) -> Once[BinaryIO]:
    def load():
        raise exc.with_traceback(None)

    return Once(load)
