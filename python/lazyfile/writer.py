"""Lazy write-side initializers.

Opening a writer happens in two stages. The outer stage makes sure the
parent directory exists; the inner stage creates (or truncates) the file.
Each stage runs at most once and caches its own failure, so a directory
problem and a file problem surface with different errors and neither step
is ever repeated.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from .errors import DirectoryCreationError, FileCreationError
from .once import Once

logger = logging.getLogger(__name__)

# Permission bits for directories created on the way to a write target.
DIR_MODE = 0o777


class Writer:
    """An opened write destination together with where it landed."""

    __slots__ = ("directory", "file_name", "file_path", "_sink")

    def __init__(self, sink, directory: str, file_name: str, file_path: str) -> None:
        self._sink = sink
        self.directory = directory
        self.file_name = file_name
        self.file_path = file_path

    @property
    def sink(self):
        return self._sink

    def write(self, data) -> int:
        written = self._sink.write(data)
        if written is None:
            written = len(data)
        self.flush()
        return written

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        close = getattr(self._sink, "close", None)
        if close is not None:
            close()

    def __repr__(self) -> str:
        return f"<Writer {self.file_path!r}>"


WriterOpen = Callable[[], Optional[Writer]]


def split_path(file_path: str) -> tuple[str, str]:
    """Split into (directory, file name) the way the filesystem sees it.

    The directory falls back to "." for bare names; trailing separators are
    ignored when picking the file name.
    """
    directory = os.path.dirname(file_path) or "."
    stripped = file_path.rstrip(os.sep)
    if not stripped:
        return directory, os.sep if file_path else "."
    return directory, os.path.basename(stripped)


def open_writer(file_path: str, *, dir_mode: int = DIR_MODE) -> Once[WriterOpen]:
    def prepare() -> WriterOpen:
        directory, file_name = split_path(file_path)
        logger.debug("ensuring directory %s exists", directory)
        try:
            os.makedirs(directory, mode=dir_mode, exist_ok=True)
        except OSError as exc:
            logger.debug("creating directory %s failed: %s", directory, exc)
            return _failed_directory(directory, exc)

        def create() -> Writer:
            logger.debug("creating %s for writing", file_path)
            try:
                fd = open(file_path, "wb")
            except OSError as exc:
                logger.debug("creating %s failed: %s", file_path, exc)
                raise FileCreationError(file_path, exc) from exc
            return Writer(fd, directory, file_name, file_path)

        return Once(create)

    return Once(prepare)


def _failed_directory(directory: str, cause: OSError) -> WriterOpen:
    # One instance for every caller.
    error = DirectoryCreationError(directory, cause)
    error.__cause__ = cause

    def fail():
        raise error.with_traceback(None)

    return fail


def buffer_writer(sink, file_path: str) -> Once[WriterOpen]:
    """Bind an in-memory sink; only the metadata comes from ``file_path``."""
    directory, file_name = split_path(file_path)
    writer = Writer(sink, directory, file_name, file_path)

    def load() -> Writer:
        return writer

    return Once(lambda: load)


def failing_writer(exc: Optional[Exception]) -> Once[WriterOpen]:
    """Every open attempt raises ``exc``; ``None`` yields no destination at all."""

    def load() -> Optional[Writer]:
        if exc is not None:
            raise exc.with_traceback(None)
        return None

    return Once(lambda: load)
