"""File handle whose read and write sides open on first use."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Callable, Optional

from .errors import CloseError, MissingWriterError, UnsupportedOperation, is_not_found
from .once import Once
from .reader import failing_reader, open_reader, static_reader
from .writer import (
    DIR_MODE,
    Writer,
    WriterOpen,
    buffer_writer,
    failing_writer,
    open_writer,
)

logger = logging.getLogger(__name__)

ReaderFactory = Callable[[Optional[str]], Once[Any]]


class Handle:
    """A file that will eventually be read from or written to.

    The read side and the write side are independent. Neither is opened
    until an operation needs it, and each is opened at most once. Once a
    side is open (``reader`` / ``writer`` are set) every later operation
    of that kind goes straight to it.
    """

    __slots__ = (
        "file_path",
        "reader",
        "writer",
        "_reader_init",
        "_reader_factory",
        "_writer_init",
    )

    def __init__(
        self,
        file_path: Optional[str] = None,
        *,
        reader=None,
        writer: Optional[Writer] = None,
        reader_init: Optional[Once[Any]] = None,
        writer_init: Optional[Once[WriterOpen]] = None,
        reader_factory: Optional[ReaderFactory] = None,
    ) -> None:
        self.file_path = file_path
        self.reader = reader
        self.writer = writer
        self._reader_init = reader_init
        self._reader_factory = reader_factory
        self._writer_init = writer_init

    @classmethod
    def new(cls, file_path: str, *, dir_mode: int = DIR_MODE) -> "Handle":
        return cls(
            file_path,
            reader_init=open_reader(file_path),
            reader_factory=_reopen,
            writer_init=open_writer(file_path, dir_mode=dir_mode),
        )

    @classmethod
    def new_writer(cls, file_path: str, *, dir_mode: int = DIR_MODE) -> "Handle":
        """Handle meant for writing; reading back what was written still works."""
        return cls.new(file_path, dir_mode=dir_mode)

    @classmethod
    def from_reader(cls, source) -> "Handle":
        return cls(reader_init=static_reader(source))

    @classmethod
    def from_reader_error(cls, exc: Exception) -> "Handle":
        return cls(
            reader_init=failing_reader(exc),
            reader_factory=lambda _path: failing_reader(exc),
        )

    @classmethod
    def from_writer(cls, sink, file_path: str) -> "Handle":
        return cls(writer_init=buffer_writer(sink, file_path))

    @classmethod
    def from_writer_error(cls, exc: Optional[Exception]) -> "Handle":
        return cls(writer_init=failing_writer(exc))

    def exists(self) -> bool:
        """Report whether the read side can be opened.

        A missing file is not an error here: the reader initializer is
        replaced with a fresh one so that a later ``exists`` or ``read``
        looks at the filesystem again. Any other failure is raised.
        """
        if self.reader is None:
            init = self._require_reader()
            try:
                reader = init()
            except Exception as exc:
                if not is_not_found(exc):
                    raise
                logger.debug("%s does not exist", self.file_path)
                if self._reader_factory is not None:
                    self._reader_init = self._reader_factory(self.file_path)
                return False
            self.reader = reader
        return True

    def read(self) -> bytes:
        """Drain the read side and return everything that was left in it.

        Failures to open, including a missing file, are cached: calling
        ``read`` again raises the same exception without reopening.
        """
        if self.reader is None:
            self.reader = self._require_reader()()
        return self.reader.read()

    def write(self, data) -> int:
        """Append ``data`` to the write side, opening it first if needed."""
        writer = self.writer
        if writer is None:
            if self._writer_init is None:
                raise UnsupportedOperation("handle has no write side")
            writer = self._writer_init()()
            if writer is None:
                raise MissingWriterError()
            self.writer = writer
        return writer.write(data)

    def close(self) -> None:
        """Close whichever sides are open and can be closed.

        Both sides are always attempted. A single failure is raised as is;
        two failures are raised together as a ``CloseError``.
        """
        errors: list[Exception] = []
        if self.reader is not None:
            close = getattr(self.reader, "close", None)
            if close is not None:
                try:
                    close()
                except Exception as exc:
                    logger.warning("closing reader of %s failed: %s", self.file_path, exc)
                    errors.append(exc)
        if self.writer is not None:
            try:
                self.writer.close()
            except Exception as exc:
                logger.warning("closing writer of %s failed: %s", self.file_path, exc)
                errors.append(exc)
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise CloseError("failed to close file", errors)

    def _require_reader(self) -> Once[Any]:
        if self._reader_init is None:
            raise UnsupportedOperation("handle has no read side")
        return self._reader_init

    def __enter__(self) -> "Handle":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<Handle {self.file_path!r}>"


def _reopen(file_path: Optional[str]) -> Once[Any]:
    return open_reader(file_path or "")


def new(file_path: str, *, dir_mode: int = DIR_MODE) -> Handle:
    return Handle.new(file_path, dir_mode=dir_mode)


def opener() -> Callable[[str], Handle]:
    """Return the default ``path -> Handle`` factory."""
    return new


def opener_for(handle: Handle) -> Callable[[str], Handle]:
    """Return a factory that hands out ``handle`` for whatever path is asked for.

    Lets code that opens files by name be pointed at an in-memory or
    failing handle.
    """

    def open_handle(file_path: str) -> Handle:
        handle.file_path = file_path
        return handle

    return open_handle
