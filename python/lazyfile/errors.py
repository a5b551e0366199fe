from __future__ import annotations

import errno as _errno
import io
from typing import Optional


class LazyFileError(Exception):
    """Base class for errors raised by lazyfile itself."""


class DirectoryCreationError(LazyFileError, OSError):
    """Raised when the parent directory of a write target cannot be created."""

    def __init__(self, directory: str, cause: Optional[OSError] = None) -> None:
        code = cause.errno if cause is not None else None
        super().__init__(code, f"failed to create directory {directory!r}")
        self.directory = directory
        self.filename = directory

    def __str__(self) -> str:
        return _with_cause(self.strerror, self.__cause__)


class FileCreationError(LazyFileError, OSError):
    """Raised when the write target cannot be created or truncated."""

    def __init__(self, file_path: str, cause: Optional[OSError] = None) -> None:
        code = cause.errno if cause is not None else None
        super().__init__(code, f"failed to create file {file_path!r}")
        self.filename = file_path

    def __str__(self) -> str:
        return _with_cause(self.strerror, self.__cause__)


class MissingWriterError(LazyFileError, RuntimeError):
    """The write initializer reported success but produced no destination."""

    # Byte count reported for this failure; nothing reached any sink.
    written = -1

    def __init__(self, message: str = "unexpected Writer is None") -> None:
        super().__init__(message)


class UnsupportedOperation(LazyFileError, io.UnsupportedOperation):
    """The handle was built without the side needed for this operation."""


class CloseError(ExceptionGroup):
    """Both the reader and the writer failed to close."""

    def derive(self, excs):
        return CloseError(self.message, excs)


def is_not_found(exc: BaseException) -> bool:
    if isinstance(exc, FileNotFoundError):
        return True
    return isinstance(exc, OSError) and exc.errno == _errno.ENOENT


def _with_cause(message: str, cause: Optional[BaseException]) -> str:
    if cause is None:
        return message
    return f"{message}: {cause}"
