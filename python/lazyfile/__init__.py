from __future__ import annotations

from .errors import (
    CloseError,
    DirectoryCreationError,
    FileCreationError,
    LazyFileError,
    MissingWriterError,
    UnsupportedOperation,
)
from .handle import Handle, new, opener, opener_for
from .once import Once
from .writer import Writer


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("lazyfile")
    except Exception:  # pragma: no cover - running from a source checkout
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "CloseError",
    "DirectoryCreationError",
    "FileCreationError",
    "Handle",
    "LazyFileError",
    "MissingWriterError",
    "Once",
    "UnsupportedOperation",
    "Writer",
    "new",
    "opener",
    "opener_for",
    "__version__",
]
