from __future__ import annotations

import shutil
import uuid
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def tmp_path() -> Iterator[Path]:
    """Workspace-local tmp_path so created files never leave the checkout."""
    tmp_root = ROOT / "target" / "pytest-tmp"
    tmp_root.mkdir(parents=True, exist_ok=True)
    case_dir = tmp_root / f"case-{uuid.uuid4().hex}"
    case_dir.mkdir()
    try:
        yield case_dir
    finally:
        shutil.rmtree(case_dir, ignore_errors=True)


class FailingCloser:
    """Stream stand-in whose close() always raises the given error."""

    def __init__(self, error: Exception, data: bytes = b"") -> None:
        self.error = error
        self.data = data

    def read(self) -> bytes:
        data, self.data = self.data, b""
        return data

    def write(self, data: bytes) -> int:
        return len(data)

    def close(self) -> None:
        raise self.error


@pytest.fixture
def failing_closer() -> type[FailingCloser]:
    return FailingCloser
