"""Pytest configuration and fixtures for sift tests."""

import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Keep SIFT_* variables and stray .env files out of tests."""
    for name in list(os.environ):
        if name.startswith("SIFT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def source_dir(tmp_path) -> Path:
    """Empty directory to organize."""
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def make_file(source_dir) -> Callable[..., Path]:
    """Create a file under the source directory, optionally with an mtime."""

    def _make(
        relative: str, content: str = "data", mtime: Optional[datetime] = None
    ) -> Path:
        path = source_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        if mtime is not None:
            ts = mtime.timestamp()
            os.utime(path, (ts, ts))
        return path

    return _make


@pytest.fixture
def snapshot() -> Callable[[Path], Dict[str, str]]:
    """Map relative path to content for every file under a directory."""

    def _snapshot(root: Path) -> Dict[str, str]:
        return {
            str(p.relative_to(root)): p.read_text()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
