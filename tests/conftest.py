"""Shared pytest fixtures for wordcount tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest


@pytest.fixture
def sample_text_file(tmp_path: Path) -> Path:
    """Create a sample text file for testing.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / "sample.txt"
    file_path.write_text("Hello, World!\nThis is a test file.\n", encoding="utf-8")
    return file_path


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes `content` to `tmp_path / name`."""

    def _make(name: str, content: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
        return path

    return _make


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Create a small directory tree of text files.

    Returns:
        Path to directory containing the files
    """
    root = tmp_path / "corpus"
    root.mkdir()
    (root / "a.txt").write_text("alpha beta alpha", encoding="utf-8")
    (root / "b.md").write_text("beta gamma", encoding="utf-8")
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("delta", encoding="utf-8")
    return root


@pytest.fixture
def expected_corpus_counts() -> Dict[str, int]:
    """Counts for the top level of `corpus_dir` (a.txt and b.md)."""
    return {"alpha": 2, "beta": 2, "gamma": 1}
