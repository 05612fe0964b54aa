"""Shared test fixtures for bayes-spam-filter tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bayes_spam_filter.config import FilterConfig


@pytest.fixture
def tiny_config() -> FilterConfig:
    """Two-word configuration with a large offset for hand-checkable numbers."""
    return FilterConfig(word_set_size=2, offset=0.01)


@pytest.fixture
def training_lines() -> list[str]:
    """Minimal two-record training corpus: one spam, one ham."""
    return ["1,0,0", "0,1,1"]


@pytest.fixture
def corpus_lines() -> list[str]:
    """Larger two-word corpus where word 0 signals spam and word 1 signals ham."""
    return [
        "3,0,0",
        "2,1,0",
        "4,0,0",
        "1,0,0",
        "0,3,1",
        "1,2,1",
        "0,4,1",
        "0,1,1",
    ]


@pytest.fixture
def write_corpus(tmp_path: Path):
    """Factory writing a list of lines to a corpus file under tmp_path."""

    def _write(name: str, lines: list[str], trailing_newline: bool = True) -> Path:
        file = tmp_path / name
        text = "\n".join(lines)
        if trailing_newline:
            text += "\n"
        file.write_text(text, encoding="utf-8")
        return file

    return _write


@pytest.fixture
def train_file(write_corpus, corpus_lines: list[str]) -> Path:
    return write_corpus("training_set.data", corpus_lines)


@pytest.fixture
def test_file(write_corpus) -> Path:
    return write_corpus("test_set.data", ["5,0,0", "0,5,1", "2,1,0", "1,3,1"])
