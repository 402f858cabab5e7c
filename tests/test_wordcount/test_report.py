"""Tests for wordcount.report and wordcount.result modules."""

from __future__ import annotations

import json

import pytest

from common.exceptions import ValidationError
from wordcount.report import (
    NO_WORDS_MESSAGE,
    RankedEntry,
    build_report,
    format_json,
    format_text,
    rank_words,
)
from wordcount.result import WordCountResult


def test_rank_words_ties_broken_alphabetically():
    """Test ranking is count descending, then word ascending."""
    for counts in ({"a": 2, "b": 2, "c": 1}, {"c": 1, "b": 2, "a": 2}):
        assert [e.word for e in rank_words(counts)] == ["a", "b", "c"]


def test_result_is_immutable():
    """Test the result cannot be changed after construction."""
    source = {"x": 1}
    result = WordCountResult(counts=source, errors=["e"])
    source["x"] = 5

    assert result.counts["x"] == 1
    with pytest.raises(TypeError):
        result.counts["y"] = 1  # type: ignore[index]
    with pytest.raises(AttributeError):
        result.errors = ()  # type: ignore[misc]


def test_result_derived_totals():
    """Test unique and total counts are derived from the table."""
    result = WordCountResult(counts={"a": 3, "b": 4})

    assert result.unique_word_count == 2
    assert result.total_word_occurrences == 7
    assert not result.has_errors


def test_build_report_caps_entries_but_keeps_totals():
    """Test only top_n rows are shown while totals cover everything."""
    counts = {f"w{i:03d}": i + 1 for i in range(60)}
    report = build_report(WordCountResult(counts=counts))

    assert len(report.entries) == 50
    assert report.hidden_count == 10
    assert report.unique_word_count == 60
    assert report.total_word_occurrences == sum(range(1, 61))
    assert report.entries[0] == RankedEntry(word="w059", count=60)


def test_build_report_rejects_bad_top_n():
    """Test top_n must be positive."""
    with pytest.raises(ValidationError):
        build_report(WordCountResult(counts={"a": 1}), top_n=0)


def test_format_text_empty():
    """Test the no-words message, preceded by errors."""
    report = build_report(WordCountResult())

    text = format_text(report, ["Error processing file x: gone"])

    assert report.is_empty
    assert text.splitlines() == ["Error processing file x: gone", NO_WORDS_MESSAGE]


def test_format_text_table():
    """Test the console table layout."""
    report = build_report(WordCountResult(counts={"alpha": 1234, "beta": 2}))

    lines = format_text(report).splitlines()

    assert lines[0] == "Total unique words: 2"
    assert lines[1] == "Total word occurrences: 1236"
    assert lines[3] == "Word Counts (Top 50 by frequency):"
    assert lines[4] == "-" * 50
    assert lines[5] == f"{'Word':<30} {'Count':>15}"
    assert lines[7] == f"{'alpha':<30} {'1,234':>15}"
    assert lines[8].startswith("beta")
    assert "more unique words" not in "\n".join(lines)


def test_format_text_mentions_hidden_words():
    """Test truncation is announced."""
    counts = {"a": 3, "b": 2, "c": 1}
    text = format_text(build_report(WordCountResult(counts=counts), top_n=1))

    assert text.endswith("... and 2 more unique words")


def test_format_json():
    """Test JSON output carries totals, rows and errors."""
    report = build_report(WordCountResult(counts={"a": 2, "b": 2, "c": 1}), top_n=2)

    data = json.loads(format_json(report, ["oops"]))

    assert data["unique_words"] == 3
    assert data["total_occurrences"] == 5
    assert data["top"] == [{"word": "a", "count": 2}, {"word": "b", "count": 2}]
    assert data["hidden"] == 1
    assert data["errors"] == ["oops"]
