"""Ranked report of a counting run, plus text and JSON renderers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from common.exceptions import ValidationError
from wordcount.options import DEFAULT_TOP_N
from wordcount.result import WordCountResult

NO_WORDS_MESSAGE = "No words found in the provided files."
RULE = "-" * 50


@dataclass(frozen=True)
class RankedEntry:
    word: str
    count: int


@dataclass(frozen=True)
class WordCountReport:
    """Display view of a `WordCountResult`.

    `entries` holds at most `top_n` rows; `hidden_count` says how many
    ranked words did not make the cut.
    """

    entries: Tuple[RankedEntry, ...]
    unique_word_count: int
    total_word_occurrences: int
    top_n: int
    hidden_count: int

    @property
    def is_empty(self) -> bool:
        return self.unique_word_count == 0


def rank_words(counts: Mapping[str, int]) -> List[RankedEntry]:
    """Order entries by count descending, then word ascending."""
    return [
        RankedEntry(word=w, count=c)
        for w, c in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def build_report(result: WordCountResult, top_n: int = DEFAULT_TOP_N) -> WordCountReport:
    """Rank `result.counts` and cap the displayed entries to `top_n`."""
    if top_n < 1:
        raise ValidationError(f"top_n must be a positive integer, got {top_n}")

    ranked = rank_words(result.counts)
    return WordCountReport(
        entries=tuple(ranked[:top_n]),
        unique_word_count=result.unique_word_count,
        total_word_occurrences=result.total_word_occurrences,
        top_n=top_n,
        hidden_count=max(0, len(ranked) - top_n),
    )


def format_text(report: WordCountReport, errors: Sequence[str] = ()) -> str:
    """Render the console table, preceded by any per-file errors."""
    lines: List[str] = list(errors)

    if report.is_empty:
        lines.append(NO_WORDS_MESSAGE)
        return "\n".join(lines)

    lines.append(f"Total unique words: {report.unique_word_count}")
    lines.append(f"Total word occurrences: {report.total_word_occurrences}")
    lines.append("")
    lines.append(f"Word Counts (Top {report.top_n} by frequency):")
    lines.append(RULE)
    lines.append(f"{'Word':<30} {'Count':>15}")
    lines.append(RULE)
    for entry in report.entries:
        lines.append(f"{entry.word:<30} {entry.count:>15,}")

    if report.hidden_count:
        lines.append("")
        lines.append(f"... and {report.hidden_count} more unique words")

    return "\n".join(lines)


def format_json(report: WordCountReport, errors: Sequence[str] = ()) -> str:
    """Render the report and errors as a JSON document."""
    data = {
        "unique_words": report.unique_word_count,
        "total_occurrences": report.total_word_occurrences,
        "top": [{"word": e.word, "count": e.count} for e in report.entries],
        "hidden": report.hidden_count,
        "errors": list(errors),
    }
    return json.dumps(data, ensure_ascii=False, indent=2)
