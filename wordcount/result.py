"""Immutable outcome of a counting run."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class WordCountResult:
    """Frequency table plus the per-file error messages of one run.

    The totals are derived from `counts` on access rather than stored.
    """

    counts: Mapping[str, int] = field(default_factory=dict)
    errors: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))
        object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def unique_word_count(self) -> int:
        return len(self.counts)

    @property
    def total_word_occurrences(self) -> int:
        return sum(self.counts.values())

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
