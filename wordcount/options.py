"""Tunables for a counting run, read from the environment or the CLI."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_TOP_N = 50
DECODE_ERROR_MODES = ("strict", "replace", "ignore")

CHUNK_SIZE_ENV_VAR = "WORD_COUNTER_CHUNK_SIZE"
MAX_PARALLELISM_ENV_VAR = "WORD_COUNTER_MAX_PARALLELISM"

_POSITIVE_FIELDS = ("chunk_size", "max_parallelism")


def _parse_positive_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class WordCounterOptions:
    """Chunk size, parallelism and decoding settings for a counting run.

    Non-positive `chunk_size` falls back to `DEFAULT_CHUNK_SIZE` and a
    non-positive `max_parallelism` means "use the default".
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_parallelism: Optional[int] = None
    encoding: Optional[str] = None
    decode_errors: str = "strict"
    top_n: int = DEFAULT_TOP_N

    def __post_init__(self) -> None:
        if self.chunk_size is None or self.chunk_size <= 0:
            object.__setattr__(self, "chunk_size", DEFAULT_CHUNK_SIZE)
        if self.max_parallelism is not None and self.max_parallelism <= 0:
            object.__setattr__(self, "max_parallelism", None)
        if self.decode_errors not in DECODE_ERROR_MODES:
            raise ValueError(
                f"decode_errors must be one of {', '.join(DECODE_ERROR_MODES)}, "
                f"got {self.decode_errors!r}"
            )

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "WordCounterOptions":
        """Build options from WORD_COUNTER_* environment variables.

        Unset, blank, non-integer or non-positive values use the defaults.
        """
        env = os.environ if environ is None else environ
        chunk_size = _parse_positive_int(env.get(CHUNK_SIZE_ENV_VAR))
        max_parallelism = _parse_positive_int(env.get(MAX_PARALLELISM_ENV_VAR))
        return cls(
            chunk_size=chunk_size or DEFAULT_CHUNK_SIZE,
            max_parallelism=max_parallelism,
        )

    def with_overrides(self, **values: Any) -> "WordCounterOptions":
        """Return a copy with every given value in `values` applied.

        None counts as "not given", and so does a non-positive `chunk_size` or
        `max_parallelism`, so it cannot wipe out an environment setting.
        """
        changes = {
            k: v
            for k, v in values.items()
            if v is not None and not (k in _POSITIVE_FIELDS and v <= 0)
        }
        return dataclasses.replace(self, **changes)

    def resolve_parallelism(self, file_count: int) -> int:
        """Return how many files may be processed at the same time."""
        if file_count <= 0:
            return 1
        if self.max_parallelism is not None:
            return min(file_count, self.max_parallelism)
        default = max(1, (os.cpu_count() or 1) * 2)
        return min(file_count, default)
