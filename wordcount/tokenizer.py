"""Streaming word tokenizer.

Words are maximal runs of letters, decimal digits and underscores, emitted
lower-cased. The tokenizer keeps the word in progress between calls, so the
words it emits do not depend on how the input is sliced into chunks.

Example:
    >>> words = []
    >>> tok = StreamingWordTokenizer()
    >>> tok.process_chunk("inter", words.append)
    >>> tok.process_chunk("national test", words.append)
    >>> tok.complete(words.append)
    >>> words
    ['international', 'test']
"""

from __future__ import annotations

import re
from typing import Callable, Iterator, List, Tuple

from common.exceptions import TokenizerError

WordCallback = Callable[[str], None]

# `\w` is a superset of the word alphabet: it also matches numeric characters
# that are not decimal digits (superscripts, vulgar fractions, ...).
_CANDIDATE_RUN = re.compile(r"\w+")


def is_word_character(char: str) -> bool:
    """Return True for a letter, a decimal digit or an underscore."""
    return char.isalpha() or char.isdecimal() or char == "_"


def _word_spans(chunk: str) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of every maximal word-character run in `chunk`."""
    for match in _CANDIDATE_RUN.finditer(chunk):
        run = match.group()
        if run.isascii() or all(map(is_word_character, run)):
            yield match.span()
            continue

        offset = match.start()
        start = None
        for index, char in enumerate(run):
            if is_word_character(char):
                if start is None:
                    start = index
            elif start is not None:
                yield offset + start, offset + index
                start = None
        if start is not None:
            yield offset + start, match.end()


def _lower_run(run: str) -> str:
    # Per character: str.lower() on a whole word would apply the final sigma rule.
    if run.isascii():
        return run.lower()
    return "".join(char.lower() for char in run)


class StreamingWordTokenizer:
    """Stateful word splitter for a single character stream.

    One instance per file. Not safe to share between threads. After
    `complete()` the instance is spent and every further call raises
    `TokenizerError`.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []
        self._completed = False

    def process_chunk(self, chunk: str, on_word: WordCallback) -> None:
        """Scan `chunk` and call `on_word` for every word it finishes.

        A word still open at the end of the chunk is kept and continued by
        the next call.
        """
        self._ensure_open()
        cursor = 0
        for start, end in _word_spans(chunk):
            if start > cursor:
                self._flush(on_word)
            self._pending.append(_lower_run(chunk[start:end]))
            cursor = end
        if cursor < len(chunk):
            self._flush(on_word)

    def complete(self, on_word: WordCallback) -> None:
        """Emit the last pending word, if any, and close the tokenizer."""
        self._ensure_open()
        self._flush(on_word)
        self._completed = True

    def _ensure_open(self) -> None:
        if self._completed:
            raise TokenizerError("Tokenizer already completed; create a new one per stream")

    def _flush(self, on_word: WordCallback) -> None:
        if not self._pending:
            return
        word = "".join(self._pending)
        self._pending.clear()
        on_word(word)
