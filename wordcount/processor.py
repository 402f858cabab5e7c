"""Per-file counting: stream one file through its own tokenizer.

The only state shared between workers is the `WordCountTable`. Each chunk's
words are counted locally first and then merged into the table under its
lock, so the lock is held once per chunk rather than once per word.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from common.exceptions import CountingCancelledError, FileOperationError, TokenizerError
from common.file_helpers import detect_encoding
from wordcount.options import WordCounterOptions
from wordcount.tokenizer import StreamingWordTokenizer

logger = logging.getLogger(__name__)

TokenizerFactory = Callable[[], StreamingWordTokenizer]


class WordCountTable:
    """Thread-safe word -> occurrence count mapping.

    `merge` inserts absent words with their count and increments present ones.
    """

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    def merge(self, words: Iterable[str] | Dict[str, int]) -> None:
        """Add a batch of words (or a word -> count mapping) atomically."""
        batch = words if isinstance(words, Counter) else Counter(words)
        if not batch:
            return
        with self._lock:
            self._counts.update(batch)

    def snapshot(self) -> Dict[str, int]:
        """Return a plain-dict copy of the current counts."""
        with self._lock:
            return dict(self._counts)


def _create_tokenizer(factory: TokenizerFactory) -> StreamingWordTokenizer:
    try:
        tokenizer = factory()
    except TokenizerError:
        raise
    except Exception as ex:  # noqa: BLE001
        raise TokenizerError(f"Tokenizer factory failed: {ex}") from ex
    if tokenizer is None:
        raise TokenizerError("Tokenizer factory returned None")
    return tokenizer


def _check_cancelled(path: Path, cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise CountingCancelledError(f"Counting cancelled while processing {path}")


def count_file(
    path: Path,
    table: WordCountTable,
    options: WordCounterOptions,
    tokenizer_factory: TokenizerFactory = StreamingWordTokenizer,
    cancel_event: Optional[threading.Event] = None,
) -> None:
    """Count the words of one file into `table`.

    The file is read `options.chunk_size` characters at a time; memory use is
    bounded by the chunk size plus the longest word.

    Raises:
        FileOperationError: The file could not be opened, read or decoded.
        TokenizerError: No tokenizer could be created for the file.
        CountingCancelledError: `cancel_event` was set between two reads.
    """
    _check_cancelled(path, cancel_event)
    tokenizer = _create_tokenizer(tokenizer_factory)

    try:
        encoding = options.encoding or detect_encoding(path)
        with path.open("r", encoding=encoding, errors=options.decode_errors, newline="") as f:
            chunks = 0
            while True:
                _check_cancelled(path, cancel_event)
                chunk = f.read(options.chunk_size)
                if not chunk:
                    break
                chunks += 1
                words: List[str] = []
                tokenizer.process_chunk(chunk, words.append)
                table.merge(words)
    except (OSError, UnicodeError, LookupError) as ex:
        raise FileOperationError(str(ex)) from ex

    tail: List[str] = []
    tokenizer.complete(tail.append)
    table.merge(tail)
    logger.debug(f"Read {path} in {chunks} chunk(s) using {encoding}")


def process_file(
    path: Path,
    table: WordCountTable,
    options: WordCounterOptions,
    tokenizer_factory: TokenizerFactory = StreamingWordTokenizer,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[str]:
    """Run `count_file` and turn any per-file failure into an error message.

    Returns:
        None on success, otherwise "Error processing file <path>: <cause>".
        Cancellation is not a per-file failure and propagates.
    """
    try:
        count_file(path, table, options, tokenizer_factory, cancel_event)
    except CountingCancelledError:
        raise
    except Exception as ex:  # noqa: BLE001
        logger.warning(f"Cannot count {path}: {ex}")
        logger.debug("Failure details", exc_info=True)
        return f"Error processing file {path}: {ex}"
    return None
