"""Concurrent word counting across many files.

`WordCounterService.count_words` fans the files out over a bounded thread
pool, waits for every file to settle and returns one immutable
`WordCountResult`. A failing file is recorded and never stops the others;
a stop request aborts the whole batch with `CountingCancelledError`.
"""

from __future__ import annotations

import concurrent.futures as futures
import logging
import threading
from pathlib import Path
from typing import List, Optional, Sequence, Union

from common.exceptions import CountingCancelledError
from wordcount.options import WordCounterOptions
from wordcount.processor import TokenizerFactory, WordCountTable, process_file
from wordcount.result import WordCountResult
from wordcount.tokenizer import StreamingWordTokenizer

logger = logging.getLogger(__name__)


class WordCounterService:
    """Count words in a batch of files with bounded parallelism."""

    def __init__(
        self,
        options: Optional[WordCounterOptions] = None,
        tokenizer_factory: TokenizerFactory = StreamingWordTokenizer,
    ) -> None:
        if tokenizer_factory is None:
            raise ValueError("tokenizer_factory must not be None")
        self.options = options or WordCounterOptions()
        self._tokenizer_factory = tokenizer_factory

    def count_words(
        self,
        file_paths: Sequence[Union[str, Path]],
        cancel_event: Optional[threading.Event] = None,
    ) -> WordCountResult:
        """Count every file in `file_paths` and merge the results.

        The paths are expected to exist already; a file that cannot be read
        adds one message to `WordCountResult.errors`.

        Args:
            file_paths: Files to count
            cancel_event: Optional stop signal checked before every read

        Returns:
            Snapshot of the merged counts and the per-file errors

        Raises:
            CountingCancelledError: `cancel_event` was set, or the run was
                interrupted, before every file settled.
        """
        paths = [Path(p) for p in file_paths]
        cancel = cancel_event or threading.Event()
        table = WordCountTable()
        errors: List[str] = []

        parallelism = self.options.resolve_parallelism(len(paths))
        logger.info(f"Counting {len(paths)} file(s) with up to {parallelism} worker(s)")

        executor = futures.ThreadPoolExecutor(
            max_workers=parallelism, thread_name_prefix="wordcount"
        )
        try:
            pending = [
                executor.submit(
                    process_file, path, table, self.options, self._tokenizer_factory, cancel
                )
                for path in paths
            ]
            for future in futures.as_completed(pending):
                error = future.result()
                if error is not None:
                    errors.append(error)
        except (CountingCancelledError, KeyboardInterrupt) as ex:
            cancel.set()
            executor.shutdown(wait=True, cancel_futures=True)
            partial = WordCountResult(counts=table.snapshot(), errors=errors)
            logger.warning(
                f"Counting cancelled after {partial.total_word_occurrences} word(s)"
            )
            raise CountingCancelledError(str(ex) or "Counting interrupted", partial) from ex
        finally:
            executor.shutdown(wait=True)

        result = WordCountResult(counts=table.snapshot(), errors=errors)
        logger.info(
            f"Counted {result.total_word_occurrences} word(s), "
            f"{result.unique_word_count} unique, {len(errors)} error(s)"
        )
        return result
