"""Shared exception classes for wordcount."""

from __future__ import annotations

from typing import Any, Optional


class WordCounterError(Exception):
    """Base exception for all wordcount errors."""

    pass


class FileOperationError(WordCounterError):
    """Error while opening, reading or decoding an input file."""

    pass


class ValidationError(WordCounterError):
    """Input validation error."""

    pass


class TokenizerError(WordCounterError):
    """Tokenizer could not be created or was used after completion."""

    pass


class CountingCancelledError(WordCounterError):
    """A counting batch was aborted by an external stop request.

    Never recorded as a per-file error; it always propagates to the caller.
    Counts already merged before the stop are kept on `partial_result`.
    """

    def __init__(self, message: str, partial_result: Optional[Any] = None) -> None:
        super().__init__(message)
        self.partial_result = partial_result
