"""Word counter CLI: count words across files and print the most frequent.

Examples:
  - Count two files:
    wordcount count notes.txt book.txt

  - Whole directory tree, markdown only, JSON output:
    wordcount count ./docs --recursive --include "*.md" --json

  - Smaller reads, at most 4 files at once:
    wordcount count big.log --chunk-size 4096 --max-parallelism 4

Environment:
  WORD_COUNTER_CHUNK_SIZE and WORD_COUNTER_MAX_PARALLELISM set the defaults
  for --chunk-size and --max-parallelism.

Exit codes: 0 success, 1 no usable input, 2 some files failed, 130 cancelled.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from common.cli_helpers import normalize_log_level, setup_logging
from common.exceptions import CountingCancelledError, ValidationError
from common.file_helpers import resolve_input_files
from wordcount.options import DECODE_ERROR_MODES, DEFAULT_TOP_N, WordCounterOptions
from wordcount.report import build_report, format_json, format_text
from wordcount.service import WordCounterService

app = typer.Typer(help="Count word occurrences across text files.")
logger = logging.getLogger(__name__)

EXIT_NO_INPUT = 1
EXIT_PARTIAL_FAILURE = 2
EXIT_CANCELLED = 130


@app.callback()
def main(
    log_level: str = typer.Option(
        "INFO", "--log-level", help="Logging verbosity", case_sensitive=False
    ),
) -> None:
    """Global options for the CLI."""
    setup_logging(normalize_log_level(log_level))


@app.command()
def count(
    paths: List[Path] = typer.Argument(..., help="Files or directories to count"),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", help="Characters read per chunk [default: 65536]"
    ),
    max_parallelism: Optional[int] = typer.Option(
        None, "--max-parallelism", help="Files counted at once [default: 2 x CPUs]"
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", help="Text encoding; detected from the BOM when omitted"
    ),
    decode_errors: str = typer.Option(
        "strict", "--decode-errors", help="strict|replace|ignore"
    ),
    top: int = typer.Option(DEFAULT_TOP_N, "--top", min=1, help="Rows to display"),
    recursive: bool = typer.Option(False, "--recursive", help="Recurse into directories"),
    include: Optional[List[str]] = typer.Option(
        None, "--include", help="Glob to include (repeatable)"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", help="Glob to exclude (repeatable)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Count words in PATHS and print the most frequent ones."""
    if decode_errors not in DECODE_ERROR_MODES:
        typer.echo(f"Invalid --decode-errors value: {decode_errors}", err=True)
        raise typer.Exit(code=EXIT_NO_INPUT)

    files, missing = resolve_input_files(
        paths, recursive=recursive, include=include, exclude=exclude
    )
    if missing:
        logger.warning(f"{len(missing)} path(s) not found and will be skipped")
        for path in missing:
            logger.debug(f"Missing: {path}")
    if not files:
        typer.echo("Error: No valid files found.", err=True)
        raise typer.Exit(code=EXIT_NO_INPUT)

    options = WordCounterOptions.from_environment().with_overrides(
        chunk_size=chunk_size,
        max_parallelism=max_parallelism,
        encoding=encoding,
        decode_errors=decode_errors,
        top_n=top,
    )
    logger.info(f"Processing {len(files)} file(s)...")

    try:
        result = WordCounterService(options).count_words(files)
        report = build_report(result, options.top_n)
    except CountingCancelledError as ex:
        typer.echo(f"Cancelled: {ex}", err=True)
        raise typer.Exit(code=EXIT_CANCELLED)
    except ValidationError as ex:
        typer.echo(str(ex), err=True)
        raise typer.Exit(code=EXIT_NO_INPUT)

    if json_out:
        typer.echo(format_json(report, result.errors))
    else:
        typer.echo(format_text(report, result.errors))

    if result.has_errors:
        raise typer.Exit(code=EXIT_PARTIAL_FAILURE)


if __name__ == "__main__":
    app()
