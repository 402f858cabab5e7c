"""Shared file operation utilities: input resolution and encoding sniffing."""

from __future__ import annotations

import codecs
import fnmatch
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

logger = logging.getLogger(__name__)

# Longest marks first: the UTF-32 LE mark starts with the UTF-16 LE one.
_BOMS: List[Tuple[bytes, str]] = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


def iter_files(
    root: Path,
    recursive: bool = False,
    include: List[str] | None = None,
    exclude: List[str] | None = None,
) -> Iterator[Path]:
    """Iterate files with include/exclude filtering.

    Args:
        root: Root path to search
        recursive: Recurse into subdirectories
        include: List of glob patterns to include
        exclude: List of glob patterns to exclude

    Yields:
        Matching file paths, sorted within each directory listing
    """
    include = include or ["*"]
    exclude = exclude or []

    if root.is_file():
        yield root
        return

    candidates = root.rglob("*") if recursive else root.iterdir()
    for p in sorted(candidates):
        if p.is_file() and matches_filters(p, include, exclude):
            yield p


def matches_filters(
    path: Path,
    include: List[str],
    exclude: List[str],
) -> bool:
    """Check if path matches include/exclude patterns.

    Args:
        path: Path to check
        include: List of glob patterns to include
        exclude: List of glob patterns to exclude

    Returns:
        True if path matches filters
    """
    name = path.name

    # Check excludes first
    for pattern in exclude:
        if fnmatch.fnmatch(name, pattern):
            return False

    for pattern in include:
        if fnmatch.fnmatch(name, pattern):
            return True

    return False


def resolve_input_files(
    paths: Iterable[Path | str],
    recursive: bool = False,
    include: List[str] | None = None,
    exclude: List[str] | None = None,
) -> Tuple[List[Path], List[Path]]:
    """Turn user-supplied paths into a de-duplicated list of existing files.

    Directories are expanded (recursively if asked) through `iter_files`.
    Include/exclude patterns only apply to directory contents; files named
    explicitly are always kept.

    Args:
        paths: File or directory paths as given on the command line
        recursive: Recurse into subdirectories
        include: Glob patterns a directory entry must match
        exclude: Glob patterns that reject a directory entry

    Returns:
        (files, missing) where `files` keeps first-seen order and `missing`
        lists the inputs that do not exist
    """
    files: List[Path] = []
    missing: List[Path] = []
    seen = set()

    for raw in paths:
        path = Path(raw)
        if not path.exists():
            missing.append(path)
            continue

        if path.is_dir():
            found = iter_files(path, recursive=recursive, include=include, exclude=exclude)
        else:
            found = iter([path])

        for candidate in found:
            key = candidate.resolve()
            if key in seen:
                logger.debug(f"Skipping duplicate input {candidate}")
                continue
            seen.add(key)
            files.append(candidate)

    return files, missing


def detect_encoding(path: Path, default: str = "utf-8") -> str:
    """Guess the text encoding of `path` from its byte-order mark.

    Args:
        path: File to inspect
        default: Codec returned when no byte-order mark is present

    Returns:
        A codec name that consumes the mark while decoding
    """
    with path.open("rb") as f:
        head = f.read(4)
    for bom, codec in _BOMS:
        if head.startswith(bom):
            return codec
    return default
