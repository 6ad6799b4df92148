#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/discovery.py
"""Find source files and pull documentation blocks out of them.

A source path may be a single file, which is always read, or a
directory, which is walked recursively in sorted name order. Dependency,
build, temporary, and hidden directories are skipped. Only files whose
names end with one of the configured extensions are read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from docweave.constants import DEFAULT_EXTENSIONS, IGNORED_DIRECTORIES
from docweave.exceptions import FileAccessError, FileNotFoundError
from docweave.extract import DocBlock, LineClassifier, extract_blocks, parse_doc_comment
from docweave.lines import split_lines

logger = logging.getLogger(__name__)


def normalize_extensions(values: Iterable[str]) -> tuple[str, ...]:
    """Normalize extension arguments into dotted suffixes.

    Accepts repeated and comma separated values, with or without the dot.

    Examples
    --------
    >>> normalize_extensions(["js,py", ".go", " c "])
    ('.js', '.py', '.go', '.c')

    """
    extensions: List[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            ext = part if part.startswith(".") else "." + part
            if ext not in extensions:
                extensions.append(ext)
    return tuple(extensions)


def is_ignored_directory(name: str, ignored: Iterable[str] = IGNORED_DIRECTORIES) -> bool:
    """Return True for directory names the walk should not enter."""
    return not name or name.startswith(".") or name in ignored


def iter_source_files(
    src: str | Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignored_dirs: Iterable[str] = IGNORED_DIRECTORIES,
) -> Iterator[Path]:
    """Yield source files under ``src`` in deterministic order.

    Parameters
    ----------
    src : str or Path
        A file or a directory.
    extensions : iterable of str
        Dotted suffixes to accept when walking a directory.
    ignored_dirs : iterable of str
        Directory names never entered (hidden directories are always skipped).

    Raises
    ------
    FileNotFoundError
        If ``src`` does not exist.

    """
    root = Path(src)
    if not root.exists():
        raise FileNotFoundError(str(root))

    if root.is_file():
        yield root
        return

    suffixes = tuple(extensions)
    ignored = frozenset(ignored_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not is_ignored_directory(d, ignored))
        for filename in sorted(filenames):
            if filename.endswith(suffixes):
                yield Path(dirpath) / filename


def read_source_lines(path: Path) -> list[str]:
    """Read a source file as UTF-8 lines.

    Raises
    ------
    FileAccessError
        If the file cannot be read or decoded.

    """
    try:
        return split_lines(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise FileAccessError(str(path), message=f"Source file is not valid UTF-8: {path}", original_error=e) from e
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def discover_blocks(
    src: str | Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignored_dirs: Iterable[str] = IGNORED_DIRECTORIES,
    classifier: Optional[LineClassifier] = None,
) -> list[DocBlock]:
    """Extract documentation blocks from every eligible file under ``src``.

    Parameters
    ----------
    src : str or Path
        A file or a directory to search.
    extensions : iterable of str
        Dotted suffixes of files to read when walking a directory.
    ignored_dirs : iterable of str
        Directory names to skip.
    classifier : callable, optional
        Documentation line classifier; defaults to ``//**`` / ``##**`` markers.

    Returns
    -------
    list of DocBlock
        Blocks in file order, then source order within each file.

    """
    classifier = classifier or parse_doc_comment
    blocks: list[DocBlock] = []
    for path in iter_source_files(src, extensions, ignored_dirs):
        file_blocks = extract_blocks(read_source_lines(path), classifier, source=str(path))
        if file_blocks:
            logger.debug("Found %d documentation blocks in %s", len(file_blocks), path)
        blocks.extend(file_blocks)
    logger.info("Extracted %d documentation blocks from %s", len(blocks), src)
    return blocks
