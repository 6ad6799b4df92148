#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/extract.py
"""Documentation block extraction.

A documentation block is a contiguous run of marked comment lines::

    //** # My Tool
    //**
    //** It does things.
    const x = 1
    //** ## Usage

yields two blocks, ``["# My Tool", "", "It does things."]`` and
``["## Usage"]``. Any unmarked line closes the active block; blocks never
span files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from docweave.constants import DOC_COMMENT_EMPTY_RE, DOC_COMMENT_RE

LineClassifier = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class DocBlock:
    """An immutable run of documentation lines taken from one source file.

    Parameters
    ----------
    lines : tuple of str
        Documentation payloads in source order. Never empty.
    source : str or None
        Path of the file the block was found in, if known.

    """

    lines: tuple[str, ...]
    source: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Reject empty blocks."""
        if not self.lines:
            raise ValueError("DocBlock requires at least one line")

    def __len__(self) -> int:
        """Return the number of lines in the block."""
        return len(self.lines)

    def __iter__(self):
        """Iterate over the block's lines."""
        return iter(self.lines)

    @classmethod
    def of(cls, *lines: str, source: str | None = None) -> "DocBlock":
        """Build a block from positional lines."""
        return cls(tuple(lines), source=source)


def parse_doc_comment(line: str) -> str | None:
    """Return the documentation payload of ``line`` or None.

    Recognizes ``//**`` and ``##**`` markers anywhere in the line. The
    marker alone, or followed by a single space and nothing else, gives
    an empty payload. Text after ``marker + space`` is the payload.

    Parameters
    ----------
    line : str
        Raw source line without its line ending.

    Returns
    -------
    str or None
        The payload, ``""`` for an intentionally blank doc line, or None
        for ordinary source lines.

    Examples
    --------
    >>> parse_doc_comment("//** # Title")
    '# Title'
    >>> parse_doc_comment("##**")
    ''
    >>> parse_doc_comment("// regular comment") is None
    True

    """
    if DOC_COMMENT_EMPTY_RE.search(line):
        return ""
    match = DOC_COMMENT_RE.search(line)
    if match:
        return match.group(1)
    return None


def extract_blocks(
    lines: Iterable[str],
    classifier: LineClassifier = parse_doc_comment,
    source: str | None = None,
) -> list[DocBlock]:
    """Group consecutive documentation lines into blocks.

    Parameters
    ----------
    lines : iterable of str
        Raw lines of one source file.
    classifier : callable, default parse_doc_comment
        Returns the payload of a documentation line, or None for any
        other line.
    source : str, optional
        Recorded on each block for reporting.

    Returns
    -------
    list of DocBlock
        Blocks in source order; empty when no line is marked.

    """
    blocks: list[DocBlock] = []
    active: list[str] | None = None

    for line in lines:
        payload = classifier(line)
        if payload is None:
            if active is not None:
                blocks.append(DocBlock(tuple(active), source=source))
            active = None
            continue
        if active is None:
            active = []
        active.append(payload)

    if active is not None:
        blocks.append(DocBlock(tuple(active), source=source))

    return blocks


def flatten_blocks(blocks: Sequence[DocBlock], ordering: Sequence[int] | None = None) -> list[str]:
    """Concatenate block lines, optionally in the given index order."""
    indices = range(len(blocks)) if ordering is None else ordering
    flat: list[str] = []
    for index in indices:
        flat.extend(blocks[index].lines)
    return flat
