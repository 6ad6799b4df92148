#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/lines.py
"""Line-level helpers shared by extraction and alignment.

Structural lines are lines a README author adds by hand that the source
comments never mention: a lone Markdown image or a lone HTML tag. The
aligner carries them over from the old document even though no extracted
block contains them.
"""

from __future__ import annotations

import re
from typing import Iterable

_IMAGE_LINE_RE = re.compile(r"^[ \t]*!\[.*\]\([^)]*\)[ \t]*$")
_TAG_LINE_RE = re.compile(r"^[ \t]*<.*>[ \t]*$")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def is_structural_line(line: str) -> bool:
    """Return True when ``line`` holds only an image reference or a markup tag.

    Parameters
    ----------
    line : str
        A single line without its line ending.

    Returns
    -------
    bool
        True for ``![alt](src)`` or ``<...>`` lines, optionally padded
        with spaces or tabs.

    Examples
    --------
    >>> is_structural_line("  ![logo](logo.png)")
    True
    >>> is_structural_line('<div class="page-break" />')
    True
    >>> is_structural_line("see ![logo](logo.png)")
    False

    """
    return bool(_IMAGE_LINE_RE.match(line) or _TAG_LINE_RE.match(line))


def is_skippable_line(line: str) -> bool:
    """Return True for empty or structural lines, which never cost alignment distance."""
    return not line or is_structural_line(line)


def split_lines(text: str) -> list[str]:
    """Split text on CRLF, CR or LF only.

    Form feeds, vertical tabs and Unicode separators stay inside their
    line. A final line break does not produce a trailing empty line.

    Examples
    --------
    >>> split_lines("a\\r\\nb\\x0cc\\n")
    ['a', 'b\\x0cc']

    """
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: Iterable[str]) -> str:
    """Join lines with newlines and strip surrounding whitespace."""
    return "\n".join(lines).strip()
