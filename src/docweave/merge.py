#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/merge.py
"""Line diff between the old README and the aligned candidate.

Each output line is tagged with a :class:`ChangeKind`. ``removed`` lines
are reported but never written; everything else is kept in order. When
there was no README at all every line is ``fresh``.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from docweave.extract import DocBlock
from docweave.lines import join_lines, split_lines


class ChangeKind(str, Enum):
    """Classification of one line in the merge report."""

    FRESH = "fresh"
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffEntry:
    """One line of the merge result with its classification."""

    kind: ChangeKind
    line: str

    @property
    def kept(self) -> bool:
        """Whether the line is written to the README."""
        return self.kind is not ChangeKind.REMOVED


def diff_document(original_text: str, target_text: str) -> list[DiffEntry]:
    """Diff two texts line by line.

    Parameters
    ----------
    original_text : str
        The README as it is on disk.
    target_text : str
        The merged text chosen by the ordering search.

    Returns
    -------
    list of DiffEntry
        Entries in document order. Inside a replaced region the removed
        lines come before the added ones.

    """
    old_lines = split_lines(original_text)
    new_lines = split_lines(target_text)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    entries: list[DiffEntry] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            entries.extend(DiffEntry(ChangeKind.UNCHANGED, line) for line in new_lines[j1:j2])
            continue
        if tag in ("delete", "replace"):
            entries.extend(DiffEntry(ChangeKind.REMOVED, line) for line in old_lines[i1:i2])
        if tag in ("insert", "replace"):
            entries.extend(DiffEntry(ChangeKind.ADDED, line) for line in new_lines[j1:j2])
    return entries


def fresh_entries(blocks: Sequence[DocBlock]) -> list[DiffEntry]:
    """Tag every block line as fresh, in extraction order."""
    return [DiffEntry(ChangeKind.FRESH, line) for block in blocks for line in block.lines]


def merged_text(entries: Iterable[DiffEntry]) -> str:
    """Build the README text from the kept entries."""
    return join_lines(entry.line for entry in entries if entry.kept)
