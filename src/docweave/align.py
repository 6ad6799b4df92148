#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/align.py
"""Lockstep alignment of a candidate line sequence against the old README.

The aligner walks the candidate (``data``) and the existing document
(``ref``) together. Matching lines cost nothing. Empty or structural
candidate lines are skipped. Empty or structural document lines are
copied into the candidate at the current position, which is how images
and hand-written markup survive a regeneration. Two ordinary lines that
differ are resolved with a short lookahead on both sides.

The resulting distance only ranks candidate orderings against each other;
it is not an edit distance in any formal sense.
"""

from __future__ import annotations

import logging
import multiprocessing
import threading
from dataclasses import dataclass
from typing import Any, Sequence

from docweave.lines import is_skippable_line, join_lines
from docweave.options import AlignmentOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentTrace:
    """Outcome of aligning one candidate against the document.

    Parameters
    ----------
    distance : int
        Accumulated alignment cost; lower is closer.
    lines : tuple of str
        Candidate lines with preserved document lines inserted.

    """

    distance: int
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        """Merged lines joined by newlines, surrounding whitespace removed."""
        return join_lines(self.lines)


class BestDistance:
    """Lock-guarded holder of the lowest distance seen during one search.

    Reads may be stale, which only costs extra work. ``offer`` is an
    atomic compare-and-set so concurrent workers never lose an update.
    """

    def __init__(self, value: int | None = None) -> None:
        """Start with ``value`` (None means no candidate scored yet)."""
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int | None:
        """The current best distance, or None."""
        return self._value

    def offer(self, distance: int) -> bool:
        """Record ``distance`` if it beats the current best.

        Returns
        -------
        bool
            True when ``distance`` became the new best.

        """
        with self._lock:
            if self._value is None or distance < self._value:
                self._value = distance
                return True
            return False


class SharedBestDistance:
    """Best distance held in shared memory for searches split across processes.

    Same interface as :class:`BestDistance`. The counter is a
    ``multiprocessing.Value`` whose own lock guards ``offer``; pass it to
    worker processes at start-up (pool initializer), not per task.
    """

    _UNSET = -1

    def __init__(self, raw: Any = None) -> None:
        """Wrap ``raw`` or allocate a new shared signed 64-bit counter."""
        self.raw = raw if raw is not None else multiprocessing.Value("q", self._UNSET)

    @property
    def value(self) -> int | None:
        """The current best distance, or None."""
        current = self.raw.value
        return None if current == self._UNSET else current

    def offer(self, distance: int) -> bool:
        """Record ``distance`` if it beats the current best."""
        with self.raw.get_lock():
            current = self.raw.value
            if current == self._UNSET or distance < current:
                self.raw.value = distance
                return True
            return False


def align_lockstep(
    data: Sequence[str],
    ref: Sequence[str],
    best: int | None = None,
    options: AlignmentOptions | None = None,
) -> AlignmentTrace | None:
    """Align a flattened candidate against the document lines.

    Parameters
    ----------
    data : sequence of str
        Candidate lines (blocks concatenated in one ordering).
    ref : sequence of str
        Lines of the existing document.
    best : int, optional
        Abort and return None as soon as the distance exceeds this value.
    options : AlignmentOptions, optional
        Lookahead window and mismatch penalty.

    Returns
    -------
    AlignmentTrace or None
        The trace, or None when scoring was cut short by ``best``.

    """
    options = options or AlignmentOptions()
    window = options.lookahead_window

    merged = list(data)
    ref_len = len(ref)
    nd = 0
    nr = 0
    distance = 0

    while nd < len(merged) and nr < ref_len:
        ld = merged[nd]
        lr = ref[nr]

        if ld == lr:
            nd += 1
            nr += 1
            continue

        if is_skippable_line(ld):
            nd += 1
            continue

        if is_skippable_line(lr):
            merged.insert(nd, lr)
            nd += 1
            nr += 1
            continue

        for offset in range(1, window):
            if nr + offset < ref_len and ref[nr + offset] == ld:
                distance += offset
                nr += offset
                break
            if nd + offset < len(merged) and merged[nd + offset] == lr:
                distance += offset
                nd += offset
                break
        else:
            distance += options.mismatch_penalty

        nd += 1
        nr += 1

        if best is not None and distance > best:
            return None

    return AlignmentTrace(distance=distance, lines=tuple(merged))
