#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/reconcile.py
"""Reconcile extracted documentation blocks with an existing README.

This is the single entry point of the merge core::

    >>> from docweave import DocBlock, reconcile
    >>> result = reconcile([DocBlock.of("a", "a"), DocBlock.of("b")], None)
    >>> result.text
    'a\\na\\nb'

With no README the blocks are written in extraction order and every line
is reported as fresh. Otherwise the ordering search picks the block order
closest to the README, preserved images and markup are woven back in, and
the result is diffed against the README for the change report.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from docweave.exceptions import ValidationError
from docweave.extract import DocBlock, flatten_blocks
from docweave.lines import join_lines, split_lines
from docweave.merge import ChangeKind, DiffEntry, diff_document, fresh_entries, merged_text
from docweave.options import SearchOptions
from docweave.search import find_best_ordering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconciliation run.

    Parameters
    ----------
    entries : list of DiffEntry
        Per-line classification for the change report.
    text : str
        The README text to persist.
    ordering : tuple of int
        Block indices in the order they were written.
    distance : int
        Alignment distance of that ordering (0 on first generation).
    first_generation : bool
        True when there was no README before this run.
    evaluated : int
        Orderings scored to completion by the search.
    pruned : int
        Orderings abandoned early by the search.

    """

    entries: list[DiffEntry]
    text: str
    ordering: tuple[int, ...]
    distance: int
    first_generation: bool
    evaluated: int = 0
    pruned: int = 0

    def counts(self) -> dict[ChangeKind, int]:
        """Number of entries per change kind."""
        tally = Counter(entry.kind for entry in self.entries)
        return {kind: tally.get(kind, 0) for kind in ChangeKind}

    @property
    def changed(self) -> bool:
        """True if the README differs from what was on disk."""
        return any(entry.kind is not ChangeKind.UNCHANGED for entry in self.entries)


def reconcile(
    blocks: Sequence[DocBlock],
    document_text: str | None,
    options: SearchOptions | None = None,
) -> ReconcileResult:
    """Merge documentation blocks into the README text.

    Parameters
    ----------
    blocks : sequence of DocBlock
        Blocks from the current sources, in extraction order.
    document_text : str or None
        The existing README, or None when there is none.
    options : SearchOptions, optional
        Search and alignment configuration.

    Returns
    -------
    ReconcileResult
        The text to persist and its change report.

    Raises
    ------
    ValidationError
        If ``blocks`` is empty; callers should skip reconciliation instead.
    SearchLimitError
        If the block count exceeds ``options.max_blocks``.

    """
    if not blocks:
        raise ValidationError("No documentation blocks to reconcile", parameter_name="blocks")

    if document_text is None:
        logger.info("No existing document; writing %d blocks in extraction order", len(blocks))
        return ReconcileResult(
            entries=fresh_entries(blocks),
            text=join_lines(flatten_blocks(blocks)),
            ordering=tuple(range(len(blocks))),
            distance=0,
            first_generation=True,
        )

    document_text = document_text.strip()
    search = find_best_ordering(blocks, split_lines(document_text), options)
    entries = diff_document(document_text, search.trace.text)
    logger.info(
        "Chose block order %s (distance %d) from %d scored orderings",
        list(search.ordering),
        search.distance,
        search.evaluated,
    )
    return ReconcileResult(
        entries=entries,
        text=merged_text(entries),
        ordering=search.ordering,
        distance=search.distance,
        first_generation=False,
        evaluated=search.evaluated,
        pruned=search.pruned,
    )
