#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/search.py
"""Search over block orderings for the closest match to the old README.

Every ordering of the blocks is generated by backtracking in block index
order and scored with :func:`docweave.align.align_lockstep`. The aligner
stops scoring a candidate once it is worse than the best complete
candidate so far, so most orderings are abandoned early, but all n! of
them are still generated. Inputs in practice hold a handful of blocks;
above ``SearchOptions.warn_threshold`` a warning is logged and an
explicit ``max_blocks`` ceiling can turn large inputs into an error.

With ``workers > 1`` the outer branches (the choice of the first block)
are scored on a process pool. The processes share one
:class:`~docweave.align.SharedBestDistance` for pruning. The result is
the same as a sequential run: lowest distance first, then earliest
ordering in generation order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from itertools import repeat
from typing import Any, Iterator, Sequence

from docweave.align import AlignmentTrace, BestDistance, SharedBestDistance, align_lockstep
from docweave.exceptions import SearchLimitError
from docweave.extract import DocBlock, flatten_blocks
from docweave.options import SearchOptions
from docweave.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

# Sentinel distance for a branch whose every ordering was pruned
_UNREACHED = 2**62


@dataclass(frozen=True)
class SearchResult:
    """Winning ordering of one search.

    Parameters
    ----------
    ordering : tuple of int
        Block indices in the chosen order.
    trace : AlignmentTrace
        Alignment of that ordering against the document.
    evaluated : int
        Orderings scored to completion.
    pruned : int
        Orderings abandoned because they could not beat the best.

    """

    ordering: tuple[int, ...]
    trace: AlignmentTrace
    evaluated: int = 0
    pruned: int = 0

    @property
    def distance(self) -> int:
        """Alignment distance of the winning ordering."""
        return self.trace.distance


def iter_orderings(n: int, prefix: Sequence[int] = ()) -> Iterator[tuple[int, ...]]:
    """Yield every ordering of ``range(n)`` that starts with ``prefix``.

    Orderings come out in lexicographic index order. Built with the usual
    choose-next-unused backtracking over a ``used`` marker list.
    """
    used = [False] * n
    perm: list[int] = []
    for index in prefix:
        used[index] = True
        perm.append(index)

    def _extend() -> Iterator[tuple[int, ...]]:
        if len(perm) == n:
            yield tuple(perm)
            return
        for i in range(n):
            if used[i]:
                continue
            used[i] = True
            perm.append(i)
            yield from _extend()
            perm.pop()
            used[i] = False

    yield from _extend()


class SearchSession:
    """One ordering search with a single owner of the best-so-far distance.

    Parameters
    ----------
    blocks : sequence of DocBlock
        Blocks to order.
    document_lines : sequence of str
        Lines of the existing README.
    options : SearchOptions, optional
        Alignment constants, worker count, and block ceiling.

    """

    def __init__(
        self,
        blocks: Sequence[DocBlock],
        document_lines: Sequence[str],
        options: SearchOptions | None = None,
    ) -> None:
        """Store the inputs and create an empty best-distance cell."""
        self.blocks = list(blocks)
        self.document_lines = list(document_lines)
        self.options = options or SearchOptions()
        self.best: BestDistance | SharedBestDistance = BestDistance()

    def run(self) -> SearchResult:
        """Find the ordering whose flattened lines align best with the document.

        Returns
        -------
        SearchResult
            The winning ordering and its trace.

        Raises
        ------
        SearchLimitError
            If ``max_blocks`` is set and there are more blocks than that.

        """
        n = len(self.blocks)

        if not self.document_lines:
            ordering = tuple(range(n))
            logger.debug("No existing document lines; keeping extraction order for %d blocks", n)
            return SearchResult(ordering, AlignmentTrace(0, tuple(flatten_blocks(self.blocks))))

        if self.options.max_blocks is not None and n > self.options.max_blocks:
            raise SearchLimitError(n, self.options.max_blocks)
        if n > self.options.warn_threshold:
            logger.warning(
                "Searching %d documentation blocks; ordering search is factorial and may be slow", n
            )

        with debug_timer(logger, f"Ordering search over {n} blocks"):
            if self.options.workers > 1 and n > 1:
                result = self._run_parallel()
            else:
                result = self._search_branch(())

        logger.debug(
            "Best ordering %s with distance %d (%d evaluated, %d pruned)",
            result.ordering,
            result.distance,
            result.evaluated,
            result.pruned,
        )
        return result

    def _run_parallel(self) -> SearchResult:
        n = len(self.blocks)
        workers = min(self.options.workers, n)
        shared = SharedBestDistance()
        prefixes = [(first,) for first in range(n)]
        with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker, initargs=(shared.raw,)) as executor:
            branches = list(
                executor.map(
                    _search_branch_in_worker,
                    repeat(self.blocks),
                    repeat(self.document_lines),
                    repeat(self.options),
                    prefixes,
                )
            )

        # Branches arrive in index order, so strict comparison keeps the earliest tie
        winner = branches[0]
        for branch in branches[1:]:
            if branch.distance < winner.distance:
                winner = branch
        self.best.offer(winner.distance)
        return SearchResult(
            winner.ordering,
            winner.trace,
            evaluated=sum(b.evaluated for b in branches),
            pruned=sum(b.pruned for b in branches),
        )

    def _search_branch(self, prefix: tuple[int, ...]) -> SearchResult:
        alignment = self.options.alignment
        best_ordering: tuple[int, ...] | None = None
        best_trace: AlignmentTrace | None = None
        evaluated = 0
        pruned = 0

        for ordering in iter_orderings(len(self.blocks), prefix):
            data = flatten_blocks(self.blocks, ordering)
            trace = align_lockstep(data, self.document_lines, best=self.best.value, options=alignment)
            if trace is None:
                pruned += 1
                continue
            evaluated += 1
            self.best.offer(trace.distance)
            if best_trace is None or trace.distance < best_trace.distance:
                best_ordering = ordering
                best_trace = trace

        # Every ordering of this branch lost to another branch's best
        if best_trace is None or best_ordering is None:
            return SearchResult(prefix, AlignmentTrace(_UNREACHED, ()), evaluated, pruned)
        return SearchResult(best_ordering, best_trace, evaluated, pruned)


# Best distance shared by every branch a worker process scores
_worker_best: SharedBestDistance | None = None


def _init_worker(raw_best: Any) -> None:
    global _worker_best
    _worker_best = SharedBestDistance(raw_best)


def _search_branch_in_worker(
    blocks: Sequence[DocBlock],
    document_lines: Sequence[str],
    options: SearchOptions,
    prefix: tuple[int, ...],
) -> SearchResult:
    session = SearchSession(blocks, document_lines, options)
    if _worker_best is not None:
        session.best = _worker_best
    return session._search_branch(prefix)


def find_best_ordering(
    blocks: Sequence[DocBlock],
    document_lines: Sequence[str],
    options: SearchOptions | None = None,
) -> SearchResult:
    """Search all block orderings for the best alignment with the document.

    Parameters
    ----------
    blocks : sequence of DocBlock
        Extracted documentation blocks.
    document_lines : sequence of str
        Lines of the existing README; empty means "keep extraction order".
    options : SearchOptions, optional
        Search configuration.

    Returns
    -------
    SearchResult
        Winning ordering, trace, and evaluation counters.

    """
    return SearchSession(blocks, document_lines, options).run()
