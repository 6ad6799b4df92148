"""Unit tests for the lockstep aligner."""

import threading

import pytest

from docweave.align import AlignmentTrace, BestDistance, SharedBestDistance, align_lockstep
from docweave.options import AlignmentOptions


@pytest.mark.unit
class TestAlignLockstep:
    """Scoring rules of align_lockstep."""

    def test_identical_sequences(self):
        trace = align_lockstep(["a", "b"], ["a", "b"])
        assert trace == AlignmentTrace(0, ("a", "b"))

    def test_mismatch_without_realignment_costs_penalty(self):
        trace = align_lockstep(["a"], ["b"])
        assert trace.distance == 2
        assert trace.lines == ("a",)

    def test_custom_penalty(self):
        trace = align_lockstep(["a"], ["b"], options=AlignmentOptions(mismatch_penalty=5))
        assert trace.distance == 5

    def test_skip_ahead_in_document(self):
        """A data line found later in the document costs its offset."""
        trace = align_lockstep(["a", "b"], ["x", "a", "b"])
        assert trace.distance == 1

    def test_skip_ahead_in_candidate(self):
        trace = align_lockstep(["x", "a"], ["a"])
        assert trace.distance == 1
        assert trace.lines == ("x", "a")

    def test_document_side_checked_first(self):
        trace = align_lockstep(["a", "b"], ["b", "a"])
        assert trace.distance == 1

    def test_lookahead_window_limit(self):
        """Offsets reach window - 1; anything farther is a plain mismatch."""
        within = align_lockstep(["a"], ["x"] * 6 + ["a"])
        beyond = align_lockstep(["a"], ["x"] * 7 + ["a"])
        assert within.distance == 6
        assert beyond.distance == 2

    def test_wider_window(self):
        trace = align_lockstep(["a"], ["x"] * 7 + ["a"], options=AlignmentOptions(lookahead_window=9))
        assert trace.distance == 7

    def test_structural_document_line_is_woven_in(self):
        trace = align_lockstep(["# T", "Body"], ["# T", "![logo](logo.png)", "Body"])
        assert trace.distance == 0
        assert trace.lines == ("# T", "![logo](logo.png)", "Body")

    def test_blank_document_line_is_woven_in(self):
        trace = align_lockstep(["a"], ["", "a"])
        assert trace == AlignmentTrace(0, ("", "a"))

    def test_blank_candidate_line_is_free(self):
        trace = align_lockstep(["", "a"], ["a"])
        assert trace == AlignmentTrace(0, ("", "a"))

    def test_structural_candidate_line_is_free(self):
        trace = align_lockstep(["<br>", "a"], ["a"])
        assert trace.distance == 0

    def test_stops_when_document_exhausted(self):
        trace = align_lockstep(["a", "b", "c"], ["a"])
        assert trace == AlignmentTrace(0, ("a", "b", "c"))

    def test_stops_when_candidate_exhausted(self):
        """Trailing document lines are not carried over."""
        trace = align_lockstep(["a"], ["a", "<br>", "b"])
        assert trace == AlignmentTrace(0, ("a",))

    def test_input_not_mutated(self):
        data = ["a"]
        align_lockstep(data, ["<br>", "a"])
        assert data == ["a"]

    def test_text_property(self):
        assert AlignmentTrace(0, ("a", "b")).text == "a\nb"


@pytest.mark.unit
class TestPruning:
    """Early termination against a best-so-far distance."""

    def test_prunes_when_distance_exceeds_best(self):
        assert align_lockstep(["a"], ["b"], best=1) is None

    def test_equal_distance_is_not_pruned(self):
        trace = align_lockstep(["a"], ["b"], best=2)
        assert trace is not None
        assert trace.distance == 2

    def test_best_zero_allows_perfect_match(self):
        assert align_lockstep(["a"], ["a"], best=0) == AlignmentTrace(0, ("a",))


@pytest.mark.unit
class TestBestDistance:
    """Tests for the shared best-distance cell."""

    def test_starts_empty(self):
        assert BestDistance().value is None

    def test_offer_keeps_strictly_lower(self):
        best = BestDistance()
        assert best.offer(5)
        assert not best.offer(5)
        assert not best.offer(7)
        assert best.offer(3)
        assert best.value == 3

    def test_concurrent_offers_keep_minimum(self):
        best = BestDistance()
        values = list(range(200, 0, -1))

        def worker(chunk):
            for value in chunk:
                best.offer(value)

        threads = [threading.Thread(target=worker, args=(values[i::4],)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert best.value == 1


@pytest.mark.unit
class TestSharedBestDistance:
    """Tests for the best-distance cell shared between processes."""

    def test_starts_empty(self):
        assert SharedBestDistance().value is None

    def test_offer_keeps_strictly_lower(self):
        best = SharedBestDistance()
        assert best.offer(4)
        assert not best.offer(4)
        assert best.offer(0)
        assert best.value == 0

    def test_wrapping_the_same_value_shares_updates(self):
        first = SharedBestDistance()
        second = SharedBestDistance(first.raw)
        second.offer(9)
        assert first.value == 9
