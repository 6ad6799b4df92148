"""Unit tests for the line diff and merged text."""

import pytest

from docweave.extract import DocBlock
from docweave.merge import ChangeKind, DiffEntry, diff_document, fresh_entries, merged_text


@pytest.mark.unit
class TestDiffDocument:
    """Tests for diff_document."""

    def test_identical_texts(self):
        entries = diff_document("a\nb", "a\nb")
        assert entries == [DiffEntry(ChangeKind.UNCHANGED, "a"), DiffEntry(ChangeKind.UNCHANGED, "b")]

    def test_replaced_line_reports_removed_before_added(self):
        entries = diff_document("a\nold", "a\nnew")
        assert entries == [
            DiffEntry(ChangeKind.UNCHANGED, "a"),
            DiffEntry(ChangeKind.REMOVED, "old"),
            DiffEntry(ChangeKind.ADDED, "new"),
        ]

    def test_inserted_line(self):
        entries = diff_document("a\nc", "a\nb\nc")
        assert [e.kind for e in entries] == [ChangeKind.UNCHANGED, ChangeKind.ADDED, ChangeKind.UNCHANGED]

    def test_deleted_line(self):
        entries = diff_document("a\nb\nc", "a\nc")
        assert DiffEntry(ChangeKind.REMOVED, "b") in entries

    def test_empty_original(self):
        entries = diff_document("", "a\nb")
        assert entries == [DiffEntry(ChangeKind.ADDED, "a"), DiffEntry(ChangeKind.ADDED, "b")]


@pytest.mark.unit
class TestMergedText:
    """Tests for merged_text and fresh_entries."""

    def test_removed_lines_are_dropped(self):
        entries = diff_document("a\nold\nb", "a\nb")
        assert merged_text(entries) == "a\nb"

    def test_merged_text_equals_target(self):
        target = "# T\n\n![logo](logo.png)\nBody"
        assert merged_text(diff_document("# T\nStale\nBody", target)) == target

    def test_kept_property(self):
        assert DiffEntry(ChangeKind.ADDED, "x").kept
        assert DiffEntry(ChangeKind.FRESH, "x").kept
        assert not DiffEntry(ChangeKind.REMOVED, "x").kept

    def test_fresh_entries_in_extraction_order(self):
        blocks = [DocBlock.of("a", "b"), DocBlock.of("c")]
        entries = fresh_entries(blocks)
        assert [e.line for e in entries] == ["a", "b", "c"]
        assert all(e.kind is ChangeKind.FRESH for e in entries)

    def test_change_kind_values(self):
        assert ChangeKind("removed") is ChangeKind.REMOVED
        assert ChangeKind.ADDED == "added"
