"""Tests for reconciling documentation blocks with an existing README."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from docweave.exceptions import ValidationError
from docweave.extract import DocBlock
from docweave.merge import ChangeKind
from docweave.options import SearchOptions
from docweave.reconcile import reconcile


def make_blocks(*groups):
    return [DocBlock(tuple(group)) for group in groups]


def is_subsequence(needle, haystack):
    remaining = iter(haystack)
    return all(any(item == candidate for candidate in remaining) for item in needle)


@pytest.mark.unit
class TestReconcile:
    """Behaviour of reconcile on representative documents."""

    def test_first_generation(self):
        result = reconcile(make_blocks(["a", "a"], ["b"]), None)
        assert result.first_generation
        assert result.text == "a\na\nb"
        assert result.ordering == (0, 1)
        assert all(entry.kind is ChangeKind.FRESH for entry in result.entries)
        assert result.counts()[ChangeKind.FRESH] == 3

    def test_no_blocks_rejected(self):
        with pytest.raises(ValidationError):
            reconcile([], "text")

    def test_unchanged_document_is_stable(self):
        document = "# Demo\n\nIntro\n## Usage\nRun it."
        blocks = make_blocks(["# Demo", "", "Intro"], ["## Usage", "Run it."])
        result = reconcile(blocks, document)
        assert result.text == document
        assert not result.changed
        assert result.counts()[ChangeKind.UNCHANGED] == 5

    def test_reordered_blocks_follow_document(self):
        document = "## A\na text\n## B\nb text"
        blocks = make_blocks(["## B", "b text"], ["## A", "a text"])
        result = reconcile(blocks, document)
        assert result.ordering == (1, 0)
        assert result.text == document

    def test_structural_lines_are_preserved(self):
        document = "# T\n![logo](logo.png)\nBody"
        result = reconcile(make_blocks(["# T"], ["Body"]), document)
        assert result.text == document
        assert not result.changed

    def test_html_lines_are_preserved_across_edits(self):
        document = "# T\nold\n<div class=\"page-break\" />\n## Next"
        result = reconcile(make_blocks(["# T", "new"], ["## Next"]), document)
        assert result.text == '# T\nnew\n<div class="page-break" />\n## Next'

    def test_hand_written_prose_is_dropped(self):
        result = reconcile(make_blocks(["# T"], ["Body"]), "# T\nNotes\nBody")
        assert result.text == "# T\nBody"
        assert result.counts()[ChangeKind.REMOVED] == 1

    def test_updated_line(self):
        result = reconcile(make_blocks(["# T", "new"]), "# T\nold")
        assert result.text == "# T\nnew"
        kinds = [entry.kind for entry in result.entries]
        assert kinds == [ChangeKind.UNCHANGED, ChangeKind.REMOVED, ChangeKind.ADDED]
        assert result.changed

    def test_empty_document_is_all_added(self):
        result = reconcile(make_blocks(["b"], ["a"]), "")
        assert not result.first_generation
        assert result.text == "b\na"
        assert all(entry.kind is ChangeKind.ADDED for entry in result.entries)

    def test_crlf_document(self):
        result = reconcile(make_blocks(["a", "b"]), "a\r\nb\r\n")
        assert result.text == "a\nb"
        assert not result.changed

    @pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\u2028"])
    def test_separator_inside_a_line_survives_regeneration(self, separator):
        blocks = make_blocks(["# T", f"a{separator}b"])
        first = reconcile(blocks, None)
        assert first.text == f"# T\na{separator}b"
        second = reconcile(blocks, first.text)
        assert second.text == first.text
        assert not second.changed

    def test_separator_change_is_reported(self):
        result = reconcile(make_blocks(["# T", "a\x0cb"]), "# T\na b")
        assert result.text == "# T\na\x0cb"
        assert result.changed
        assert result.counts()[ChangeKind.REMOVED] == 1

    def test_parallel_search_gives_same_text(self):
        document = "## A\na\n<br>\n## B\nb\n## C"
        blocks = make_blocks(["## C"], ["## B", "b"], ["## A", "a"])
        sequential = reconcile(blocks, document)
        parallel = reconcile(blocks, document, SearchOptions(workers=3))
        assert parallel.text == sequential.text == document


words = st.text(alphabet="abcdef#", min_size=1, max_size=4)


@pytest.mark.unit
class TestReconcileProperties:
    """Property-based checks of reconcile."""

    @given(
        st.lists(st.lists(words, min_size=1, max_size=3), min_size=1, max_size=4),
        st.lists(st.one_of(words, st.sampled_from(["![x](x.png)", "<hr/>"])), max_size=8),
    )
    def test_every_block_line_is_written(self, groups, document_lines):
        blocks = make_blocks(*groups)
        result = reconcile(blocks, "\n".join(document_lines))
        written = result.text.split("\n")
        for group in groups:
            assert is_subsequence(group, written)

    @given(st.lists(st.lists(words, min_size=1, max_size=3), min_size=1, max_size=4))
    def test_regenerating_own_output_is_a_no_op(self, groups):
        blocks = make_blocks(*groups)
        first = reconcile(blocks, None)
        second = reconcile(blocks, first.text)
        assert second.text == first.text
        assert not second.changed
