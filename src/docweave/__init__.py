"""docweave - weave source documentation comments into a README.

Lines starting with ``//**`` or ``##**`` are collected from source files
into documentation blocks. docweave searches for the block order whose
concatenation is closest to the existing README, merges the blocks into
the README with a line diff that keeps the README's image and HTML lines,
and renders the result to PDF.

Examples
--------
Reconcile blocks against an existing document:

    >>> from docweave import DocBlock, reconcile
    >>> result = reconcile([DocBlock.of("# Title"), DocBlock.of("Body")], "# Title\\n![logo](logo.png)\\nBody")
    >>> result.text
    '# Title\\n![logo](logo.png)\\nBody'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from docweave.align import AlignmentTrace, BestDistance, SharedBestDistance, align_lockstep
from docweave.discovery import discover_blocks, iter_source_files, normalize_extensions
from docweave.exceptions import (
    DependencyError,
    DocweaveError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    OutputWriteError,
    RenderingError,
    SearchLimitError,
    ValidationError,
)
from docweave.extract import DocBlock, extract_blocks, flatten_blocks, parse_doc_comment
from docweave.lines import is_structural_line
from docweave.merge import ChangeKind, DiffEntry, diff_document, fresh_entries, merged_text
from docweave.options import AlignmentOptions, PdfOptions, SearchOptions
from docweave.reconcile import ReconcileResult, reconcile
from docweave.search import SearchResult, SearchSession, find_best_ordering, iter_orderings
from docweave.store import read_document, write_document

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "AlignmentOptions",
    "AlignmentTrace",
    "BestDistance",
    "SharedBestDistance",
    "ChangeKind",
    "DependencyError",
    "DiffEntry",
    "DocBlock",
    "DocweaveError",
    "FileAccessError",
    "FileError",
    "FileNotFoundError",
    "OutputWriteError",
    "PdfOptions",
    "ReconcileResult",
    "RenderingError",
    "SearchLimitError",
    "SearchOptions",
    "SearchResult",
    "SearchSession",
    "ValidationError",
    "align_lockstep",
    "diff_document",
    "discover_blocks",
    "extract_blocks",
    "find_best_ordering",
    "flatten_blocks",
    "fresh_entries",
    "is_structural_line",
    "iter_orderings",
    "iter_source_files",
    "merged_text",
    "normalize_extensions",
    "parse_doc_comment",
    "read_document",
    "reconcile",
    "write_document",
]
