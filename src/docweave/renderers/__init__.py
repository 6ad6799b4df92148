#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/renderers/__init__.py
"""Output renderers: the terminal change report and the README PDF.

The PDF renderer imports ReportLab and mistune lazily, so importing this
package never requires them.
"""

from docweave.renderers.pdf import PdfRenderer, render_markdown_to_pdf
from docweave.renderers.report import ReportRenderer, format_entry, print_rich_report

__all__ = [
    "PdfRenderer",
    "ReportRenderer",
    "format_entry",
    "print_rich_report",
    "render_markdown_to_pdf",
]
