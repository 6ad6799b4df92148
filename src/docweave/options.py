#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/options.py
"""Option dataclasses for alignment, search, and PDF rendering.

All options are frozen dataclasses. Use ``create_updated`` to derive a
modified copy. Field metadata carries the help text used by the CLI.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from docweave.constants import (
    DEFAULT_BLOCK_WARNING_THRESHOLD,
    DEFAULT_LOOKAHEAD_WINDOW,
    DEFAULT_MISMATCH_PENALTY,
    DEFAULT_PDF_CODE_FONT,
    DEFAULT_PDF_FONT_FAMILY,
    DEFAULT_PDF_FONT_SIZE,
    DEFAULT_PDF_LINE_SPACING,
    DEFAULT_PDF_MARGIN,
    DEFAULT_PDF_PAGE_FORMAT,
    DEFAULT_SEARCH_WORKERS,
    PageFormat,
)
from docweave.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build an instance from a configuration mapping.

        Keys may use dashes or underscores. Unknown keys raise ``ValidationError``.

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValidationError(f"Unknown {cls.__name__} option: {key}", parameter_name=key, parameter_value=value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class AlignmentOptions(CloneFrozenMixin):
    """Scoring constants for the lockstep aligner.

    Parameters
    ----------
    lookahead_window : int, default 7
        Number of positions compared on each mismatch, counting the current one.
    mismatch_penalty : int, default 2
        Cost added when no match is found inside the lookahead window.

    """

    lookahead_window: int = field(
        default=DEFAULT_LOOKAHEAD_WINDOW,
        metadata={"help": "Lines compared per mismatch, including the current line", "type": int},
    )
    mismatch_penalty: int = field(
        default=DEFAULT_MISMATCH_PENALTY,
        metadata={"help": "Cost of a mismatch with no match inside the lookahead window", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate scoring constants."""
        if self.lookahead_window < 1:
            raise ValidationError(
                "lookahead_window must be at least 1",
                parameter_name="lookahead_window",
                parameter_value=self.lookahead_window,
            )
        if self.mismatch_penalty < 0:
            raise ValidationError(
                "mismatch_penalty must be non-negative",
                parameter_name="mismatch_penalty",
                parameter_value=self.mismatch_penalty,
            )


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Options controlling the ordering search.

    Parameters
    ----------
    alignment : AlignmentOptions
        Scoring constants handed to the aligner for every candidate.
    workers : int, default 1
        Worker processes that score outer branches (one branch per
        first block). ``1`` searches in the calling process.
    max_blocks : int or None, default None
        Refuse to search more blocks than this (raises ``SearchLimitError``).
        ``None`` searches any count.
    warn_threshold : int, default 10
        Block count above which a degraded-performance warning is logged.

    """

    alignment: AlignmentOptions = field(default_factory=AlignmentOptions)
    workers: int = field(
        default=DEFAULT_SEARCH_WORKERS,
        metadata={"help": "Worker processes for the ordering search", "type": int},
    )
    max_blocks: int | None = field(
        default=None,
        metadata={"help": "Fail instead of searching more than this many blocks", "type": int},
    )
    warn_threshold: int = DEFAULT_BLOCK_WARNING_THRESHOLD

    def __post_init__(self) -> None:
        """Validate worker and ceiling values."""
        if self.workers < 1:
            raise ValidationError("workers must be at least 1", parameter_name="workers", parameter_value=self.workers)
        if self.max_blocks is not None and self.max_blocks < 0:
            raise ValidationError(
                "max_blocks must be non-negative", parameter_name="max_blocks", parameter_value=self.max_blocks
            )


@dataclass(frozen=True)
class PdfOptions(CloneFrozenMixin):
    """Configuration options for rendering the README to PDF.

    Parameters
    ----------
    page_format : {"a3", "a4", "a5", "letter", "legal", "tabloid"}, default "a4"
        Page size for the PDF document.
    landscape : bool, default False
        Rotate the page to landscape orientation.
    margin_top, margin_right, margin_bottom, margin_left : float, default 72.0
        Margins in points (72 points = 1 inch).
    font_name : str, default "Helvetica"
        Default font for body text.
    font_size : int, default 11
        Default font size in points for body text.
    code_font : str, default "Courier"
        Monospace font for code blocks and inline code.
    line_spacing : float, default 1.2
        Line spacing multiplier.
    header_text : str or None
        Text drawn at the top of every page.
    footer_text : str or None
        Text drawn at the bottom of every page.
    display_header_footer : bool, default True
        Draw the header and footer when they are configured.
    title : str or None
        Title placed in the PDF metadata and substituted for ``{title}``.

    """

    page_format: PageFormat = field(
        default=DEFAULT_PDF_PAGE_FORMAT,
        metadata={"help": "Page size", "choices": ["a3", "a4", "a5", "letter", "legal", "tabloid"]},
    )
    landscape: bool = False
    margin_top: float = DEFAULT_PDF_MARGIN
    margin_right: float = DEFAULT_PDF_MARGIN
    margin_bottom: float = DEFAULT_PDF_MARGIN
    margin_left: float = DEFAULT_PDF_MARGIN
    font_name: str = field(default=DEFAULT_PDF_FONT_FAMILY, metadata={"help": "Body font"})
    font_size: int = field(default=DEFAULT_PDF_FONT_SIZE, metadata={"help": "Body font size", "type": int})
    code_font: str = DEFAULT_PDF_CODE_FONT
    line_spacing: float = DEFAULT_PDF_LINE_SPACING
    header_text: str | None = None
    footer_text: str | None = None
    display_header_footer: bool = True
    title: str | None = None
