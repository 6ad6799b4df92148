#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/renderers/pdf.py
"""PDF rendering of the README.

This module provides the PdfRenderer class which parses Markdown with
mistune and lays it out with ReportLab's Platypus framework. The
renderer covers the Markdown a generated README typically holds:
headings, paragraphs with inline styling, code blocks, lists, block
quotes, rules and local images. Raw HTML blocks are handled narrowly:
``<div class="page-break" />`` starts a new page, ``<img src=...>`` is
drawn as an image, comments and styles are dropped, and any other HTML
block is rendered as its plain text.

"""

from __future__ import annotations

import datetime
import io
import logging
import re
from html import unescape
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Callable, Union
from urllib.parse import unquote, urlparse

if TYPE_CHECKING:
    from reportlab.lib.styles import StyleSheet1
    from reportlab.platypus import Flowable

from docweave.constants import DEFAULT_PDF_HEADER_FONT_SIZE, DEPS_PDF_RENDER
from docweave.exceptions import OutputWriteError, RenderingError
from docweave.options import PdfOptions
from docweave.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_PAGE_BREAK_RE = re.compile(r"<div[^>]*class=[\"'][^\"']*\bpage-break\b", re.IGNORECASE)
_IMG_SRC_RE = re.compile(r"<img\b[^>]*\bsrc=[\"']([^\"']+)[\"']", re.IGNORECASE)
_DROP_HTML_RE = re.compile(r"^\s*(<!--|<style\b|<script\b)", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class PdfRenderer:
    """Render Markdown text to a PDF file.

    Parameters
    ----------
    options : PdfOptions or None, default None
        Page layout and font options.
    base_dir : str, Path or None, default None
        Directory that relative image paths are resolved against.

    Examples
    --------
        >>> renderer = PdfRenderer(PdfOptions(page_format="letter"))
        >>> renderer.render("# Title\\n\\nBody", "README.pdf")

    """

    def __init__(self, options: PdfOptions | None = None, base_dir: str | Path | None = None):
        """Initialize the PDF renderer with options."""
        self.options = options or PdfOptions()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self._styles: Any = None
        self._flowables: list[Flowable] = []
        self._frame_width = 0.0
        self._frame_height = 0.0

    def render(self, markdown_text: str, output: Union[str, Path, IO[bytes]]) -> None:
        """Render Markdown to a PDF.

        Parameters
        ----------
        markdown_text : str
            README content.
        output : str, Path, or IO[bytes]
            Output destination (file path or file-like object).

        Raises
        ------
        RenderingError
            If PDF generation fails.
        OutputWriteError
            If the PDF cannot be written to ``output``.

        """
        data = self.render_to_bytes(markdown_text)
        if not isinstance(output, (str, Path)):
            output.write(data)
            return
        try:
            Path(output).write_bytes(data)
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e
        logger.debug(f"Wrote {len(data)} bytes of PDF to {output}")

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render_to_bytes(self, markdown_text: str) -> bytes:
        """Render Markdown and return the PDF bytes.

        Raises
        ------
        RenderingError
            If PDF generation fails.

        """
        import mistune
        from reportlab.platypus import SimpleDocTemplate

        try:
            markdown = mistune.create_markdown(renderer=None, plugins=["strikethrough"])
            tokens, _state = markdown.parse(markdown_text)
            if not isinstance(tokens, list):
                tokens = []

            page_size = self._get_page_size()
            self._frame_width = page_size[0] - self.options.margin_left - self.options.margin_right
            self._frame_height = page_size[1] - self.options.margin_top - self.options.margin_bottom
            self._styles = self._create_styles()

            doc_kwargs: dict[str, Any] = {
                "pagesize": page_size,
                "rightMargin": self.options.margin_right,
                "leftMargin": self.options.margin_left,
                "topMargin": self.options.margin_top,
                "bottomMargin": self.options.margin_bottom,
                "creator": "docweave",
            }
            if self.options.title:
                doc_kwargs["title"] = self.options.title

            total_pages = 0
            if self._needs_page_count():
                counting_doc = SimpleDocTemplate(io.BytesIO(), **doc_kwargs)
                counting_doc.build(self._build_story(tokens))
                total_pages = counting_doc.page

            decorate = self._page_decorator(total_pages)
            buffer = io.BytesIO()
            pdf_doc = SimpleDocTemplate(buffer, **doc_kwargs)
            pdf_doc.build(self._build_story(tokens), onFirstPage=decorate, onLaterPages=decorate)
        except RenderingError:
            raise
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="rendering", original_error=e) from e
        return buffer.getvalue()

    def _get_page_size(self) -> tuple[float, float]:
        from reportlab.lib import pagesizes

        size_map = {
            "a3": pagesizes.A3,
            "a4": pagesizes.A4,
            "a5": pagesizes.A5,
            "letter": pagesizes.LETTER,
            "legal": pagesizes.LEGAL,
            "tabloid": pagesizes.ELEVENSEVENTEEN,
        }
        size = size_map.get(self.options.page_format, pagesizes.A4)
        return pagesizes.landscape(size) if self.options.landscape else pagesizes.portrait(size)

    def _create_styles(self) -> StyleSheet1:
        from reportlab.lib import colors
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet

        styles = getSampleStyleSheet()
        styles["Normal"].fontName = self.options.font_name
        styles["Normal"].fontSize = self.options.font_size
        styles["Normal"].leading = self.options.font_size * self.options.line_spacing

        bold_font = {
            "Times-Roman": "Times-Bold",
            "Helvetica": "Helvetica-Bold",
            "Courier": "Courier-Bold",
        }.get(self.options.font_name, self.options.font_name)

        for level in range(1, 7):
            font_size = self.options.font_size + (7 - level) * 2
            style_name = f"Heading{level}"
            if style_name in styles:
                style = styles[style_name]
                style.fontName = bold_font
                style.fontSize = font_size
                style.leading = font_size * 1.2
                style.spaceBefore = 12
                style.spaceAfter = 8
            else:
                styles.add(
                    ParagraphStyle(
                        name=style_name,
                        parent=styles["Normal"],
                        fontName=bold_font,
                        fontSize=font_size,
                        leading=font_size * 1.2,
                        spaceBefore=12,
                        spaceAfter=8,
                    )
                )

        styles.add(
            ParagraphStyle(
                name="DocweaveCode",
                parent=styles["Normal"],
                fontName=self.options.code_font,
                fontSize=self.options.font_size - 1,
                leading=(self.options.font_size - 1) * self.options.line_spacing,
                backColor=colors.HexColor("#F5F5F5"),
                leftIndent=10,
                rightIndent=10,
                spaceBefore=6,
                spaceAfter=6,
            )
        )
        styles.add(
            ParagraphStyle(
                name="DocweaveQuote",
                parent=styles["Normal"],
                leftIndent=20,
                textColor=colors.HexColor("#666666"),
            )
        )
        return styles

    def _build_story(self, tokens: list[dict[str, Any]]) -> list[Flowable]:
        self._flowables = []
        for token in tokens:
            self._flowables.extend(self._render_block(token))
        return self._flowables

    def _render_blocks(self, tokens: list[dict[str, Any]], style_name: str = "Normal") -> list[Flowable]:
        flowables: list[Flowable] = []
        for token in tokens:
            flowables.extend(self._render_block(token, style_name))
        return flowables

    def _render_block(self, token: dict[str, Any], style_name: str = "Normal") -> list[Flowable]:
        from reportlab.lib import colors
        from reportlab.platypus import HRFlowable, PageBreak, Paragraph, Preformatted, Spacer

        token_type = token.get("type", "")
        children = token.get("children", []) or []
        attrs = token.get("attrs", {}) or {}

        if token_type == "heading":
            level = min(6, max(1, int(attrs.get("level", 1))))
            return [Paragraph(self._render_inline(children), self._styles[f"Heading{level}"])]

        if token_type in ("paragraph", "block_text"):
            images = self._standalone_images(children)
            if images is not None:
                return [flowable for url in images for flowable in self._image_flowables(url)]
            flowables: list[Flowable] = [Paragraph(self._render_inline(children), self._styles[style_name])]
            if token_type == "paragraph":
                flowables.append(Spacer(1, 6))
            return flowables

        if token_type == "block_code":
            return [Preformatted(token.get("raw", "").rstrip("\n"), self._styles["DocweaveCode"])]

        if token_type == "block_quote":
            return self._render_blocks(children, "DocweaveQuote")

        if token_type == "list":
            return [self._render_list(token, style_name)]

        if token_type == "thematic_break":
            return [HRFlowable(width="100%", color=colors.grey, spaceBefore=6, spaceAfter=6)]

        if token_type == "block_html":
            raw = token.get("raw", "")
            if _PAGE_BREAK_RE.search(raw):
                return [PageBreak()]
            img = _IMG_SRC_RE.search(raw)
            if img:
                return self._image_flowables(img.group(1))
            if _DROP_HTML_RE.match(raw):
                return []
            text = " ".join(unescape(_TAG_RE.sub(" ", raw)).split())
            return [Paragraph(_escape(text), self._styles[style_name])] if text else []

        return []

    def _render_list(self, token: dict[str, Any], style_name: str) -> Flowable:
        from reportlab.platypus import ListFlowable, ListItem

        attrs = token.get("attrs", {}) or {}
        ordered = bool(attrs.get("ordered", False))
        items = []
        for item in token.get("children", []) or []:
            content = self._render_blocks(item.get("children", []) or [], style_name)
            if content:
                items.append(ListItem(content))
        kwargs: dict[str, Any] = {"bulletType": "1" if ordered else "bullet", "leftIndent": 18}
        if ordered:
            kwargs["start"] = attrs.get("start", 1)
        return ListFlowable(items, **kwargs)

    def _render_inline(self, tokens: list[dict[str, Any]]) -> str:
        parts = []
        for token in tokens:
            token_type = token.get("type", "")
            children = token.get("children", []) or []
            if token_type == "text":
                parts.append(_escape(token.get("raw", "")))
            elif token_type == "strong":
                parts.append(f"<b>{self._render_inline(children)}</b>")
            elif token_type == "emphasis":
                parts.append(f"<i>{self._render_inline(children)}</i>")
            elif token_type == "strikethrough":
                parts.append(f"<strike>{self._render_inline(children)}</strike>")
            elif token_type == "codespan":
                parts.append(f'<font name="{self.options.code_font}">{_escape(token.get("raw", ""))}</font>')
            elif token_type == "link":
                url = _escape((token.get("attrs", {}) or {}).get("url", ""))
                parts.append(f'<link href="{url}" color="blue">{self._render_inline(children)}</link>')
            elif token_type == "image":
                parts.append(self._render_inline(children))
            elif token_type == "softbreak":
                parts.append(" ")
            elif token_type == "linebreak":
                parts.append("<br/>")
        return "".join(parts)

    def _standalone_images(self, tokens: list[dict[str, Any]]) -> list[str] | None:
        urls = []
        for token in tokens:
            token_type = token.get("type")
            if token_type == "image":
                urls.append((token.get("attrs", {}) or {}).get("url", ""))
            elif token_type in ("softbreak", "linebreak"):
                continue
            elif token_type == "text" and not token.get("raw", "").strip():
                continue
            else:
                return None
        return urls or None

    def _resolve_image(self, url: str) -> Path | None:
        parsed = urlparse(url)
        if parsed.scheme in ("http", "https", "data"):
            logger.debug("Skipping non-local image %s", url[:80])
            return None
        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(unquote(url))
        if not path.is_absolute():
            path = self.base_dir / path
        if not path.is_file():
            logger.warning("Image not found: %s", path)
            return None
        return path

    def _image_flowables(self, url: str) -> list[Flowable]:
        from reportlab.lib.utils import ImageReader
        from reportlab.platypus import Image, Spacer

        path = self._resolve_image(url)
        if path is None:
            return []
        width, height = ImageReader(str(path)).getSize()
        scale = min(1.0, self._frame_width / width, (self._frame_height * 0.9) / height)
        return [Image(str(path), width=width * scale, height=height * scale), Spacer(1, 6)]

    def _needs_page_count(self) -> bool:
        texts = (self.options.header_text or "", self.options.footer_text or "")
        return self.options.display_header_footer and any("{pages}" in text for text in texts)

    def _page_decorator(self, total_pages: int) -> Callable[[Any, Any], None]:
        options = self.options
        today = datetime.date.today().isoformat()

        def decorate(canvas: Any, doc: Any) -> None:
            if not options.display_header_footer:
                return
            values = {"page": doc.page, "pages": total_pages, "date": today, "title": options.title or ""}
            width, height = doc.pagesize
            canvas.saveState()
            canvas.setFont(options.font_name, DEFAULT_PDF_HEADER_FONT_SIZE)
            if options.header_text:
                canvas.drawString(options.margin_left, height - options.margin_top / 2, _fill(options.header_text, values))
            if options.footer_text:
                canvas.drawCentredString(width / 2, options.margin_bottom / 2, _fill(options.footer_text, values))
            canvas.restoreState()

        return decorate


def _fill(template: str, values: dict[str, Any]) -> str:
    text = template
    for key, value in values.items():
        text = text.replace("{" + key + "}", str(value))
    return text


def render_markdown_to_pdf(
    markdown_text: str,
    output: Union[str, Path, IO[bytes]],
    options: PdfOptions | None = None,
    base_dir: str | Path | None = None,
) -> None:
    """Render Markdown text to a PDF file or stream.

    Parameters
    ----------
    markdown_text : str
        README content.
    output : str, Path, or IO[bytes]
        Destination of the PDF.
    options : PdfOptions, optional
        Page layout and fonts.
    base_dir : str or Path, optional
        Directory for resolving relative image paths.

    """
    PdfRenderer(options, base_dir=base_dir).render(markdown_text, output)
