#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/page_options.py
"""Page layout options for the generated PDF.

The page options file is a YAML mapping placed beside the README::

    format: A4
    margin: 20mm 20mm
    headerTemplate: |-
      <div class="header">My Document <span class="date"></span></div>
    footerTemplate: |-
      <div class="footer">Page <span class="pageNumber"></span> of <span class="totalPages"></span></div>

Header and footer templates are HTML; ``<style>`` blocks and tags are
removed and the ``pageNumber``, ``totalPages``, ``date`` and ``title``
spans become ``{page}``, ``{pages}``, ``{date}`` and ``{title}``
placeholders filled in by the PDF renderer.
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from docweave.constants import LENGTH_UNITS
from docweave.exceptions import FileAccessError, ValidationError
from docweave.options import PdfOptions

logger = logging.getLogger(__name__)

_FORMATS = {"a3", "a4", "a5", "letter", "legal", "tabloid"}
_LENGTH_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([a-z]*)\s*$", re.IGNORECASE)
_STYLE_BLOCK_RE = re.compile(r"<style\b.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_SPAN_PLACEHOLDERS = {
    "pageNumber": "{page}",
    "totalPages": "{pages}",
    "date": "{date}",
    "title": "{title}",
}
_IGNORED_KEYS = {"printBackground", "print_background", "preferCSSPageSize"}


def load_page_options(path: str | Path) -> Optional[Dict[str, Any]]:
    """Load the page options mapping.

    Parameters
    ----------
    path : str or Path
        Location of the YAML page options file.

    Returns
    -------
    dict or None
        The options mapping, or None when the file does not exist or is empty.

    Raises
    ------
    ValidationError
        If the file is not valid YAML or does not hold a mapping.
    FileAccessError
        If the file exists but cannot be read.

    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), original_error=e) from e

    if not content.strip():
        return None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in page options {path}: {e}", original_error=e) from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValidationError(f"Page options {path} must contain a mapping, got {type(data).__name__}")
    return data


def parse_length(value: Any) -> float:
    """Convert a CSS-style length to points.

    Bare numbers are points. Supported units: pt, px, in, cm, mm.

    Examples
    --------
    >>> parse_length("1in")
    72.0
    >>> parse_length(36)
    36.0

    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _LENGTH_RE.match(str(value))
    if not match:
        raise ValidationError(f"Invalid length: {value!r}", parameter_name="margin", parameter_value=value)
    number, unit = match.groups()
    unit = unit.lower() or "pt"
    if unit not in LENGTH_UNITS:
        raise ValidationError(f"Unsupported length unit: {unit!r}", parameter_name="margin", parameter_value=value)
    return float(number) * LENGTH_UNITS[unit]


def parse_margin(value: Any) -> tuple[float, float, float, float]:
    """Parse a margin into (top, right, bottom, left) points.

    Accepts CSS shorthand with one to four lengths or a mapping with
    ``top``, ``right``, ``bottom`` and ``left`` keys.

    """
    if isinstance(value, dict):
        unknown = set(value) - {"top", "right", "bottom", "left"}
        if unknown:
            raise ValidationError(f"Unknown margin keys: {sorted(unknown)}", parameter_name="margin")
        return tuple(parse_length(value.get(side, 0)) for side in ("top", "right", "bottom", "left"))  # type: ignore[return-value]

    parts = [parse_length(part) for part in str(value).split()]
    if len(parts) == 1:
        top = right = bottom = left = parts[0]
    elif len(parts) == 2:
        top = bottom = parts[0]
        right = left = parts[1]
    elif len(parts) == 3:
        top, right, bottom = parts
        left = right
    elif len(parts) == 4:
        top, right, bottom, left = parts
    else:
        raise ValidationError(f"Margin needs 1 to 4 lengths, got {value!r}", parameter_name="margin")
    return top, right, bottom, left


def template_to_text(template: str) -> str:
    """Reduce an HTML header/footer template to a placeholder string."""
    text = _STYLE_BLOCK_RE.sub("", template)
    for css_class, placeholder in _SPAN_PLACEHOLDERS.items():
        text = re.sub(
            rf'<span[^>]*class="[^"]*\b{css_class}\b[^"]*"[^>]*>\s*</span>',
            placeholder,
            text,
        )
    text = _TAG_RE.sub(" ", text)
    return " ".join(html.unescape(text).split())


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError(f"Page option {key} must be true or false", parameter_name=key, parameter_value=value)


def page_options_to_pdf_options(data: Dict[str, Any], base: PdfOptions | None = None) -> PdfOptions:
    """Apply a page options mapping on top of ``base``.

    Parameters
    ----------
    data : dict
        Mapping loaded from the page options file.
    base : PdfOptions, optional
        Options to start from (defaults plus config file values).

    Returns
    -------
    PdfOptions
        Updated options.

    Raises
    ------
    ValidationError
        If a recognized key has an invalid value.

    """
    base = base or PdfOptions()
    updates: Dict[str, Any] = {}

    for key, value in data.items():
        if key == "format":
            page_format = str(value).lower()
            if page_format not in _FORMATS:
                raise ValidationError(f"Unsupported page format: {value}", parameter_name="format", parameter_value=value)
            updates["page_format"] = page_format
        elif key == "landscape":
            updates["landscape"] = _as_bool(key, value)
        elif key == "margin":
            top, right, bottom, left = parse_margin(value)
            updates.update(margin_top=top, margin_right=right, margin_bottom=bottom, margin_left=left)
        elif key == "headerTemplate":
            updates["header_text"] = template_to_text(str(value)) or None
        elif key == "footerTemplate":
            updates["footer_text"] = template_to_text(str(value)) or None
        elif key == "displayHeaderFooter":
            updates["display_header_footer"] = _as_bool(key, value)
        elif key == "title":
            updates["title"] = str(value)
        elif key in _IGNORED_KEYS:
            logger.debug("Page option %s has no effect on PDF output", key)
        else:
            logger.debug("Ignoring unknown page option %s", key)

    return base.create_updated(**updates)
