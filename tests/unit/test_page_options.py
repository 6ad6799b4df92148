"""Unit tests for the YAML page options file."""

import logging

import pytest

from docweave.exceptions import ValidationError
from docweave.options import PdfOptions
from docweave.page_options import (
    load_page_options,
    page_options_to_pdf_options,
    parse_length,
    parse_margin,
    template_to_text,
)


@pytest.mark.unit
class TestLoadPageOptions:
    """Tests for load_page_options."""

    def test_missing_file(self, tmp_path):
        assert load_page_options(tmp_path / "page.docweave") is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "page.docweave"
        path.write_text("\n", encoding="utf-8")
        assert load_page_options(path) is None

    def test_mapping(self, tmp_path):
        path = tmp_path / "page.docweave"
        path.write_text("format: A4\nmargin: 20mm\nprintBackground: true\n", encoding="utf-8")
        assert load_page_options(path) == {"format": "A4", "margin": "20mm", "printBackground": True}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "page.docweave"
        path.write_text("format: [A4\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_page_options(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "page.docweave"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_page_options(path)


@pytest.mark.unit
class TestLengths:
    """Tests for parse_length and parse_margin."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (36, 36.0),
            (1.5, 1.5),
            ("10", 10.0),
            ("10pt", 10.0),
            ("1in", 72.0),
            ("2.54cm", 72.0),
            ("25.4mm", 72.0),
            ("96px", 72.0),
        ],
    )
    def test_parse_length(self, value, expected):
        assert parse_length(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["ten", "10em", "", True])
    def test_invalid_length(self, value):
        with pytest.raises(ValidationError):
            parse_length(value)

    def test_margin_one_value(self):
        assert parse_margin("1in") == (72.0, 72.0, 72.0, 72.0)

    def test_margin_two_values(self):
        assert parse_margin("10 20") == (10.0, 20.0, 10.0, 20.0)

    def test_margin_three_values(self):
        assert parse_margin("10 20 30") == (10.0, 20.0, 30.0, 20.0)

    def test_margin_four_values(self):
        assert parse_margin("1 2 3 4") == (1.0, 2.0, 3.0, 4.0)

    def test_margin_mapping(self):
        assert parse_margin({"top": "1in", "left": 10}) == (72.0, 0.0, 0.0, 10.0)

    def test_margin_unknown_side(self):
        with pytest.raises(ValidationError):
            parse_margin({"middle": 1})

    def test_margin_too_many_values(self):
        with pytest.raises(ValidationError):
            parse_margin("1 2 3 4 5")


@pytest.mark.unit
class TestTemplates:
    """Tests for template_to_text."""

    def test_page_numbers(self):
        template = (
            "<style>.footer { font-size: 8px; }</style>"
            '<div class="footer">Page <span class="pageNumber"></span> of <span class="totalPages"></span></div>'
        )
        assert template_to_text(template) == "Page {page} of {pages}"

    def test_date_title_and_entities(self):
        template = '<div><span class="title"></span> &amp; <span class="date"></span></div>'
        assert template_to_text(template) == "{title} & {date}"

    def test_plain_text(self):
        assert template_to_text("  My   header ") == "My header"


@pytest.mark.unit
class TestPageOptionsToPdfOptions:
    """Tests for page_options_to_pdf_options."""

    def test_applies_known_keys(self):
        options = page_options_to_pdf_options(
            {
                "format": "Letter",
                "landscape": True,
                "margin": "1in 0.5in",
                "headerTemplate": "<div>Header</div>",
                "footerTemplate": '<span class="pageNumber"></span>',
                "displayHeaderFooter": False,
            }
        )
        assert options.page_format == "letter"
        assert options.landscape is True
        assert (options.margin_top, options.margin_right) == (72.0, 36.0)
        assert options.header_text == "Header"
        assert options.footer_text == "{page}"
        assert options.display_header_footer is False

    def test_keeps_base_values(self):
        base = PdfOptions(font_name="Times-Roman", title="Manual")
        options = page_options_to_pdf_options({"format": "a5"}, base=base)
        assert options.font_name == "Times-Roman"
        assert options.title == "Manual"
        assert options.page_format == "a5"

    def test_ignored_and_unknown_keys(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="docweave.page_options"):
            options = page_options_to_pdf_options({"printBackground": True, "scale": 2})
        assert options == PdfOptions()
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "printBackground" in messages
        assert "scale" in messages

    def test_unsupported_format(self):
        with pytest.raises(ValidationError):
            page_options_to_pdf_options({"format": "B5"})

    def test_non_boolean_flag(self):
        with pytest.raises(ValidationError):
            page_options_to_pdf_options({"landscape": "yes"})

    def test_empty_template_clears_text(self):
        options = page_options_to_pdf_options({"headerTemplate": "<div></div>"}, base=PdfOptions(header_text="x"))
        assert options.header_text is None
