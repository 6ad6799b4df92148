"""Unit tests for opening the rendered PDF."""

import webbrowser
from unittest.mock import patch

import pytest

from docweave.opener import open_artifact


@pytest.mark.unit
class TestOpenArtifact:
    """Tests for open_artifact."""

    def test_missing_file(self, tmp_path):
        with patch("docweave.opener.webbrowser.open") as mock_open:
            assert open_artifact(tmp_path / "missing.pdf") is False
        mock_open.assert_not_called()

    def test_opens_file_uri(self, tmp_path):
        target = tmp_path / "README.pdf"
        target.write_bytes(b"%PDF-1.4")
        with patch("docweave.opener.webbrowser.open", return_value=True) as mock_open:
            assert open_artifact(target) is True
        mock_open.assert_called_once_with(target.resolve().as_uri())

    def test_no_browser_available(self, tmp_path):
        target = tmp_path / "README.pdf"
        target.write_bytes(b"%PDF-1.4")
        with patch("docweave.opener.webbrowser.open", return_value=False):
            assert open_artifact(target) is False

    def test_browser_error(self, tmp_path):
        target = tmp_path / "README.pdf"
        target.write_bytes(b"%PDF-1.4")
        with patch("docweave.opener.webbrowser.open", side_effect=webbrowser.Error("boom")):
            assert open_artifact(target) is False
