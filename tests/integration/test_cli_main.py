"""End-to-end tests of the docweave command line."""

from unittest.mock import patch

import pytest

from docweave.cli import get_about_info, main
from docweave.cli.builder import EXIT_FILE_ERROR, EXIT_SEARCH_LIMIT, EXIT_SUCCESS, EXIT_VALIDATION_ERROR

BASE_ARGS = ["--src", "src", "--no-pdf", "--no-open", "--color", "never"]

EXPECTED_FIRST = "# Demo\n\nDemo does things.\n## Usage\nRun it.\n## Helpers"


@pytest.mark.integration
@pytest.mark.cli
class TestMainFlow:
    """Full runs of main() against a temporary project."""

    def test_first_generation(self, project, capsys):
        assert main(BASE_ARGS) == EXIT_SUCCESS
        assert (project / "README.md").read_text(encoding="utf-8") == EXPECTED_FIRST
        out = capsys.readouterr().out
        assert "Created README.md" in out
        assert "# Demo" in out

    def test_regeneration_preserves_images_and_order(self, project, capsys):
        readme = project / "README.md"
        readme.write_text(
            "## Helpers\n\n![diagram](diagram.png)\n# Demo\n\nDemo does things.\n## Usage\nRun it.\n",
            encoding="utf-8",
        )
        assert main(BASE_ARGS) == EXIT_SUCCESS
        assert readme.read_text(encoding="utf-8") == (
            "## Helpers\n\n![diagram](diagram.png)\n# Demo\n\nDemo does things.\n## Usage\nRun it."
        )
        assert "is up to date" in capsys.readouterr().out

    def test_changed_source_updates_readme(self, project, capsys):
        main(BASE_ARGS)
        (project / "src" / "app.py").write_text(
            "##** # Demo\n##**\n##** Demo does more things.\nimport os\n##** ## Usage\n##** Run it.\n",
            encoding="utf-8",
        )
        capsys.readouterr()
        assert main(BASE_ARGS) == EXIT_SUCCESS
        text = (project / "README.md").read_text(encoding="utf-8")
        assert "Demo does more things." in text
        assert "Demo does things." not in text
        out = capsys.readouterr().out
        assert "xxx Demo does things. xxx" in out
        assert "Updated README.md" in out

    def test_dry_run_writes_nothing(self, project, capsys):
        assert main(BASE_ARGS + ["--dry-run"]) == EXIT_SUCCESS
        assert not (project / "README.md").exists()
        assert "Demo does things." in capsys.readouterr().out

    def test_extension_filter(self, project):
        assert main(BASE_ARGS + ["-e", "js"]) == EXIT_SUCCESS
        assert (project / "README.md").read_text(encoding="utf-8") == "## Helpers"

    def test_no_blocks(self, project, capsys):
        assert main(BASE_ARGS + ["-e", "rb"]) == EXIT_SUCCESS
        err = capsys.readouterr().err
        assert "No documentation comments found" in err
        assert not (project / "README.md").exists()

    def test_ignore_src_without_readme(self, project, capsys):
        assert main(BASE_ARGS + ["--ignore-src"]) == EXIT_FILE_ERROR
        assert "Nothing to render" in capsys.readouterr().err

    def test_max_blocks(self, project, capsys):
        (project / "README.md").write_text("# Demo", encoding="utf-8")
        assert main(BASE_ARGS + ["--max-blocks", "1"]) == EXIT_SEARCH_LIMIT
        assert "raise --max-blocks" in capsys.readouterr().err

    def test_missing_source(self, project):
        assert main(["--src", "nowhere", "--no-pdf", "--no-open"]) == EXIT_FILE_ERROR

    def test_config_file(self, project):
        (project / ".docweave.toml").write_text(
            'src = "src"\nreadme = "docs/README.md"\nno_pdf = true\nno_open = true\next = ["py"]\n',
            encoding="utf-8",
        )
        (project / "docs").mkdir()
        assert main(["--color", "never"]) == EXIT_SUCCESS
        text = (project / "docs" / "README.md").read_text(encoding="utf-8")
        assert text.startswith("# Demo")
        assert "## Helpers" not in text

    def test_invalid_config_file(self, project, capsys):
        bad = project / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        assert main(["--config", str(bad)]) == EXIT_VALIDATION_ERROR
        assert "Invalid JSON" in capsys.readouterr().err

    def test_environment_defaults(self, project, monkeypatch):
        monkeypatch.setenv("DOCWEAVE_README", "ENV.md")
        assert main(BASE_ARGS) == EXIT_SUCCESS
        assert (project / "ENV.md").exists()

    def test_about(self, project, capsys):
        assert main(["--about"]) == EXIT_SUCCESS
        assert "docweave" in capsys.readouterr().out
        assert "reportlab" in get_about_info()


@pytest.mark.integration
@pytest.mark.cli
class TestMainRendering:
    """Runs that render the README to PDF."""

    @pytest.fixture(autouse=True)
    def _require_pdf_stack(self):
        pytest.importorskip("reportlab")
        pytest.importorskip("mistune")

    def test_renders_and_opens(self, project):
        with patch("docweave.cli.processors.open_artifact") as mock_open:
            assert main(["--src", "src", "--color", "never"]) == EXIT_SUCCESS
        pdf = project / "README.pdf"
        assert pdf.read_bytes().startswith(b"%PDF")
        assert mock_open.call_count == 1
        assert mock_open.call_args[0][0].resolve() == pdf.resolve()

    def test_custom_pdf_path_and_page_options(self, project):
        (project / "page.docweave").write_text(
            "format: Letter\nmargin: 15mm\nfooterTemplate: '<span class=\"pageNumber\"></span>'\n",
            encoding="utf-8",
        )
        (project / ".docweave.yaml").write_text("pdf:\n  font_size: 10\n", encoding="utf-8")
        assert main(["--src", "src", "--pdf", "build/manual.pdf", "--no-open"]) == EXIT_SUCCESS
        assert (project / "build" / "manual.pdf").read_bytes().startswith(b"%PDF")

    def test_ignore_src_renders_existing(self, project):
        (project / "README.md").write_text("# Hand written", encoding="utf-8")
        assert main(["--ignore-src", "--no-open"]) == EXIT_SUCCESS
        assert (project / "README.pdf").exists()

    def test_missing_page_options_file(self, project):
        code = main(["--src", "src", "--no-open", "--page-options", "missing.yaml"])
        assert code == EXIT_FILE_ERROR
