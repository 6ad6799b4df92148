"""Pytest configuration and shared fixtures for the docweave test suite."""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=40, deadline=None)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Undo handler and level changes made by ``configure_logging``."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    library_levels = {name: logging.getLogger(name).level for name in ("PIL", "reportlab", "mistune")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, library_level in library_levels.items():
        logging.getLogger(name).setLevel(library_level)


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> Path:
    """Remove DOCWEAVE_* variables and point HOME at an empty directory."""
    for key in list(os.environ):
        if key.startswith("DOCWEAVE_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def project(tmp_path, monkeypatch, clean_env) -> Path:
    """Create a small project with documented sources and chdir into it."""
    root = tmp_path / "project"
    src = root / "src"
    src.mkdir(parents=True)
    (src / "app.py").write_text(
        "##** # Demo\n"
        "##**\n"
        "##** Demo does things.\n"
        "import os\n"
        "##** ## Usage\n"
        "##** Run it.\n",
        encoding="utf-8",
    )
    (src / "util.js").write_text("//** ## Helpers\nconst x = 1;\n", encoding="utf-8")
    monkeypatch.chdir(root)
    return root
