"""
Pytest configuration for the Parley test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Notes directories on tmp_path with a helper to write documents
- Isolation of the global path and config singletons
"""

import os
from datetime import date
from pathlib import Path

import pytest

from parley.cli.config import CLIConfig
from parley.logging_config import setup_logging
from parley.paths import reset_paths
from parley.store import FileDocumentStore
from parley.user_config import reset_user_config

TODAY = date(2026, 10, 18)


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("PARLEY_MACHINE_MODE", "1")


# ============================================================================
# LOGGING / ISOLATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


@pytest.fixture(autouse=True)
def isolate_globals(monkeypatch, tmp_path):
    """Reset path/config singletons and keep the user's global config out of tests."""
    monkeypatch.setattr("parley.paths.ParleyPaths.GLOBAL_DIR", tmp_path / "home" / ".parley")
    monkeypatch.delenv("PARLEY_HUMAN_MODE", raising=False)
    reset_paths()
    reset_user_config()
    CLIConfig.set_machine_mode(None)
    yield
    reset_paths()
    reset_user_config()
    CLIConfig.set_machine_mode(None)


# ============================================================================
# NOTES FIXTURES
# ============================================================================

def note_text(body: str, title: str = "note", done: str = "false") -> str:
    """A document with a metadata header followed by `body`."""
    return (
        "---\n"
        f"title: {title}\n"
        "date-created: 2026-10-01\n"
        "tags: [todo]\n"
        "date-due:\n"
        f"done: {done}\n"
        "---\n"
        f"{body}"
    )


@pytest.fixture
def notes_dir(tmp_path):
    """Empty notes directory."""
    directory = tmp_path / "notes"
    directory.mkdir()
    return directory


@pytest.fixture
def write_note(notes_dir):
    """
    Write a document into the notes directory.

    Usage:
        def test_something(write_note):
            path = write_note("a.md", "- [ ] Fix bug to-talk-alice\\n")
    """
    def _write(name: str, body: str, title: str = None, done: str = "false", raw: bool = False) -> Path:
        path = notes_dir / name
        text = body if raw else note_text(body, title or Path(name).stem, done)
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def store(notes_dir):
    """FileDocumentStore over the notes directory with a fixed date."""
    return FileDocumentStore(notes_dir, today=TODAY)
