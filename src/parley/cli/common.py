"""
Helpers shared by the CLI commands.
"""

from pathlib import Path
from typing import Optional

import typer

from parley.cli.output import print_error
from parley.store import FileDocumentStore
from parley.user_config import get_user_config


def open_store(notes_dir: Optional[Path] = None) -> FileDocumentStore:
    """
    Build the document store for a command.

    The --notes-dir option wins over `notes.directory` from config.
    Exits with code 1 when the directory does not exist.
    """
    directory = Path(notes_dir).expanduser() if notes_dir else get_user_config().notes_dir
    if not directory.is_dir():
        print_error(
            f"Notes directory not found: {directory}",
            code="NOTES_DIR_NOT_FOUND",
            input_value=str(directory),
            suggest=["--notes-dir <path>", "set notes.directory in .parley/config.json"],
        )
        raise typer.Exit(code=1)
    return FileDocumentStore(directory)
