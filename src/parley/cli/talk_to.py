"""
CLI Talk-To Command

Interactive workflow for moving to-talk items into a note.

Uses standard input() only, one line per step:
  (empty)  enter
  esc      escape
  up/down  arrows
  space    space
  bs       backspace
  text     each character is pressed in turn
"""

import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

import typer

from parley.cli.common import open_store
from parley.cli.config import CLIConfig
from parley.cli.output import echo, get_console, print_error
from parley.cli.render import render_state
from parley.exceptions import DocumentStoreError
from parley.logging_config import logger
from parley.session import (
    Action,
    HandleResult,
    PersonSelection,
    RelocationSession,
    Signal,
    parse_key,
)
from parley.session.keymap import BACKSPACE, DOWN, ENTER, ESC, SPACE, UP
from parley.user_config import get_user_config

console = get_console()

NAMED_KEYS = {
    "": ENTER,
    "enter": ENTER,
    "esc": ESC,
    "up": UP,
    "down": DOWN,
    "space": SPACE,
    "bs": BACKSPACE,
    "backspace": BACKSPACE,
}


def keys_for_line(line: str) -> List[str]:
    """Split one input line into key tokens."""
    token = line.strip()
    if token.lower() in NAMED_KEYS:
        return [NAMED_KEYS[token.lower()]]
    return list(token)


def open_in_editor(path: Path, editor_cmd: str) -> str:
    """
    Open a note in the configured editor and wait for it to exit.

    Returns:
        Status message for the workflow screen
    """
    command = shlex.split(editor_cmd) + [str(path)]
    logger.debug(f"Launching editor: {command}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError as e:
        return f"Editor exited with error: {e.returncode}"
    except FileNotFoundError:
        return f"Editor not found: {editor_cmd}"
    return f"Opened {path.name}"


class TalkToRunner:
    """
    Reads keys, feeds the session and renders each resulting state.
    """

    def __init__(
        self,
        session: RelocationSession,
        read_line: Callable[[str], str] = input,
        editor_cmd: Optional[str] = None,
    ):
        self.session = session
        self.read_line = read_line
        self.editor_cmd = editor_cmd or get_user_config().editor_command
        self.message = ""

    def render(self) -> None:
        console.print("")
        for line in render_state(self.session.state, self.message):
            console.print(line)

    def _prompt_title(self) -> HandleResult:
        try:
            title = self.read_line("New note title: ").strip()
        except (EOFError, KeyboardInterrupt):
            return HandleResult(message="Cancelled")
        if not title:
            return HandleResult(message="Cancelled")
        return self.session.choose_new_target(title)

    def _follow_signal(self, result: HandleResult) -> HandleResult:
        if result.signal == Signal.CREATE_NEW_NOTE:
            return self._prompt_title()
        if result.signal == Signal.OPEN_NOTE:
            path = self.session.store.notes_dir / result.document
            return HandleResult(message=open_in_editor(path, self.editor_cmd))
        return result

    def press(self, key: str) -> bool:
        """
        Apply one key. Returns True when the workflow should end.
        """
        event = parse_key(key, self.session.state)
        if event.action == Action.NONE:
            return False

        try:
            result = self._follow_signal(self.session.handle(event))
        except DocumentStoreError as e:
            logger.error(f"Notes error: {e}")
            self.message = f"Error: {e}"
            return False

        self.message = result.message
        return result.should_exit

    def run(self) -> None:
        self.render()
        while True:
            try:
                line = self.read_line(CLIConfig.INPUT_PROMPT)
            except (EOFError, KeyboardInterrupt):
                echo("")
                return

            self.message = ""
            for key in keys_for_line(line):
                if self.press(key):
                    return
            self.render()


def talk_to_cmd(
    person: Optional[str] = typer.Argument(
        None,
        help="Go straight to this person's items"
    ),
    notes_dir: Optional[Path] = typer.Option(
        None,
        "--notes-dir",
        "-d",
        help="Notes directory (default: notes.directory from config)"
    ),
):
    """
    Move to-talk items into a note for the conversation.

    Examples:
      parley talk-to              # Pick a person
      parley talk-to alice        # Jump to alice's items
    """
    store = open_store(notes_dir)

    try:
        session = RelocationSession.start(store, filter_person=person)
    except DocumentStoreError as e:
        print_error(str(e), code="NOTES_UNAVAILABLE", input_value=str(store.notes_dir))
        raise typer.Exit(code=1)

    if isinstance(session.state, PersonSelection):
        if person:
            echo(f"No to-talk-{person.lower()} items found")
            return
        if not session.state.groups:
            echo("No to-talk items found")
            return

    TalkToRunner(session).run()
