from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Action(Enum):
    """Operator actions, already decoded from keys for the current state."""
    NONE = "none"
    NEXT = "next"
    PREVIOUS = "previous"
    CONFIRM = "confirm"
    BACK = "back"
    QUIT = "quit"
    # Item selection
    TOGGLE = "toggle"
    SELECT_ALL = "select_all"
    SELECT_NONE = "select_none"
    # Target selection
    FIND_EXISTING = "find_existing"
    CREATE_NEW = "create_new"
    # Target search
    TYPE = "type"
    BACKSPACE = "backspace"
    TOGGLE_MODE = "toggle_mode"
    ENTER_INSERT = "enter_insert"
    CANCEL_SEARCH = "cancel_search"
    # Success view
    UNDO = "undo"
    OPEN_NOTE = "open_note"
    RETURN_TO_PERSON = "return_to_person"


class Signal(Enum):
    """Requests the session hands back to the input loop."""
    OPEN_NOTE = "open_note"
    CREATE_NEW_NOTE = "create_new_note"


@dataclass(frozen=True)
class InputEvent:
    """A parsed action with its optional typed character."""
    action: Action
    char: str = ""


@dataclass(frozen=True)
class HandleResult:
    """
    Outcome of one handled input.

    `document` names the note a signal refers to (OPEN_NOTE).
    """
    should_exit: bool = False
    message: str = ""
    signal: Optional[Signal] = None
    document: Optional[str] = None
