"""
Key bindings for the talk-to workflow.

Keys arrive as normalized tokens: "enter", "esc", "up", "down", "space",
"backspace", or a single character.
"""

from typing import Dict

from .actions import Action, InputEvent
from .states import (
    Confirmation,
    ItemSelection,
    PersonSelection,
    SearchMode,
    SessionState,
    SuccessView,
    TargetSearch,
    TargetSelection,
)

ENTER = "enter"
ESC = "esc"
UP = "up"
DOWN = "down"
SPACE = "space"
BACKSPACE = "backspace"

KEYMAP: Dict[type, Dict[str, Action]] = {
    PersonSelection: {
        "j": Action.NEXT, DOWN: Action.NEXT,
        "k": Action.PREVIOUS, UP: Action.PREVIOUS,
        ENTER: Action.CONFIRM,
        "q": Action.QUIT, ESC: Action.QUIT,
    },
    ItemSelection: {
        "j": Action.NEXT, DOWN: Action.NEXT,
        "k": Action.PREVIOUS, UP: Action.PREVIOUS,
        SPACE: Action.TOGGLE, " ": Action.TOGGLE,
        "a": Action.SELECT_ALL,
        "n": Action.SELECT_NONE,
        ENTER: Action.CONFIRM,
        "q": Action.BACK, ESC: Action.BACK,
    },
    TargetSelection: {
        "f": Action.FIND_EXISTING,
        "n": Action.CREATE_NEW,
        "q": Action.BACK, ESC: Action.BACK,
    },
    Confirmation: {
        ENTER: Action.CONFIRM, "y": Action.CONFIRM, "Y": Action.CONFIRM,
        "c": Action.BACK, "C": Action.BACK, ESC: Action.BACK,
        "q": Action.QUIT,
    },
    SuccessView: {
        "u": Action.UNDO,
        "r": Action.RETURN_TO_PERSON,
        ENTER: Action.OPEN_NOTE,
        "q": Action.QUIT, ESC: Action.QUIT,
    },
}

# Keys shared by both search modes
SEARCH_KEYS: Dict[str, Action] = {
    ESC: Action.TOGGLE_MODE,
    ENTER: Action.CONFIRM,
    BACKSPACE: Action.BACKSPACE,
    DOWN: Action.NEXT,
    UP: Action.PREVIOUS,
}

SEARCH_NORMAL_KEYS: Dict[str, Action] = {
    "i": Action.ENTER_INSERT,
    "j": Action.NEXT,
    "k": Action.PREVIOUS,
    "q": Action.CANCEL_SEARCH,
}


def _parse_search_key(key: str, state: TargetSearch) -> InputEvent:
    if key in SEARCH_KEYS:
        return InputEvent(SEARCH_KEYS[key])

    if state.mode == SearchMode.INSERT:
        if key == SPACE:
            return InputEvent(Action.TYPE, " ")
        if len(key) == 1 and key.isprintable():
            return InputEvent(Action.TYPE, key)
        return InputEvent(Action.NONE)

    return InputEvent(SEARCH_NORMAL_KEYS.get(key, Action.NONE))


def parse_key(key: str, state: SessionState) -> InputEvent:
    """
    Map a key token to the action it means in `state`.

    Unbound keys map to Action.NONE.
    """
    if isinstance(state, TargetSearch):
        return _parse_search_key(key, state)
    bindings = KEYMAP.get(type(state), {})
    return InputEvent(bindings.get(key, Action.NONE))
