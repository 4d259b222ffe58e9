"""
Session package: the interactive selection workflow around a relocation.
"""

from .actions import Action, HandleResult, InputEvent, Signal
from .keymap import parse_key
from .machine import RelocationSession
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

__all__ = [
    "RelocationSession",
    "parse_key",
    "Action",
    "InputEvent",
    "HandleResult",
    "Signal",
    "SessionState",
    "PersonSelection",
    "ItemSelection",
    "TargetSelection",
    "TargetSearch",
    "SearchMode",
    "Confirmation",
    "SuccessView",
]
