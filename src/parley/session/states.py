"""
Workflow states for the talk-to session.

Each state is a frozen dataclass carrying only what that step needs;
`SessionState` is the union of all six. States that come after item
selection keep the `ItemSelection` they were reached from, so going back
restores the operator's checkboxes.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

from parley.schemas import Document, PersonGroup, RelocationTransaction, TaggedItem


class SearchMode(Enum):
    """Input mode of the target search modal."""
    INSERT = "insert"
    NORMAL = "normal"


def _wrap(index: int, step: int, size: int) -> int:
    if size == 0:
        return 0
    return (index + step) % size


@dataclass(frozen=True)
class PersonSelection:
    """Pick the person whose to-talk items should move."""
    groups: Tuple[PersonGroup, ...] = ()
    index: int = 0

    @property
    def current(self) -> Optional[PersonGroup]:
        if 0 <= self.index < len(self.groups):
            return self.groups[self.index]
        return None

    def moved(self, step: int) -> "PersonSelection":
        return replace(self, index=_wrap(self.index, step, len(self.groups)))


@dataclass(frozen=True)
class ItemSelection:
    """Check the items to move. `selected` runs parallel to `items`."""
    person: str
    items: Tuple[TaggedItem, ...]
    selected: Tuple[bool, ...]
    index: int = 0

    @classmethod
    def for_person(cls, person: str, items) -> "ItemSelection":
        items = tuple(items)
        return cls(person=person, items=items, selected=(True,) * len(items))

    @property
    def selected_items(self) -> Tuple[TaggedItem, ...]:
        return tuple(item for item, checked in zip(self.items, self.selected) if checked)

    @property
    def selected_count(self) -> int:
        return sum(1 for checked in self.selected if checked)

    def moved(self, step: int) -> "ItemSelection":
        return replace(self, index=_wrap(self.index, step, len(self.items)))

    def toggled(self) -> "ItemSelection":
        if not 0 <= self.index < len(self.selected):
            return self
        flags = list(self.selected)
        flags[self.index] = not flags[self.index]
        return replace(self, selected=tuple(flags))

    def with_all(self, checked: bool) -> "ItemSelection":
        return replace(self, selected=(checked,) * len(self.items))


@dataclass(frozen=True)
class TargetSelection:
    """Choose between finding an existing note and creating a new one."""
    selection: ItemSelection


@dataclass(frozen=True)
class TargetSearch:
    """Live substring search over incomplete notes."""
    selection: ItemSelection
    mode: SearchMode = SearchMode.INSERT
    query: str = ""
    results: Tuple[Document, ...] = ()
    index: int = 0

    @property
    def current(self) -> Optional[Document]:
        if 0 <= self.index < len(self.results):
            return self.results[self.index]
        return None

    def moved(self, step: int) -> "TargetSearch":
        return replace(self, index=_wrap(self.index, step, len(self.results)))


@dataclass(frozen=True)
class Confirmation:
    """Review the pending move before it is applied."""
    selection: ItemSelection
    target: str
    is_new: bool = False


@dataclass(frozen=True)
class SuccessView:
    """A move has been applied; offer undo, open, return or quit."""
    transaction: RelocationTransaction
    message: str = field(default="")


SessionState = Union[
    PersonSelection,
    ItemSelection,
    TargetSelection,
    TargetSearch,
    Confirmation,
    SuccessView,
]
