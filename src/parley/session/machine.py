"""
RelocationSession: the talk-to workflow as an explicit state machine.

One session owns the document store, the mutator, the undo stack and the
current state. Every input goes through `handle()`, which dispatches on the
current state's type to a handler returning the next state and a result.
The state only changes after a handler returns, so errors leave it intact.
"""

from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple

from parley.exceptions import (
    InvalidPersonIndex,
    NoSelection,
    NoTargetSelected,
    NothingToUndo,
    ParleyError,
    SelectionError,
    UndoError,
)
from parley.logging_config import logger
from parley.relocation import (
    DocumentMutator,
    RelocationBuilder,
    UndoStack,
    build_person_groups,
    scan_store,
)
from parley.relocation.scanner import ItemsByPerson, normalize_person

from .actions import Action, HandleResult, InputEvent, Signal
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

Transition = Tuple[SessionState, HandleResult]

_STAY = HandleResult()
_EXIT = HandleResult(should_exit=True)


class RelocationSession:
    """
    Drive one operator through person, item and target selection to a move.

    Attributes:
        store: DocumentStore the session reads and writes through
        mutator: DocumentMutator bound to the store
        undo_stack: Moves applied during this session
        state: Current workflow state (read it to render)
    """

    def __init__(self, store, undo_stack: Optional[UndoStack] = None):
        self.store = store
        self.mutator = DocumentMutator(store)
        self.undo_stack = undo_stack if undo_stack is not None else UndoStack()
        self.builder = RelocationBuilder(self.mutator, self.undo_stack)
        self.items_by_person: ItemsByPerson = {}
        self.state: SessionState = PersonSelection()

        self._handlers: Dict[type, Callable[..., Transition]] = {
            PersonSelection: self._on_person_selection,
            ItemSelection: self._on_item_selection,
            TargetSelection: self._on_target_selection,
            TargetSearch: self._on_target_search,
            Confirmation: self._on_confirmation,
            SuccessView: self._on_success_view,
        }

    @classmethod
    def start(cls, store, filter_person: Optional[str] = None) -> "RelocationSession":
        """
        Scan the store and open the workflow.

        Args:
            store: DocumentStore to scan
            filter_person: Jump straight to this person's items when they have any

        Raises:
            DocumentStoreError: The notes could not be listed
        """
        session = cls(store)
        session.state = session.rescan()

        if filter_person:
            wanted = normalize_person(filter_person)
            for index, group in enumerate(session.state.groups):
                if group.name == wanted:
                    session.state = session._enter_items(replace(session.state, index=index))
                    break
            else:
                logger.debug(f"No to-talk items for '{wanted}', starting at person selection")

        return session

    def rescan(self) -> PersonSelection:
        """Rebuild person groups from the store and return a fresh PersonSelection."""
        self.items_by_person = scan_store(self.store)
        groups = build_person_groups(self.items_by_person)
        logger.debug(f"Found {len(groups)} person group(s)")
        return PersonSelection(groups=tuple(groups))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, event: InputEvent) -> HandleResult:
        """
        Apply one input to the current state.

        Selection precondition failures come back as the result message and
        leave the state unchanged. Store errors propagate, also leaving the
        state unchanged.
        """
        handler = self._handlers[type(self.state)]
        try:
            new_state, result = handler(self.state, event)
        except SelectionError as e:
            logger.debug(f"{type(self.state).__name__}: {e}")
            return HandleResult(message=str(e))

        self.state = new_state
        return result

    def choose_new_target(self, title: str) -> HandleResult:
        """
        Create a new note as the move target and advance to confirmation.

        Only valid from TargetSelection (after a CREATE_NEW_NOTE signal).

        Raises:
            DocumentStoreError: The note could not be created
        """
        if not isinstance(self.state, TargetSelection):
            return HandleResult(message="Not choosing a target")

        document = self.store.create_document(title)
        self.state = Confirmation(selection=self.state.selection, target=document.name, is_new=True)
        return HandleResult(message=f"Created note: {document.name}")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _enter_items(self, state: PersonSelection) -> ItemSelection:
        group = state.current
        if group is None:
            raise InvalidPersonIndex(state.index)
        # Line numbers must be current, so scan again rather than reuse the groups
        self.items_by_person = scan_store(self.store)
        return ItemSelection.for_person(group.name, self.items_by_person.get(group.name, []))

    def _on_person_selection(self, state: PersonSelection, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.NEXT:
            return state.moved(1), _STAY
        if action == Action.PREVIOUS:
            return state.moved(-1), _STAY
        if action == Action.CONFIRM:
            return self._enter_items(state), _STAY
        if action in (Action.BACK, Action.QUIT):
            return state, _EXIT
        return state, _STAY

    def _on_item_selection(self, state: ItemSelection, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.NEXT:
            return state.moved(1), _STAY
        if action == Action.PREVIOUS:
            return state.moved(-1), _STAY
        if action == Action.TOGGLE:
            return state.toggled(), _STAY
        if action == Action.SELECT_ALL:
            return state.with_all(True), _STAY
        if action == Action.SELECT_NONE:
            return state.with_all(False), _STAY
        if action == Action.CONFIRM:
            if state.selected_count == 0:
                raise NoSelection()
            return TargetSelection(selection=state), _STAY
        if action == Action.BACK:
            return self.rescan(), _STAY
        if action == Action.QUIT:
            return state, _EXIT
        return state, _STAY

    def _on_target_selection(self, state: TargetSelection, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.FIND_EXISTING:
            results = tuple(self.store.search_documents(""))
            return TargetSearch(selection=state.selection, results=results), _STAY
        if action == Action.CREATE_NEW:
            return state, HandleResult(signal=Signal.CREATE_NEW_NOTE)
        if action == Action.BACK:
            return state.selection, _STAY
        if action == Action.QUIT:
            return state, _EXIT
        return state, _STAY

    def _refilter(self, state: TargetSearch, query: str) -> TargetSearch:
        results = tuple(self.store.search_documents(query))
        index = state.index if state.index < len(results) else 0
        return replace(state, query=query, results=results, index=index)

    def _on_target_search(self, state: TargetSearch, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.TYPE and state.mode == SearchMode.INSERT:
            return self._refilter(state, state.query + event.char), _STAY
        if action == Action.BACKSPACE and state.mode == SearchMode.INSERT:
            if not state.query:
                return state, _STAY
            return self._refilter(state, state.query[:-1]), _STAY
        if action == Action.TOGGLE_MODE:
            mode = SearchMode.NORMAL if state.mode == SearchMode.INSERT else SearchMode.INSERT
            return replace(state, mode=mode), _STAY
        if action == Action.ENTER_INSERT:
            return replace(state, mode=SearchMode.INSERT), _STAY
        if action == Action.NEXT:
            return state.moved(1), _STAY
        if action == Action.PREVIOUS:
            return state.moved(-1), _STAY
        if action == Action.CONFIRM:
            document = state.current
            if document is None:
                raise NoTargetSelected()
            return Confirmation(selection=state.selection, target=document.name), _STAY
        if action in (Action.CANCEL_SEARCH, Action.BACK):
            return TargetSelection(selection=state.selection), _STAY
        if action == Action.QUIT:
            return state, _EXIT
        return state, _STAY

    def _on_confirmation(self, state: Confirmation, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.CONFIRM:
            selection = state.selection
            try:
                transaction = self.builder.relocate(selection.person, state.target, selection.selected_items)
            except ParleyError as e:
                return state, HandleResult(message=f"Move failed: {e}")
            message = f"Moved {len(transaction.items)} todo(s) to {state.target}"
            return SuccessView(transaction=transaction, message=message), HandleResult(message=message)
        if action == Action.BACK:
            return state.selection, _STAY
        if action == Action.QUIT:
            return state, _EXIT
        return state, _STAY

    def _on_success_view(self, state: SuccessView, event: InputEvent) -> Transition:
        action = event.action
        if action == Action.UNDO:
            try:
                # A failed undo has already popped this view's move
                if self.undo_stack.peek() is not state.transaction:
                    raise NothingToUndo()
                self.undo_stack.undo_last(self.mutator)
            except UndoError as e:
                return state, HandleResult(message=f"Undo failed: {e}")
            return self.rescan(), HandleResult(message="Undo successful")
        if action == Action.RETURN_TO_PERSON:
            return self.rescan(), _STAY
        if action == Action.OPEN_NOTE:
            target = state.transaction.target_document
            return state, HandleResult(signal=Signal.OPEN_NOTE, document=target)
        if action in (Action.QUIT, Action.BACK):
            return state, _EXIT
        return state, _STAY
