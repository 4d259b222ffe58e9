"""
Screen rendering for the talk-to workflow.

Each state renders to a list of markup lines, printed through the
machine-aware console. Note text is escaped, so `[ ]` and `[x]` print as-is.
"""

from typing import List

from rich.markup import escape

from parley.relocation import strip_recipient_tags
from parley.schemas import TaggedItem
from parley.session import (
    Confirmation,
    ItemSelection,
    PersonSelection,
    SearchMode,
    SessionState,
    SuccessView,
    TargetSearch,
    TargetSelection,
)

CURSOR = ">"


def _cursor(active: bool) -> str:
    return f"[bold cyan]{CURSOR}[/bold cyan]" if active else " "


def _item_label(item: TaggedItem) -> str:
    return escape(strip_recipient_tags(item.raw_text))


def _subtask_lines(item: TaggedItem, pad: str) -> List[str]:
    return [f"{pad}[dim]{escape(sub.text.strip())}[/dim]" for sub in item.subtasks]


def _person_selection(state: PersonSelection) -> List[str]:
    lines = ["[bold]Select a person to talk to[/bold]", ""]
    for i, group in enumerate(state.groups):
        lines.append(f"{_cursor(i == state.index)} {escape(group.name)} ({group.count})")
    lines += ["", "[dim]j/k: navigate  enter: select  q: quit[/dim]"]
    return lines


def _item_selection(state: ItemSelection) -> List[str]:
    lines = [
        f"[bold]Items for {escape(state.person)}[/bold] "
        f"({state.selected_count}/{len(state.items)} selected)",
        "",
    ]
    for i, (item, checked) in enumerate(zip(state.items, state.selected)):
        box = escape("[x]" if checked else "[ ]")
        source = f"[dim]{escape(item.source_document)}:{item.line_number}[/dim]"
        lines.append(f"{_cursor(i == state.index)} {box} {_item_label(item)}  {source}")
        lines += _subtask_lines(item, "        ")
    lines += ["", "[dim]j/k: navigate  space: toggle  a: all  n: none  enter: continue  q: back[/dim]"]
    return lines


def _target_selection(state: TargetSelection) -> List[str]:
    selection = state.selection
    return [
        f"[bold]Move {selection.selected_count} item(s) for {escape(selection.person)} to:[/bold]",
        "",
        "  f  find an existing note",
        "  n  create a new note",
        "",
        "[dim]q: back[/dim]",
    ]


def _target_search(state: TargetSearch) -> List[str]:
    if state.mode == SearchMode.INSERT:
        mode = "[green]INSERT[/green]"
    else:
        mode = "[yellow]NORMAL[/yellow]"
    lines = [f"[bold]Search notes[/bold] {mode}", ""]
    lines.append(f"  Query: {escape(state.query)}_")
    lines.append("")
    if not state.results:
        lines.append("  [dim]No matching notes[/dim]")
    for i, document in enumerate(state.results):
        title = f"  [dim]{escape(document.title)}[/dim]" if document.title else ""
        lines.append(f"{_cursor(i == state.index)} {escape(document.name)}{title}")
    if state.mode == SearchMode.INSERT:
        hint = "type to filter  up/down: navigate  enter: select  esc: normal mode"
    else:
        hint = "j/k: navigate  enter: select  i: insert mode  q: cancel"
    lines += ["", f"[dim]{hint}[/dim]"]
    return lines


def _confirmation(state: Confirmation) -> List[str]:
    selection = state.selection
    target = escape(state.target) + (" [green](new)[/green]" if state.is_new else "")
    lines = [f"[bold]Move {selection.selected_count} todo(s) to {target}?[/bold]", ""]
    for item in selection.selected_items:
        lines.append(f"  {_item_label(item)}")
        lines += _subtask_lines(item, "      ")
    lines += ["", "[dim]enter/y: confirm  c: back  q: quit[/dim]"]
    return lines


def _success_view(state: SuccessView) -> List[str]:
    transaction = state.transaction
    lines = [
        f"[bold green]{escape(state.message)}[/bold green]",
        "",
        f"  Marked {transaction.modification_count} line(s) complete in "
        f"{len(transaction.source_documents)} note(s)",
        "",
        "[dim]u: undo  r: return to people  enter: open note  q: quit[/dim]",
    ]
    return lines


_RENDERERS = {
    PersonSelection: _person_selection,
    ItemSelection: _item_selection,
    TargetSelection: _target_selection,
    TargetSearch: _target_search,
    Confirmation: _confirmation,
    SuccessView: _success_view,
}


def render_state(state: SessionState, message: str = "") -> List[str]:
    """Markup lines for the current state plus an optional status message."""
    lines = _RENDERERS[type(state)](state)
    if message and not (isinstance(state, SuccessView) and message == state.message):
        lines += ["", f"[yellow]{escape(message)}[/yellow]"]
    return lines
