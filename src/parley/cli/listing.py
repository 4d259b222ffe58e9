"""
CLI Listing Commands

Read-only views of pending to-talk items.

Commands:
  people  - People with pending items and their counts
  items   - One person's items with source and line
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from parley.cli.common import open_store
from parley.cli.config import CLIConfig
from parley.cli.output import echo, get_console, print_error, print_json
from parley.exceptions import DocumentStoreError
from parley.relocation import build_person_groups, scan_store, strip_recipient_tags
from parley.relocation.scanner import normalize_person

console = get_console()


def _scan(notes_dir: Optional[Path]):
    store = open_store(notes_dir)
    try:
        return scan_store(store)
    except DocumentStoreError as e:
        print_error(str(e), code="NOTES_UNAVAILABLE", input_value=str(store.notes_dir))
        raise typer.Exit(code=1)


def people_cmd(
    notes_dir: Optional[Path] = typer.Option(
        None,
        "--notes-dir",
        "-d",
        help="Notes directory (default: notes.directory from config)"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON"
    ),
):
    """
    List people with pending to-talk items.
    """
    groups = build_person_groups(_scan(notes_dir))

    if json_output:
        print_json({"people": [group.model_dump() for group in groups]})
        return

    if not groups:
        echo("No to-talk items found")
        return

    if CLIConfig.is_machine_mode():
        for group in groups:
            echo(f"{group.name}\t{group.count}")
        return

    table = Table(title="To-talk")
    table.add_column("Person", style="cyan")
    table.add_column("Items", justify="right")
    for group in groups:
        table.add_row(escape(group.name), str(group.count))
    console.print(table)


def items_cmd(
    person: str = typer.Argument(
        ...,
        help="Person whose items to list"
    ),
    notes_dir: Optional[Path] = typer.Option(
        None,
        "--notes-dir",
        "-d",
        help="Notes directory (default: notes.directory from config)"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON"
    ),
):
    """
    List one person's to-talk items.
    """
    name = normalize_person(person)
    items = _scan(notes_dir).get(name, [])

    if json_output:
        print_json({"person": name, "items": [item.model_dump() for item in items]})
        return

    if not items:
        echo(f"No to-talk-{name} items found")
        return

    if CLIConfig.is_machine_mode():
        for item in items:
            echo(f"{item.source_document}:{item.line_number}\t{strip_recipient_tags(item.raw_text)}")
            for sub in item.subtasks:
                echo(f"{item.source_document}:{sub.line_number}\t{sub.text}")
        return

    table = Table(title=f"To-talk with {escape(name)}")
    table.add_column("Source", style="dim")
    table.add_column("Item")
    for item in items:
        table.add_row(f"{escape(item.source_document)}:{item.line_number}", escape(strip_recipient_tags(item.raw_text)))
        for sub in item.subtasks:
            table.add_row(f"{escape(item.source_document)}:{sub.line_number}", escape(sub.text))
    console.print(table)
