"""
Tag scanner: finds open tasks earmarked for a recipient.

A task line such as

    - [ ] Ask about the release date to-talk-alice to-talk-Bob

is filed under both `alice` and `bob`. Indented lines directly below it
travel with it as subtasks.
"""

from typing import Dict, Iterable, List, Tuple

from parley.exceptions import DocumentStoreError
from parley.logging_config import logger
from parley.schemas import Document, PersonGroup, Subtask, TaggedItem

from .config import (
    INDENT_DETECTION,
    OPEN_TASK_TOKEN,
    TAG_PATTERN,
    TAG_STRIP_PATTERN,
)

ItemsByPerson = Dict[str, List[TaggedItem]]


def normalize_person(name: str) -> str:
    return name.strip().lower()


def parse_recipients(line: str) -> List[str]:
    """
    Extract all recipient names from to-talk tags in a line.

    Returns:
        Normalized (lowercase) names in order of appearance, duplicates removed
    """
    people: List[str] = []
    for match in TAG_PATTERN.finditer(line):
        person = normalize_person(match.group(1))
        if person and person not in people:
            people.append(person)
    return people


def strip_recipient_tags(line: str) -> str:
    """
    Remove every to-talk tag from a line.

    Each tag goes together with the whitespace in front of it, so a leading
    checkbox marker is left intact. The result is trimmed.
    """
    return TAG_STRIP_PATTERN.sub("", line).strip()


def indent_width(line: str) -> int:
    """
    Leading indentation width of a line. Tabs count as four spaces.
    """
    tab_width = INDENT_DETECTION["tab_width"]
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += tab_width
        else:
            break
    return width


def extract_subtasks(lines: List[str], parent_index: int) -> List[Subtask]:
    """
    Collect the lines nested under the task at `parent_index` (0-indexed).

    Collection stops at the first blank line or the first line indented no
    deeper than the parent.
    """
    if parent_index < 0 or parent_index >= len(lines):
        return []

    parent_indent = indent_width(lines[parent_index])
    subtasks: List[Subtask] = []

    for i in range(parent_index + 1, len(lines)):
        line = lines[i]
        if not line.strip():
            break

        current_indent = indent_width(line)
        if current_indent <= parent_indent:
            break

        subtasks.append(Subtask(text=line, line_number=i + 1, indent=current_indent))

    return subtasks


def scan_text(document: str, text: str) -> List[Tuple[str, TaggedItem]]:
    """
    Scan one document's raw text.

    Returns:
        (person, item) pairs; an item tagged for several people appears once per person
    """
    lines = text.split("\n")
    found: List[Tuple[str, TaggedItem]] = []

    for index, line in enumerate(lines):
        if OPEN_TASK_TOKEN not in line:
            continue

        people = parse_recipients(line)
        if not people:
            continue

        item = TaggedItem(
            source_document=document,
            line_number=index + 1,
            raw_text=line,
            subtasks=extract_subtasks(lines, index),
        )
        found.extend((person, item) for person in people)

    return found


def scan_documents(documents: Iterable[Document], store) -> ItemsByPerson:
    """
    Build the person -> items mapping for a set of documents.

    Raw text is read through the store so line numbers match the files on
    disk, header included. Documents that cannot be read are skipped.
    """
    items_by_person: ItemsByPerson = {}

    for document in documents:
        try:
            text = store.read_raw_text(document.name)
        except DocumentStoreError as e:
            logger.warning(f"Skipping {document.name}: {e}")
            continue

        for person, item in scan_text(document.name, text):
            items_by_person.setdefault(person, []).append(item)

    logger.debug(f"Scanned to-talk tags: {sum(len(v) for v in items_by_person.values())} item(s) "
                 f"across {len(items_by_person)} people")
    return items_by_person


def scan_store(store) -> ItemsByPerson:
    """Scan every incomplete document in the store."""
    return scan_documents(store.list_incomplete_documents(), store)


def build_person_groups(items_by_person: ItemsByPerson) -> List[PersonGroup]:
    """People with pending items, sorted alphabetically."""
    return [
        PersonGroup(name=person, count=len(items))
        for person, items in sorted(items_by_person.items())
    ]
