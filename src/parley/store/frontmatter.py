"""
Metadata header parsing for Markdown notes.

A header is a block delimited by `---` lines at the top of the document,
holding simple `key: value` pairs:

    ---
    title: Weekly sync
    date-created: 2026-10-18
    tags: [todo]
    date-due:
    done: false
    ---
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

DELIMITER = "---"
DATE_FORMAT = "%Y-%m-%d"


def split_header(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split raw document text into header values and body.

    Lines inside the header without a colon are ignored. A document that
    does not open with a delimiter, or whose header is never closed, has no
    header and its whole text is the body.

    Args:
        text: Raw document text

    Returns:
        Tuple of (metadata, body)
    """
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    metadata: Dict[str, str] = {}
    for index in range(1, len(lines)):
        line = lines[index]
        if line.strip() == DELIMITER:
            return metadata, "\n".join(lines[index + 1:])
        key, sep, value = line.partition(":")
        if not sep:
            continue
        metadata[key.strip()] = value.strip()

    return {}, text


def parse_tags(value: str) -> List[str]:
    """
    Parse a tags value such as `[todo, work]` or `[todo work]`.
    """
    inner = value.strip().strip("[]").strip()
    if not inner:
        return []
    if "," in inner:
        return [tag.strip() for tag in inner.split(",") if tag.strip()]
    return inner.split()


def format_tags(tags: List[str]) -> str:
    return "[" + " ".join(tags) + "]"


def parse_date(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD header value; empty or malformed values give None."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def render_header(metadata: Dict[str, str]) -> str:
    """
    Serialize header values back into a delimited block (with trailing newline).
    """
    lines = [DELIMITER]
    for key, value in metadata.items():
        lines.append(f"{key}: {value}" if value else f"{key}:")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def new_todo_header(title: str, created: date, tags: Optional[List[str]] = None) -> Dict[str, str]:
    """
    Header values for a freshly created todo document.
    """
    return {
        "title": title,
        "date-created": format_date(created),
        "tags": format_tags(tags if tags is not None else ["todo"]),
        "date-due": "",
        "done": "false",
    }
