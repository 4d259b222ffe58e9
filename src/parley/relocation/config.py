"""
Configuration for task relocation.

Markers, tag syntax and indentation settings shared by the scanner and
the document mutator.
"""

import re

OPEN_MARKER = "- [ ]"
CLOSED_MARKER = "- [x]"

# Incomplete task lines contain the open marker followed by a space
OPEN_TASK_TOKEN = OPEN_MARKER + " "

# to-talk-<name>, any case; the name is normalized to lower case
TAG_PREFIX = "to-talk-"
TAG_PATTERN = re.compile(r"\bto-talk-(\w+)", re.IGNORECASE)

# A tag together with the whitespace in front of it, for stripping
TAG_STRIP_PATTERN = re.compile(r"\s*\bto-talk-\w+", re.IGNORECASE)

INDENT_DETECTION = {
    "tab_width": 4,
}

# Blank lines padding an inserted block (one before, one after)
INSERT_PADDING_LINES = 2
