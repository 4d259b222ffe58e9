"""
Unit tests for the to-talk tag scanner.
"""

import pytest

from parley.relocation import (
    build_person_groups,
    extract_subtasks,
    indent_width,
    parse_recipients,
    scan_documents,
    scan_store,
    scan_text,
    strip_recipient_tags,
)

pytestmark = pytest.mark.relocation

HEADER_LINES = 7


class TestParseRecipients:
    """Tag extraction from a single line."""

    def test_single_tag(self):
        assert parse_recipients("- [ ] Fix bug to-talk-alice") == ["alice"]

    def test_names_are_lowercased_and_deduplicated(self):
        line = "- [ ] Plan to-talk-Bob to-talk-alice to-talk-BOB"
        assert parse_recipients(line) == ["bob", "alice"]

    def test_tag_is_case_insensitive(self):
        assert parse_recipients("- [ ] Review TO-TALK-Carol") == ["carol"]

    def test_tag_inside_a_word_is_ignored(self):
        assert parse_recipients("- [ ] see auto-talk-x") == []

    def test_no_tags(self):
        assert parse_recipients("- [ ] nothing here") == []


class TestStripRecipientTags:
    """Tag removal keeps the rest of the line."""

    def test_strips_all_tags_and_keeps_checkbox(self):
        assert strip_recipient_tags("- [ ] Fix bug to-talk-alice to-talk-bob") == "- [ ] Fix bug"

    def test_strips_tag_in_the_middle(self):
        assert strip_recipient_tags("- [ ] Ask to-talk-alice about the release") == "- [ ] Ask about the release"

    def test_trims_indentation(self):
        assert strip_recipient_tags("    - [ ] Nested to-talk-alice") == "- [ ] Nested"


class TestIndentWidth:

    def test_spaces(self):
        assert indent_width("   x") == 3

    def test_tabs_count_as_four(self):
        assert indent_width("\t\tx") == 8

    def test_mixed(self):
        assert indent_width(" \tx") == 5


class TestExtractSubtasks:
    """Nested line collection under a tagged task."""

    def test_stops_at_blank_line(self):
        lines = [
            "- [ ] Parent to-talk-alice",
            "  - [ ] Child one",
            "  - [ ] Child two",
            "",
            "Unrelated",
        ]
        subtasks = extract_subtasks(lines, 0)

        assert [s.text for s in subtasks] == ["  - [ ] Child one", "  - [ ] Child two"]
        assert [s.line_number for s in subtasks] == [2, 3]
        assert all(s.indent == 2 for s in subtasks)

    def test_stops_at_same_indent(self):
        lines = [
            "  - [ ] Parent",
            "    - [ ] Child",
            "  - [ ] Sibling",
            "    - [ ] Sibling child",
        ]
        subtasks = extract_subtasks(lines, 0)
        assert [s.text for s in subtasks] == ["    - [ ] Child"]

    def test_blank_line_ends_group_even_if_indented_lines_follow(self):
        lines = ["- [ ] Parent", "  one", "", "  two"]
        assert [s.text for s in extract_subtasks(lines, 0)] == ["  one"]

    def test_last_line_has_no_subtasks(self):
        assert extract_subtasks(["- [ ] Parent"], 0) == []

    def test_out_of_range_parent(self):
        assert extract_subtasks(["- [ ] Parent"], 5) == []


class TestScanText:
    """Whole-document scanning."""

    def test_finds_open_tagged_tasks_only(self):
        text = "\n".join([
            "# Notes",
            "- [ ] Open to-talk-alice",
            "- [x] Done to-talk-alice",
            "- [ ] Untagged",
            "Plain line to-talk-alice",
        ])
        found = scan_text("a.md", text)

        assert len(found) == 1
        person, item = found[0]
        assert person == "alice"
        assert item.source_document == "a.md"
        assert item.line_number == 2
        assert item.raw_text == "- [ ] Open to-talk-alice"

    def test_item_with_several_tags_is_listed_per_person(self):
        found = scan_text("a.md", "- [ ] Shared to-talk-alice to-talk-bob\n")
        assert [person for person, _ in found] == ["alice", "bob"]
        assert found[0][1] == found[1][1]

    def test_open_marker_anywhere_in_line_counts(self):
        found = scan_text("a.md", "  * - [ ] nested bullet to-talk-alice")
        assert len(found) == 1

    def test_marker_without_trailing_space_is_not_a_task(self):
        assert scan_text("a.md", "- [ ]to-talk-alice") == []

    def test_subtasks_are_attached(self):
        text = "- [ ] Parent to-talk-alice\n\t- [ ] Child\n- [ ] Next"
        _, item = scan_text("a.md", text)[0]
        assert [s.text for s in item.subtasks] == ["\t- [ ] Child"]
        assert item.line_count == 2


class TestScanStore:
    """Scanning through the document store."""

    def test_groups_across_documents(self, store, write_note):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n- [ ] Lunch to-talk-bob\n")
        write_note("b.md", "- [ ] Review to-talk-Alice\n")

        items_by_person = scan_store(store)

        assert sorted(items_by_person) == ["alice", "bob"]
        assert [(i.source_document, i.line_number) for i in items_by_person["alice"]] == [
            ("a.md", HEADER_LINES + 1),
            ("b.md", HEADER_LINES + 1),
        ]

    def test_completed_documents_are_skipped(self, store, write_note):
        write_note("done.md", "- [ ] Old to-talk-alice\n", done="true")
        assert scan_store(store) == {}

    def test_build_person_groups_sorted_with_counts(self, store, write_note):
        write_note("a.md", "- [ ] One to-talk-zoe\n- [ ] Two to-talk-adam\n- [ ] Three to-talk-zoe\n")

        groups = build_person_groups(scan_store(store))

        assert [(g.name, g.count) for g in groups] == [("adam", 1), ("zoe", 2)]

    def test_unreadable_document_is_skipped(self, store, write_note):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        stale = write_note("b.md", "- [ ] Review to-talk-bob\n")

        documents = store.list_incomplete_documents()
        stale.unlink()

        assert list(scan_documents(documents, store)) == ["alice"]
