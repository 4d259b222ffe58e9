"""
Tests for RelocationBuilder: moving tagged items into a target note.
"""

import pytest

from parley.exceptions import NoSelection, NoTargetSelected, PatternNotFound
from parley.relocation import (
    DocumentMutator,
    RelocationBuilder,
    UndoStack,
    count_moved_lines,
    scan_store,
)

pytestmark = pytest.mark.relocation

HEADER_LINES = 7


@pytest.fixture
def builder(store):
    return RelocationBuilder(DocumentMutator(store), UndoStack())


def snapshot(notes_dir):
    return {path.name: path.read_bytes() for path in notes_dir.glob("*.md")}


class TestRelocate:
    """Successful moves."""

    def test_move_to_new_note(self, store, builder, write_note, notes_dir):
        source = write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        items = scan_store(store)["alice"]
        target = store.create_document("notes")

        transaction = builder.relocate("alice", target.name, items)

        target_lines = (notes_dir / target.name).read_text().split("\n")
        assert "- [ ] Fix bug" in target_lines
        assert not any("to-talk" in line for line in target_lines)

        source_lines = source.read_text().split("\n")
        assert source_lines[HEADER_LINES] == "- [x] Fix bug to-talk-alice"

        assert transaction.person == "alice"
        assert transaction.target_document == target.name
        assert transaction.source_documents == ["a.md"]
        assert len(builder.undo_stack) == 1

    def test_subtasks_move_and_close_with_their_parent(self, store, builder, write_note, notes_dir):
        source = write_note("a.md", "- [ ] Parent to-talk-alice\n  - [ ] first\n  - [ ] second\n\n- [ ] other\n")
        items = scan_store(store)["alice"]
        target = store.create_document("sync")

        transaction = builder.relocate("alice", target.name, items)

        body = source.read_text().split("\n")[HEADER_LINES:]
        assert body[:5] == [
            "- [x] Parent to-talk-alice",
            "  - [x] first",
            "  - [x] second",
            "",
            "- [ ] other",
        ]
        target_text = (notes_dir / target.name).read_text()
        assert "- [ ] Parent\n  - [ ] first\n  - [ ] second\n" in target_text
        assert transaction.modification_count == 3

    def test_inserted_lines_match_item_count_plus_padding(self, store, builder, write_note, notes_dir):
        write_note("a.md", "- [ ] One to-talk-alice\n  - [ ] sub\n- [ ] Two to-talk-alice\n")
        items = scan_store(store)["alice"]
        target = store.create_document("notes")
        before = (notes_dir / target.name).read_text().count("\n")

        transaction = builder.relocate("alice", target.name, items)

        after = (notes_dir / target.name).read_text().count("\n")
        assert transaction.inserted_line_count == count_moved_lines(items) == 3 + 2
        assert after - before == transaction.inserted_line_count
        assert transaction.inserted_lines == ["", "- [ ] One", "  - [ ] sub", "- [ ] Two", ""]

    def test_leading_blank_is_skipped_when_insertion_point_is_blank(self, store, builder, write_note, notes_dir):
        write_note("a.md", "- [ ] One to-talk-alice\n")
        target = write_note("t.md", "# Target\n\nexisting\n", raw=True)
        items = scan_store(store)["alice"]

        transaction = builder.relocate("alice", "t.md", items)

        assert target.read_text() == "# Target\n- [ ] One\n\n\nexisting\n"
        assert transaction.inserted_line_count == count_moved_lines(items) - 1

    def test_items_from_several_documents(self, store, builder, write_note):
        a = write_note("a.md", "- [ ] From a to-talk-bob\n")
        b = write_note("b.md", "intro\n- [ ] From b to-talk-bob\n")
        items = scan_store(store)["bob"]
        target = store.create_document("bob")

        transaction = builder.relocate("bob", target.name, items)

        assert sorted(transaction.source_documents) == ["a.md", "b.md"]
        assert "- [x] From a to-talk-bob" in a.read_text()
        assert "- [x] From b to-talk-bob" in b.read_text()

    def test_target_is_also_a_source(self, store, builder, write_note):
        path = write_note("a.md", "# A\n- [ ] Fix bug to-talk-alice\n  - [ ] sub\n")
        items = scan_store(store)["alice"]

        transaction = builder.relocate("alice", "a.md", items)

        body = path.read_text().split("\n")[HEADER_LINES:]
        assert body == [
            "",
            "- [ ] Fix bug",
            "  - [ ] sub",
            "",
            "# A",
            "- [x] Fix bug to-talk-alice",
            "  - [x] sub",
            "",
        ]
        assert [m.line_number for m in transaction.source_modifications["a.md"]] == [13, 14]


class TestRelocatePreconditions:

    def test_no_items(self, builder, write_note):
        write_note("t.md", "# T\n")
        with pytest.raises(NoSelection):
            builder.relocate("alice", "t.md", [])

    def test_no_target(self, store, builder, write_note):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        items = scan_store(store)["alice"]
        with pytest.raises(NoTargetSelected):
            builder.relocate("alice", "", items)


class TestRollback:
    """Failures leave every document as it was."""

    def test_failure_mid_move_restores_all_documents(self, store, builder, write_note, notes_dir):
        write_note("a.md", "- [ ] First to-talk-alice\n")
        b = write_note("b.md", "- [ ] Second to-talk-alice\n")
        items = scan_store(store)["alice"]
        store.create_document("target")

        # The second source changes after the scan
        b.write_text(b.read_text().replace("- [ ] Second", "- [x] Second"))
        before = snapshot(notes_dir)

        with pytest.raises(PatternNotFound) as exc_info:
            builder.relocate("alice", "target-2026-10-18.md", items)

        assert exc_info.value.document == "b.md"
        assert exc_info.value.line_number == HEADER_LINES + 1
        assert snapshot(notes_dir) == before
        assert len(builder.undo_stack) == 0

    def test_failure_on_self_target_restores_document(self, store, builder, write_note, notes_dir):
        path = write_note("a.md", "# A\n- [ ] One to-talk-alice\n- [ ] Two to-talk-alice\n")
        items = scan_store(store)["alice"]
        path.write_text(path.read_text().replace("- [ ] Two", "-  [ ] Two"))
        before = snapshot(notes_dir)

        with pytest.raises(PatternNotFound):
            builder.relocate("alice", "a.md", items)

        assert snapshot(notes_dir) == before

    def test_missing_target_touches_nothing(self, store, builder, write_note, notes_dir):
        from parley.exceptions import DocumentNotFound

        write_note("a.md", "- [ ] First to-talk-alice\n")
        items = scan_store(store)["alice"]
        before = snapshot(notes_dir)

        with pytest.raises(DocumentNotFound):
            builder.relocate("alice", "missing.md", items)

        assert snapshot(notes_dir) == before

    def test_rollback_restores_line_with_several_checkboxes(self, store, builder, write_note, notes_dir):
        write_note("a.md", "* - [x] old; - [ ] new to-talk-alice\n")
        b = write_note("b.md", "- [ ] Second to-talk-alice\n")
        items = scan_store(store)["alice"]
        store.create_document("target")

        b.write_text(b.read_text().replace("- [ ] Second", "- [x] Second"))
        before = snapshot(notes_dir)

        with pytest.raises(PatternNotFound):
            builder.relocate("alice", "target-2026-10-18.md", items)

        assert snapshot(notes_dir) == before
