"""
Tests for UndoStack: reversing relocations exactly.
"""

import pytest

from parley.exceptions import NothingToUndo, UndoStepFailed
from parley.relocation import DocumentMutator, RelocationBuilder, UndoStack, scan_store

pytestmark = pytest.mark.relocation

HEADER_LINES = 7


@pytest.fixture
def mutator(store):
    return DocumentMutator(store)


@pytest.fixture
def undo_stack():
    return UndoStack()


@pytest.fixture
def builder(mutator, undo_stack):
    return RelocationBuilder(mutator, undo_stack)


def snapshot(notes_dir):
    return {path.name: path.read_bytes() for path in notes_dir.glob("*.md")}


class TestUndoStack:

    def test_empty_stack(self, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        before = snapshot(notes_dir)

        with pytest.raises(NothingToUndo):
            undo_stack.undo_last(mutator)

        assert snapshot(notes_dir) == before
        assert str(NothingToUndo()) == "No moves to undo"

    def test_history_is_most_recent_first(self, store, builder, undo_stack, write_note):
        write_note("a.md", "- [ ] One to-talk-alice\n- [ ] Two to-talk-bob\n")
        store.create_document("first")
        store.create_document("second")
        items = scan_store(store)

        first = builder.relocate("alice", "first-2026-10-18.md", items["alice"])
        second = builder.relocate("bob", "second-2026-10-18.md", items["bob"])

        assert undo_stack.history() == [second, first]
        assert undo_stack.peek() is second
        assert bool(undo_stack)


class TestUndoLast:

    def test_move_then_undo_restores_everything(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n  - [ ] detail\n")
        write_note("b.md", "# B\n\n- [ ] Review to-talk-alice\n")
        store.create_document("sync")
        before = snapshot(notes_dir)

        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])
        assert snapshot(notes_dir) != before

        undone = undo_stack.undo_last(mutator)

        assert undone.target_document == "sync-2026-10-18.md"
        assert snapshot(notes_dir) == before
        assert len(undo_stack) == 0

    def test_undo_is_last_in_first_out(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "- [ ] One to-talk-alice\n- [ ] Two to-talk-bob\n")
        store.create_document("target")
        target = "target-2026-10-18.md"
        initial = snapshot(notes_dir)

        builder.relocate("alice", target, scan_store(store)["alice"])
        after_first = snapshot(notes_dir)
        builder.relocate("bob", target, scan_store(store)["bob"])

        undo_stack.undo_last(mutator)
        assert snapshot(notes_dir) == after_first

        undo_stack.undo_last(mutator)
        assert snapshot(notes_dir) == initial

    def test_undo_when_target_is_also_a_source(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "# A\n- [ ] Fix bug to-talk-alice\n  - [ ] sub\n")
        before = snapshot(notes_dir)

        builder.relocate("alice", "a.md", scan_store(store)["alice"])
        undo_stack.undo_last(mutator)

        assert snapshot(notes_dir) == before

    def test_undo_when_insertion_point_was_blank(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        write_note("t.md", "# Target\n\nexisting\n", raw=True)
        before = snapshot(notes_dir)

        builder.relocate("alice", "t.md", scan_store(store)["alice"])
        undo_stack.undo_last(mutator)

        assert snapshot(notes_dir) == before

    def test_source_edited_after_move(self, store, builder, undo_stack, mutator, write_note):
        source = write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        store.create_document("sync")
        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])

        source.write_text(source.read_text().replace("- [x] Fix bug", "- [ ] Fix bug"))

        with pytest.raises(UndoStepFailed) as exc_info:
            undo_stack.undo_last(mutator)

        error = exc_info.value
        assert error.document == "a.md"
        assert error.line_number == HEADER_LINES + 1
        assert error.__cause__ is not None
        # The transaction is consumed even though the undo stopped
        assert len(undo_stack) == 0

    def test_target_removed_after_move(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        source = write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        store.create_document("sync")
        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])
        (notes_dir / "sync-2026-10-18.md").unlink()
        moved = source.read_bytes()

        with pytest.raises(UndoStepFailed) as exc_info:
            undo_stack.undo_last(mutator)

        assert exc_info.value.document == "sync-2026-10-18.md"
        assert exc_info.value.line_number is None
        assert source.read_bytes() == moved

    def test_moved_line_deleted_by_hand(self, store, builder, undo_stack, mutator, write_note):
        source = write_note("a.md", "- [ ] Fix bug to-talk-alice\n- [x] Shipped release\n")
        store.create_document("sync")
        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])

        source.write_text(source.read_text().replace("- [x] Fix bug to-talk-alice\n", ""))

        with pytest.raises(UndoStepFailed) as exc_info:
            undo_stack.undo_last(mutator)

        assert exc_info.value.line_number == HEADER_LINES + 1
        # The completed task now on that line stays completed
        assert source.read_text().split("\n")[HEADER_LINES] == "- [x] Shipped release"

    def test_restores_line_with_several_checkboxes(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        write_note("a.md", "* - [x] old; - [ ] new to-talk-alice\n")
        store.create_document("sync")
        before = snapshot(notes_dir)

        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])
        undo_stack.undo_last(mutator)

        assert snapshot(notes_dir) == before

    def test_target_block_edited_after_move(self, store, builder, undo_stack, mutator, write_note, notes_dir):
        source = write_note("a.md", "- [ ] Fix bug to-talk-alice\n")
        store.create_document("sync")
        builder.relocate("alice", "sync-2026-10-18.md", scan_store(store)["alice"])

        target = notes_dir / "sync-2026-10-18.md"
        target.write_text(target.read_text().replace("- [ ] Fix bug\n", "- [ ] Fix bug (agreed: Friday)\n"))
        edited = target.read_bytes()
        moved = source.read_bytes()

        with pytest.raises(UndoStepFailed) as exc_info:
            undo_stack.undo_last(mutator)

        assert exc_info.value.document == "sync-2026-10-18.md"
        assert target.read_bytes() == edited
        assert source.read_bytes() == moved
