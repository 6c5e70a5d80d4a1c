"""Tests for pure navigation transitions.

Uses an in-memory lister so cursor, traversal, and reload rules can be
checked without touching the filesystem.
"""

from __future__ import annotations

import unittest
from dataclasses import replace
from pathlib import Path

from lazyrunner import navigation
from lazyrunner.errors import FilesystemError
from lazyrunner.listing import PARENT_ENTRY, Entry
from lazyrunner.state import MODE_AWAITING_ACK, MODE_BROWSING, ExecutionResult, NavigationState

ROOT = Path("/proj")


class _FakeLister:
    """Serve listings from a ``{directory: entries}`` table."""

    def __init__(self, listings: dict[Path, tuple[Entry, ...]]) -> None:
        self.listings = listings
        self.calls: list[Path] = []

    def __call__(self, directory: Path, root_dir: Path) -> tuple[Entry, ...]:
        self.calls.append(directory)
        if directory not in self.listings:
            raise FilesystemError(directory, "No such file or directory")
        entries = self.listings[directory]
        if directory != root_dir:
            return (PARENT_ENTRY, *entries)
        return entries


def _files(*names: str) -> tuple[Entry, ...]:
    return tuple(Entry(name, False) for name in names)


def _project_lister() -> _FakeLister:
    return _FakeLister(
        {
            ROOT: (Entry("sub", True), Entry("a.ts", False)),
            ROOT / "sub": _files("b.js"),
        }
    )


class MoveSelectionTests(unittest.TestCase):
    def test_up_from_first_row_wraps_to_last_for_every_size(self) -> None:
        for count in range(1, 6):
            state = NavigationState(ROOT, ROOT, _files(*[f"f{i}.ts" for i in range(count)]))
            self.assertEqual(navigation.move_selection(state, -1).selected_idx, count - 1)

    def test_down_from_last_row_wraps_to_first_for_every_size(self) -> None:
        for count in range(1, 6):
            entries = _files(*[f"f{i}.ts" for i in range(count)])
            state = NavigationState(ROOT, ROOT, entries, selected_idx=count - 1)
            self.assertEqual(navigation.move_selection(state, 1).selected_idx, 0)

    def test_move_in_middle_steps_by_one(self) -> None:
        state = NavigationState(ROOT, ROOT, _files("a.ts", "b.ts", "c.ts"), selected_idx=1)
        self.assertEqual(navigation.move_selection(state, 1).selected_idx, 2)
        self.assertEqual(navigation.move_selection(state, -1).selected_idx, 0)

    def test_move_with_no_entries_is_a_no_op(self) -> None:
        state = NavigationState(ROOT, ROOT, ())
        self.assertIs(navigation.move_selection(state, 1), state)

    def test_move_clears_status_message(self) -> None:
        state = NavigationState(ROOT, ROOT, _files("a.ts", "b.ts"), status_message="stale")
        self.assertEqual(navigation.move_selection(state, 1).status_message, "")


class TraversalTests(unittest.TestCase):
    def test_initial_state_lists_root_in_browsing_mode(self) -> None:
        lister = _project_lister()
        state = navigation.initial_state(ROOT, lister)

        self.assertEqual(state.root_dir, ROOT)
        self.assertEqual(state.current_dir, ROOT)
        self.assertEqual([entry.name for entry in state.entries], ["sub", "a.ts"])
        self.assertEqual(state.selected_idx, 0)
        self.assertEqual(state.mode, MODE_BROWSING)

    def test_initial_state_propagates_root_listing_failure(self) -> None:
        with self.assertRaises(FilesystemError):
            navigation.initial_state(Path("/missing"), _FakeLister({}))

    def test_enter_child_then_parent_resets_selection_each_time(self) -> None:
        lister = _project_lister()
        state = navigation.initial_state(ROOT, lister)

        inside = navigation.enter_directory(state, state.entries[0], lister)
        self.assertEqual(inside.current_dir, ROOT / "sub")
        self.assertEqual([entry.name for entry in inside.entries], ["..", "b.js"])
        self.assertEqual(inside.selected_idx, 0)

        moved = navigation.move_selection(inside, 1)
        back = navigation.enter_directory(moved, PARENT_ENTRY, lister)
        self.assertEqual(back.current_dir, ROOT)
        self.assertEqual([entry.name for entry in back.entries], ["sub", "a.ts"])
        self.assertEqual(back.selected_idx, 0)

        again = navigation.enter_directory(navigation.move_selection(back, 1), Entry("sub", True), lister)
        self.assertEqual(again.current_dir, ROOT / "sub")
        self.assertEqual(again.selected_idx, 0)

    def test_failed_traversal_stays_in_current_directory(self) -> None:
        lister = _FakeLister({ROOT: (Entry("locked", True), Entry("a.ts", False))})
        state = replace(navigation.initial_state(ROOT, lister), selected_idx=1)

        after = navigation.enter_directory(state, Entry("locked", True), lister)

        self.assertEqual(after.current_dir, ROOT)
        self.assertEqual(after.entries, state.entries)
        self.assertEqual(after.selected_idx, 1)
        self.assertIn("/proj/locked", after.status_message)

    def test_target_directory_for_parent_is_os_parent(self) -> None:
        state = NavigationState(ROOT, ROOT / "a" / "b", ())
        self.assertEqual(navigation.target_directory(state, PARENT_ENTRY), ROOT / "a")
        self.assertEqual(navigation.target_directory(state, Entry("c", True)), ROOT / "a" / "b" / "c")


class ReloadTests(unittest.TestCase):
    def test_reload_always_resets_selection(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts", "b.ts", "c.ts")})
        state = replace(navigation.initial_state(ROOT, lister), selected_idx=2)

        reloaded = navigation.reload(state, lister)

        self.assertEqual(reloaded.selected_idx, 0)
        self.assertEqual(lister.calls, [ROOT, ROOT])

    def test_reload_picks_up_new_entries(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts")})
        state = navigation.initial_state(ROOT, lister)
        lister.listings[ROOT] = _files("a.ts", "b.ts")

        self.assertEqual(len(navigation.reload(state, lister).entries), 2)

    def test_reload_failure_keeps_previous_listing_with_status(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts", "b.ts")})
        state = replace(navigation.initial_state(ROOT, lister), selected_idx=1)
        del lister.listings[ROOT]

        reloaded = navigation.reload(state, lister)

        self.assertEqual(reloaded.entries, state.entries)
        self.assertEqual(reloaded.selected_idx, 1)
        self.assertTrue(reloaded.status_message.startswith("Cannot read directory"))


class ExecutionCycleTests(unittest.TestCase):
    def test_selected_file_path_only_for_files(self) -> None:
        state = NavigationState(ROOT, ROOT, (Entry("sub", True), Entry("a.ts", False)))
        self.assertIsNone(navigation.selected_file_path(state))
        self.assertEqual(navigation.selected_file_path(replace(state, selected_idx=1)), ROOT / "a.ts")

    def test_mark_executed_enters_awaiting_ack_with_result(self) -> None:
        result = ExecutionResult(command=("node", "/proj/a.js"), exit_status=2)
        state = navigation.mark_executed(NavigationState(ROOT, ROOT, _files("a.js")), result)

        self.assertEqual(state.mode, MODE_AWAITING_ACK)
        self.assertTrue(state.awaiting_ack)
        self.assertIs(state.last_result, result)

    def test_acknowledge_clamps_selection_when_entries_shrink(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts", "b.ts", "c.ts", "d.ts")})
        state = replace(navigation.initial_state(ROOT, lister), selected_idx=3, mode=MODE_AWAITING_ACK)
        lister.listings[ROOT] = _files("a.ts", "b.ts")

        after = navigation.acknowledge(state, lister)

        self.assertEqual(after.mode, MODE_BROWSING)
        self.assertEqual(after.selected_idx, 1)

    def test_acknowledge_keeps_selection_when_still_valid(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts", "b.ts", "c.ts")})
        state = replace(navigation.initial_state(ROOT, lister), selected_idx=2, mode=MODE_AWAITING_ACK)

        self.assertEqual(navigation.acknowledge(state, lister).selected_idx, 2)

    def test_acknowledge_with_unreadable_directory_returns_to_browsing(self) -> None:
        lister = _FakeLister({ROOT: _files("a.ts")})
        state = replace(navigation.initial_state(ROOT, lister), mode=MODE_AWAITING_ACK)
        del lister.listings[ROOT]

        after = navigation.acknowledge(state, lister)

        self.assertEqual(after.mode, MODE_BROWSING)
        self.assertEqual(after.entries, state.entries)
        self.assertNotEqual(after.status_message, "")


class ClampIndexTests(unittest.TestCase):
    def test_clamp_index_bounds(self) -> None:
        self.assertEqual(navigation.clamp_index(5, 3), 2)
        self.assertEqual(navigation.clamp_index(-1, 3), 0)
        self.assertEqual(navigation.clamp_index(1, 3), 1)
        self.assertEqual(navigation.clamp_index(4, 0), 0)


if __name__ == "__main__":
    unittest.main()
