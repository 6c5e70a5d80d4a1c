"""Pure navigation transitions over ``NavigationState``.

Every function takes the current state and returns the next one.
Directory reads go through an injected lister so tests can stub the filesystem.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from .errors import FilesystemError
from .listing import Entry, list_entries, normalize_path
from .state import MODE_AWAITING_ACK, MODE_BROWSING, ExecutionResult, NavigationState

Lister = Callable[[Path, Path], tuple[Entry, ...]]


def clamp_index(index: int, count: int) -> int:
    """Clamp ``index`` into ``[0, count - 1]``; empty lists clamp to ``0``."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def initial_state(root_dir: Path, lister: Lister = list_entries) -> NavigationState:
    """Build the startup state for ``root_dir``.

    Raises ``FilesystemError`` when the root itself cannot be listed.
    """
    root = normalize_path(root_dir)
    return NavigationState(root_dir=root, current_dir=root, entries=lister(root, root))


def move_selection(state: NavigationState, delta: int) -> NavigationState:
    """Move the cursor by ``delta`` rows, wrapping at both ends."""
    count = len(state.entries)
    if count == 0:
        return state
    return replace(state, selected_idx=(state.selected_idx + delta) % count, status_message="")


def _relist(
    state: NavigationState,
    directory: Path,
    lister: Lister,
    selected_idx: int | None,
) -> NavigationState:
    """Switch to ``directory`` with a fresh listing.

    ``selected_idx=None`` clamps the previous index instead of resetting it.
    A failed read keeps the previous directory and entries, with the error in
    the status line.
    """
    try:
        entries = lister(directory, state.root_dir)
    except FilesystemError as exc:
        return replace(
            state,
            mode=MODE_BROWSING,
            selected_idx=clamp_index(state.selected_idx, len(state.entries)),
            status_message=str(exc),
        )
    if selected_idx is None:
        selected_idx = clamp_index(state.selected_idx, len(entries))
    return replace(
        state,
        current_dir=directory,
        entries=entries,
        selected_idx=selected_idx,
        mode=MODE_BROWSING,
        status_message="",
    )


def reload(state: NavigationState, lister: Lister = list_entries) -> NavigationState:
    """Re-list the current directory and put the cursor back on the first row."""
    return _relist(state, state.current_dir, lister, selected_idx=0)


def target_directory(state: NavigationState, entry: Entry) -> Path:
    """Resolve the directory a directory ``entry`` navigates to."""
    if entry.is_parent:
        return normalize_path(state.current_dir.parent)
    return normalize_path(state.current_dir / entry.name)


def enter_directory(
    state: NavigationState,
    entry: Entry,
    lister: Lister = list_entries,
) -> NavigationState:
    """Descend into ``entry`` (or climb for ``..``); selection resets to 0."""
    return _relist(state, target_directory(state, entry), lister, selected_idx=0)


def selected_file_path(state: NavigationState) -> Path | None:
    """Absolute path of the selected entry when it is a runnable file."""
    entry = state.selected_entry
    if entry is None or entry.is_dir:
        return None
    return normalize_path(state.current_dir / entry.name)


def mark_executed(state: NavigationState, result: ExecutionResult) -> NavigationState:
    """Record a finished child run and wait for the user to acknowledge it."""
    return replace(state, mode=MODE_AWAITING_ACK, last_result=result, status_message="")


def acknowledge(state: NavigationState, lister: Lister = list_entries) -> NavigationState:
    """Return to browsing after a run, keeping the cursor as close as possible."""
    return _relist(state, state.current_dir, lister, selected_idx=None)
