"""Main interactive event loop for the browser.

Reads one key per turn, applies exactly one transition, then redraws.
Feature work lives in the injected callbacks and the pure navigation module.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import navigation
from .input import read_key
from .keys import ACTION_CONFIRM, ACTION_DOWN, ACTION_QUIT, ACTION_RELOAD, ACTION_UP, KeyMap
from .listing import list_entries
from .state import ExecutionResult, NavigationState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerCallbacks:
    """Injected operations used by ``run_main_loop``.

    ``execute`` blocks until the child exits. ``redraw`` receives every state
    produced by a transition, including the post-run ``awaiting_ack`` one.
    """

    redraw: Callable[[NavigationState], None]
    execute: Callable[[Path], ExecutionResult]
    lister: navigation.Lister = list_entries


def handle_key(
    state: NavigationState,
    key: str,
    callbacks: ControllerCallbacks,
    keymap: KeyMap,
) -> tuple[NavigationState, bool]:
    """Apply one key to ``state``; returns ``(next_state, should_quit)``."""
    if state.awaiting_ack:
        return navigation.acknowledge(state, callbacks.lister), False

    action = keymap.action_for(key)
    if action == ACTION_QUIT:
        return state, True
    if action == ACTION_RELOAD:
        return navigation.reload(state, callbacks.lister), False
    if action == ACTION_UP:
        return navigation.move_selection(state, -1), False
    if action == ACTION_DOWN:
        return navigation.move_selection(state, 1), False
    if action == ACTION_CONFIRM:
        entry = state.selected_entry
        if entry is not None and entry.is_dir:
            return navigation.enter_directory(state, entry, callbacks.lister), False
        target = navigation.selected_file_path(state)
        if target is None:
            return state, False
        result = callbacks.execute(target)
        return navigation.mark_executed(state, result), False
    return state, False


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Fold CR, LF, and CRLF into a single ``ENTER`` token.

    Returns ``(key_or_None, skip_next_lf)``; ``None`` means drop this token.
    """
    if skip_next_lf and key == "ENTER_LF":
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def run_main_loop(
    state: NavigationState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: ControllerCallbacks,
    keymap: KeyMap | None = None,
) -> NavigationState:
    """Run the browser until a quit action or end of input; returns the final state."""
    keys = keymap if keymap is not None else KeyMap()
    skip_next_lf = False

    with terminal.raw_mode():
        callbacks.redraw(state)
        while True:
            try:
                raw_key = read_key(stdin_fd)
            except KeyboardInterrupt:
                raw_key = "CTRL_C"
            if raw_key == "":
                logger.info("input closed, leaving browser")
                break

            key, skip_next_lf = normalize_enter(raw_key, skip_next_lf)
            if key is None:
                continue

            state, should_quit = handle_key(state, key, callbacks, keys)
            if should_quit:
                break
            callbacks.redraw(state)
    return state
