"""Browser bootstrap: initial listing, terminal wiring, and loop startup."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

from . import navigation
from .config import RunnerConfig
from .controller import ControllerCallbacks, run_main_loop
from .errors import FilesystemError
from .keys import KeyMap
from .launcher import run_file
from .listing import Entry
from .preview import preview_lines
from .render import palette_for, render_browser, render_run_banner, render_run_footer
from .state import ExecutionResult, NavigationState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def format_listing(entries: tuple[Entry, ...]) -> str:
    """Plain one-name-per-line listing; directories get a trailing ``/``."""
    return "".join(f"{entry.name}/\n" if entry.is_dir else f"{entry.name}\n" for entry in entries)


def load_initial_state(root_dir: Path) -> NavigationState:
    """List the root or exit with a message when it cannot be read."""
    try:
        return navigation.initial_state(root_dir)
    except FilesystemError as exc:
        raise SystemExit(str(exc)) from exc


def run_browser(config: RunnerConfig, list_only: bool = False) -> None:
    """Initialize browser state, wire the terminal, and run the event loop.

    Falls back to printing the listing when ``list_only`` is set or stdin is
    not a terminal. An empty root prints a notice and returns normally.
    """
    state = load_initial_state(config.root_dir)
    if not state.entries:
        sys.stdout.write(f"No .ts / .js files found in: {state.root_dir}\n")
        return

    if list_only or not os.isatty(sys.stdin.fileno()):
        sys.stdout.write(format_listing(state.entries))
        return

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    palette = palette_for(config.no_color)
    keymap = KeyMap()
    hint_line = keymap.hint_line()

    def redraw(current: NavigationState) -> None:
        """Repaint the browser, or print the run trailer while awaiting a key."""
        term = shutil.get_terminal_size((80, 24))
        if current.awaiting_ack:
            if current.last_result is not None:
                terminal.write(render_run_footer(current.last_result, palette, term.columns))
            return

        preview: list[str] | None = None
        target = navigation.selected_file_path(current)
        if target is not None and config.preview_lines > 0:
            preview = preview_lines(target, config.preview_lines, config.style, config.no_color)
        terminal.clear_screen()
        terminal.write(render_browser(current, term.columns, term.lines, palette, hint_line, preview))

    def execute(target: Path) -> ExecutionResult:
        term = shutil.get_terminal_size((80, 24))
        terminal.clear_screen()
        terminal.write(render_run_banner(target.name, palette, term.columns))
        return run_file(target, suspend_terminal=terminal.suspended)

    logger.info("browsing %s", state.root_dir)
    run_main_loop(
        state,
        terminal,
        stdin_fd,
        ControllerCallbacks(redraw=redraw, execute=execute),
        keymap,
    )
    terminal.clear_screen()
