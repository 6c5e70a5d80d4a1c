"""Terminal control helpers for the browser session.

Owns the raw-mode lifecycle and the temporary hand-off to child processes.
Screen output goes straight to the stdout file descriptor.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CLEAR_SCREEN = b"\x1b[H\x1b[2J"


class TerminalController:
    """Switch the tty between raw key capture and its original cooked state."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._raw = False

    def enable_tui_mode(self) -> None:
        """Enter raw mode and hide the cursor."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, HIDE_CURSOR)
        self._raw = True

    def disable_tui_mode(self) -> None:
        """Show the cursor and restore the tty attributes saved at startup."""
        os.write(self.stdout_fd, SHOW_CURSOR)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._raw = False

    def clear_screen(self) -> None:
        os.write(self.stdout_fd, CLEAR_SCREEN)

    def write(self, text: str) -> None:
        # Raw mode disables output post-processing, so bare LF would not return the carriage.
        if self._raw:
            text = text.replace("\r\n", "\n").replace("\n", "\r\n")
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets the whole session with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Hand the terminal to a child process, restoring raw mode on every exit path."""
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()
