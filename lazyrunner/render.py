"""Screen composition for the browser and for child-run framing.

Renderers are pure: they turn a ``NavigationState`` snapshot into text and
leave writing to the terminal controller.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass

from .ansi import clip_ansi_line
from .state import ExecutionResult, NavigationState

DIVIDER_WIDTH = 50
HEADER_ROWS = 2


@dataclass(frozen=True)
class Palette:
    """Semantic ANSI palette used by renderers."""

    header_path: str
    header_hint: str
    cursor: str
    selected: str
    directory: str
    file: str
    divider: str
    status: str
    error: str
    notice: str
    reset: str


DEFAULT_PALETTE = Palette(
    header_path="\033[36m",
    header_hint="\033[90m",
    cursor="\033[32m",
    selected="\033[1;32m",
    directory="\033[34m",
    file="\033[37m",
    divider="\033[90m",
    status="\033[33m",
    error="\033[31m",
    notice="\033[33m",
    reset="\033[0m",
)

PLAIN_PALETTE = Palette(*([""] * 11))


def palette_for(no_color: bool) -> Palette:
    return PLAIN_PALETTE if no_color else DEFAULT_PALETTE


def divider(palette: Palette, columns: int) -> str:
    return f"{palette.divider}{'─' * max(1, min(DIVIDER_WIDTH, columns))}{palette.reset}"


def visible_window(selected_idx: int, count: int, rows: int) -> tuple[int, int]:
    """Return ``[start, stop)`` of the entry slice that keeps the cursor on screen."""
    rows = max(1, rows)
    if count <= rows:
        return 0, count
    start = max(0, min(selected_idx - rows // 2, count - rows))
    return start, start + rows


def entry_row(name: str, is_dir: bool, selected: bool, palette: Palette) -> str:
    icon = "📂 " if is_dir else "📄 "
    if selected:
        return f"{palette.cursor}▶ {palette.selected}{icon}{name}{palette.reset}"
    color = palette.directory if is_dir else palette.file
    return f"  {color}{icon}{name}{palette.reset}"


def build_browser_lines(
    state: NavigationState,
    columns: int,
    rows: int,
    palette: Palette,
    hint_line: str,
    preview: list[str] | None = None,
) -> list[str]:
    """Compose header, entry list, optional preview, and status row."""
    lines = [
        f"{palette.header_path}📁 {state.current_dir}{palette.reset}  {palette.header_hint}{hint_line}{palette.reset}",
        "",
    ]
    preview_rows = list(preview or [])
    footer_rows = 1 + (len(preview_rows) + 1 if preview_rows else 0) + (1 if state.status_message else 0)
    list_rows = max(1, rows - HEADER_ROWS - footer_rows)

    if not state.entries:
        lines.append(f"  {palette.header_hint}(empty){palette.reset}")
    start, stop = visible_window(state.selected_idx, len(state.entries), list_rows)
    for idx in range(start, stop):
        entry = state.entries[idx]
        lines.append(entry_row(entry.name, entry.is_dir, idx == state.selected_idx, palette))

    lines.append("")
    lines.append(divider(palette, columns))
    if preview_rows:
        lines.extend(preview_rows)
        lines.append(divider(palette, columns))
    if state.status_message:
        lines.append(f"{palette.status}{state.status_message}{palette.reset}")

    return [clip_ansi_line(line, columns) if line else line for line in lines]


def render_browser(
    state: NavigationState,
    columns: int,
    rows: int,
    palette: Palette,
    hint_line: str,
    preview: list[str] | None = None,
) -> str:
    return "\n".join(build_browser_lines(state, columns, rows, palette, hint_line, preview)) + "\n"


def render_run_banner(name: str, palette: Palette, columns: int) -> str:
    """Header printed right before a child process takes the terminal."""
    return f"\n{palette.header_path}▶ Running: {name}{palette.reset}\n\n{divider(palette, columns)}\n\n"


def _exit_description(exit_status: int | None) -> str:
    # Negative statuses follow the subprocess convention for signal deaths.
    if exit_status is not None and exit_status < 0:
        try:
            name = signal.Signals(-exit_status).name
        except ValueError:
            name = f"signal {-exit_status}"
        return f"Terminated by {name}"
    return f"Exited with status {exit_status}"


def render_run_footer(result: ExecutionResult, palette: Palette, columns: int) -> str:
    """Trailer printed after the child exits, ending in the acknowledge prompt."""
    parts = ["\n"]
    if result.spawn_error is not None:
        parts.append(f"{palette.error}Failed to run:{palette.reset} {result.spawn_error}\n")
    elif not result.succeeded:
        parts.append(f"{palette.error}{_exit_description(result.exit_status)}{palette.reset}\n")
    parts.append(f"{divider(palette, columns)}\n")
    parts.append(f"{palette.notice}Press any key to return...{palette.reset}\n")
    return "".join(parts)
