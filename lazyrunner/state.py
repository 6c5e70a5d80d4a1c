from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .listing import Entry

MODE_BROWSING = "browsing"
MODE_AWAITING_ACK = "awaiting_ack"


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one blocking child run.

    ``exit_status`` is ``None`` when the interpreter never started, in which
    case ``spawn_error`` carries the reason.
    """

    command: tuple[str, ...]
    exit_status: int | None = None
    spawn_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.spawn_error is None and self.exit_status == 0


@dataclass(frozen=True)
class NavigationState:
    root_dir: Path
    current_dir: Path
    entries: tuple[Entry, ...]
    selected_idx: int = 0
    mode: str = MODE_BROWSING
    status_message: str = ""
    last_result: ExecutionResult | None = None

    @property
    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_idx < len(self.entries):
            return self.entries[self.selected_idx]
        return None

    @property
    def awaiting_ack(self) -> bool:
        return self.mode == MODE_AWAITING_ACK
