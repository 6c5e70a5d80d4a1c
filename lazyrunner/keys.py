"""Key-token to browsing-action mapping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

ACTION_UP = "up"
ACTION_DOWN = "down"
ACTION_CONFIRM = "confirm"
ACTION_RELOAD = "reload"
ACTION_QUIT = "quit"


@dataclass(frozen=True)
class KeyBinding:
    """One action reachable from any of ``keys``."""

    keys: tuple[str, ...]
    action: str
    hint: str = ""


BROWSING_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("UP", "k"), ACTION_UP, "↑↓ move"),
    KeyBinding(("DOWN", "j"), ACTION_DOWN),
    KeyBinding(("ENTER",), ACTION_CONFIRM, "Enter open/run"),
    KeyBinding(("r", "R"), ACTION_RELOAD, "r reload"),
    KeyBinding(("q", "CTRL_C"), ACTION_QUIT, "q quit"),
)


class KeyMap:
    """Exact-match lookup from key tokens to action names."""

    def __init__(self, bindings: Iterable[KeyBinding] = BROWSING_BINDINGS) -> None:
        self.bindings = tuple(bindings)
        self._actions: dict[str, str] = {}
        for binding in self.bindings:
            for key in binding.keys:
                self._actions[key] = binding.action

    def action_for(self, key: str) -> str | None:
        return self._actions.get(key)

    def hint_line(self) -> str:
        """Compact ``[a | b | c]`` legend built from bindings that carry hints."""
        hints = [binding.hint for binding in self.bindings if binding.hint]
        return "[" + " | ".join(hints) + "]"
