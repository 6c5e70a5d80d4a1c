"""Width clipping for styled terminal rows.

Escape sequences pass through and take no columns, so a colored row can be
trimmed to the terminal width without losing its trailing reset.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def _cell_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns.

    Tabs are expanded to spaces. Escapes after the cut are kept so styles
    opened before it are still closed.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    pos = 0
    for match in [*ANSI_ESCAPE_RE.finditer(text), None]:
        end = match.start() if match is not None else len(text)
        for ch in text[pos:end]:
            if col >= max_cols:
                break
            if ch == "\t":
                width = TAB_STOP - col % TAB_STOP
                ch = " " * width
            else:
                width = _cell_width(ch)
            if col + width > max_cols:
                col = max_cols
                break
            out.append(ch)
            col += width
        if match is not None:
            out.append(match.group(0))
            pos = match.end()
    return "".join(out)
