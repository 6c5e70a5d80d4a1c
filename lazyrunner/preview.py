"""Selected-file preview: loading, sanitization, and syntax highlighting.

Preview failures never propagate; an unreadable file renders as a placeholder.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

UNREADABLE_PLACEHOLDER = "(unable to read file)"
DEFAULT_STYLE = "monokai"
PREVIEW_READ_LIMIT_BYTES = 64 * 1024

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def decode_bytes(data: bytes) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Show control bytes as ``\\xNN`` so a preview cannot drive the terminal."""
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


def read_head(path: Path, max_lines: int) -> list[str] | None:
    """Return up to ``max_lines`` sanitized lines, or ``None`` when unreadable."""
    try:
        with path.open("rb") as handle:
            data = handle.read(PREVIEW_READ_LIMIT_BYTES)
    except OSError as exc:
        logger.debug("preview read failed for %s: %s", path, exc)
        return None
    text = sanitize_terminal_text(decode_bytes(data)).replace("\r\n", "\n")
    return text.split("\n")[:max_lines]


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return TerminalFormatter(style=style)


def highlight_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Colorize ``lines`` with the Pygments lexer chosen from ``path``'s name."""
    source = "\n".join(lines)
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = pygments_highlight(source, lexer, _formatter_for_style(style))
    out = rendered.rstrip("\n").split("\n")
    out.extend([""] * (len(lines) - len(out)))
    return out[: len(lines)]


def preview_lines(
    path: Path,
    max_lines: int,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[str]:
    """Build the preview rows for ``path``."""
    if max_lines <= 0:
        return []
    lines = read_head(path, max_lines)
    if lines is None:
        return [UNREADABLE_PLACEHOLDER]
    if no_color:
        return lines
    return highlight_lines(lines, path, style)
