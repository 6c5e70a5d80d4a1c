"""Directory listing for the browser pane.

Produces the ordered, filtered entry snapshot shown for one directory.
Only subdirectories and runnable script files are ever listed.
"""

from __future__ import annotations

import locale
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import wrap_os_error

logger = logging.getLogger(__name__)

RECOGNIZED_EXTENSIONS: tuple[str, ...] = (".ts", ".js")
HIDDEN_PREFIX = "."
PARENT_NAME = ".."


@dataclass(frozen=True)
class Entry:
    """One navigable row: a directory, the parent marker, or a script file."""

    name: str
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.is_dir and self.name == PARENT_NAME


PARENT_ENTRY = Entry(PARENT_NAME, True)


def normalize_path(path: Path) -> Path:
    """Return absolute, normalized ``path`` without touching the filesystem."""
    return Path(os.path.normpath(os.path.abspath(path)))


def file_extension(name: str) -> str:
    """Return the case-sensitive suffix after the last ``.``, including the dot."""
    return os.path.splitext(name)[1]


def is_recognized_file(name: str) -> bool:
    return file_extension(name) in RECOGNIZED_EXTENSIONS


def _collation_key(name: str) -> tuple[str, str]:
    return (locale.strxfrm(name.casefold()), name)


def list_entries(directory: Path, root_dir: Path) -> tuple[Entry, ...]:
    """List navigable entries of ``directory``.

    Order is the parent marker (only below ``root_dir``), then directories,
    then recognized files, each group sorted by locale-aware name collation.
    Hidden directories, symlinks, and non-script files are skipped entirely.

    Raises ``FilesystemError`` when ``directory`` cannot be scanned.
    """
    dir_names: list[str] = []
    file_names: list[str] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    is_file = not is_dir and child.is_file(follow_symlinks=False)
                except OSError:
                    continue
                if is_dir:
                    if not name.startswith(HIDDEN_PREFIX):
                        dir_names.append(name)
                elif is_file and is_recognized_file(name):
                    file_names.append(name)
    except OSError as exc:
        logger.warning("listing failed for %s: %s", directory, exc)
        raise wrap_os_error(directory, exc) from exc

    dir_names.sort(key=_collation_key)
    file_names.sort(key=_collation_key)

    entries: list[Entry] = []
    if normalize_path(directory) != normalize_path(root_dir):
        entries.append(PARENT_ENTRY)
    entries.extend(Entry(name, True) for name in dir_names)
    entries.extend(Entry(name, False) for name in file_names)
    return tuple(entries)
