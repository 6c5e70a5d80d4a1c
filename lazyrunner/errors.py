"""Exception types raised by lazyrunner domain code."""

from __future__ import annotations

from pathlib import Path


class LazyRunnerError(Exception):
    """Base class for failures lazyrunner reports to the user."""


class FilesystemError(LazyRunnerError):
    """A directory could not be listed."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read directory {path}: {detail}")


def wrap_os_error(path: Path, error: OSError) -> FilesystemError:
    """Convert a raw ``OSError`` into a ``FilesystemError`` for ``path``."""
    detail = error.strerror or str(error)
    return FilesystemError(path, detail)
