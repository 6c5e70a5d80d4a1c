"""Blocking script launcher.

Runs the interpreter for a selected script while the browser has temporarily
left raw mode. Launch failures come back as data instead of raising, so the
event loop can show them inline.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import subprocess
import sys
from collections.abc import Callable
from contextlib import AbstractContextManager
from pathlib import Path

from .listing import file_extension
from .state import ExecutionResult

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "{path}"

PLATFORM_WINDOWS = "windows"
PLATFORM_POSIX = "posix"

# (extension, platform family) -> argv template; ``{path}`` is the absolute script path.
COMMAND_TABLE: dict[tuple[str, str], tuple[str, ...]] = {
    (".ts", PLATFORM_POSIX): ("npx", "tsx", PATH_PLACEHOLDER),
    (".ts", PLATFORM_WINDOWS): ("cmd", "/c", "npx", "tsx", PATH_PLACEHOLDER),
    (".js", PLATFORM_POSIX): ("node", PATH_PLACEHOLDER),
    (".js", PLATFORM_WINDOWS): ("cmd", "/c", "node", PATH_PLACEHOLDER),
}


def platform_family(platform: str | None = None) -> str:
    """Map a ``sys.platform`` value onto a ``COMMAND_TABLE`` platform key."""
    value = sys.platform if platform is None else platform
    return PLATFORM_WINDOWS if value == "win32" else PLATFORM_POSIX


def resolve_command(
    path: Path,
    platform: str | None = None,
    table: dict[tuple[str, str], tuple[str, ...]] | None = None,
) -> tuple[str, ...] | None:
    """Return argv for running ``path``, or ``None`` when no interpreter is mapped."""
    lookup = COMMAND_TABLE if table is None else table
    template = lookup.get((file_extension(path.name), platform_family(platform)))
    if template is None:
        return None
    target = str(path)
    return tuple(target if part == PATH_PLACEHOLDER else part for part in template)


def run_file(
    path: Path,
    suspend_terminal: Callable[[], AbstractContextManager[object]] | None = None,
    platform: str | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> ExecutionResult:
    """Run ``path`` to completion with inherited stdio and environment.

    The child's working directory is the script's own directory.
    ``suspend_terminal`` brackets the child run; it is entered only when a
    command exists and is always exited, including when the spawn fails.
    An interrupt delivered while the child runs is reported as the child's
    SIGINT exit status rather than ending the browser.
    """
    target = path.resolve()
    command = resolve_command(target, platform)
    if command is None:
        message = f"No interpreter configured for {file_extension(target.name) or target.name!r}"
        logger.warning("%s (%s)", message, target)
        return ExecutionResult(command=(), spawn_error=message)

    suspend = suspend_terminal if suspend_terminal is not None else contextlib.nullcontext
    logger.info("running %s in %s", command, target.parent)
    with suspend():
        try:
            completed = runner(list(command), cwd=str(target.parent), check=False)
        except OSError as exc:
            logger.error("failed to start %s: %s", command[0], exc)
            return ExecutionResult(command=command, spawn_error=f"Failed to start {command[0]}: {exc}")
        except KeyboardInterrupt:
            # subprocess.run kills the child before re-raising the interrupt.
            logger.info("%s interrupted", target.name)
            return ExecutionResult(command=command, exit_status=-signal.SIGINT)

    logger.info("%s exited with status %s", target.name, completed.returncode)
    return ExecutionResult(command=command, exit_status=completed.returncode)
