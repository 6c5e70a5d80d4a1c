"""Runtime settings assembled from CLI arguments and the environment.

There is no settings file; every value comes from the command line, an
environment variable, or a default below.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .listing import normalize_path

DEFAULT_STYLE = "monokai"
DEFAULT_PREVIEW_LINES = 12
LOG_DIR_ENV = "LAZYRUNNER_LOG_DIR"
NO_COLOR_ENV = "NO_COLOR"


@dataclass(frozen=True)
class RunnerConfig:
    root_dir: Path
    style: str = DEFAULT_STYLE
    no_color: bool = False
    preview_lines: int = DEFAULT_PREVIEW_LINES
    log_level: str | None = None
    log_dir: Path | None = None


def build_config(
    root_dir: Path,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    preview_lines: int = DEFAULT_PREVIEW_LINES,
    log_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunnerConfig:
    """Merge explicit options with environment overrides.

    ``NO_COLOR`` (any non-empty value) forces plain output, and
    ``LAZYRUNNER_LOG_DIR`` selects where log files go.
    """
    env = os.environ if environ is None else environ
    raw_log_dir = env.get(LOG_DIR_ENV, "").strip()
    return RunnerConfig(
        root_dir=normalize_path(root_dir),
        style=style.strip() or DEFAULT_STYLE,
        no_color=no_color or bool(env.get(NO_COLOR_ENV, "")),
        preview_lines=max(0, preview_lines),
        log_level=log_level,
        log_dir=Path(raw_log_dir) if raw_log_dir else None,
    )
