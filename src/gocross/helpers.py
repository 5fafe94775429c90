"""Shared helpers for gocross (project path, naming, duration formatting)."""

from __future__ import annotations

import os
import re
from pathlib import Path

from gocross.errors import ProjectNameError

# --- Path ---


def resolve_project_dir(raw: str | os.PathLike[str] | None) -> Path:
    """Absolute project directory from the positional argument; "", "." and None mean cwd."""
    try:
        if raw is None or str(raw) in ("", "."):
            return Path.cwd()
        return Path(os.path.abspath(raw))
    except OSError as e:
        msg = f"get wd: {e}"
        raise ProjectNameError(msg) from e


def project_name(path: str | os.PathLike[str]) -> str:
    """Base name of path ("." = cwd). Accepts both / and \\ separators."""
    p = str(path)
    if p == ".":
        try:
            p = os.getcwd()
        except OSError as e:
            msg = f"project name: {e}"
            raise ProjectNameError(msg) from e
    parts = [s for s in re.split(r"[\\/]+", p) if s]
    if not parts:
        msg = f"project name: cannot derive a name from {str(path)!r}"
        raise ProjectNameError(msg)
    return parts[-1]


# --- Formatting ---


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    m, s = divmod(int(seconds), 60)
    return f"{m}m{s:02d}s"
