from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        # Not a checkout, or git is not installed
        return None


def get_version() -> str:
    try:
        return importlib.metadata.version("plume")
    except importlib.metadata.PackageNotFoundError:
        from . import __version__
        return __version__


def get_commit() -> Optional[str]:
    """Short commit hash when running from a git checkout."""
    root = Path(__file__).resolve().parent.parent
    if not (root / ".git").exists():
        return None
    return _run_git(["rev-parse", "--short", "HEAD"], cwd=root)


def get_version_string() -> str:
    commit = get_commit()
    if commit:
        return f"plume {get_version()} ({commit})"
    return f"plume {get_version()}"
