from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

from .constants import EditorConstants


def get_version() -> str:
    """Installed distribution version, or the built-in one when running from a checkout."""
    try:
        return importlib.metadata.version("quill")
    except importlib.metadata.PackageNotFoundError:
        return EditorConstants.VERSION


def _git_commit() -> Optional[str]:
    here = Path(__file__).resolve().parent
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], cwd=str(here), stderr=subprocess.DEVNULL
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    commit = _git_commit()
    version = get_version()
    return f"quill {version} ({commit})" if commit else f"quill {version}"
