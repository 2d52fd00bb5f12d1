"""
Filesystem helpers for locating project configuration.

codewhiskers/src/codewhiskers/filesystem.py
"""

import logging
from pathlib import Path
from typing import Optional

__all__ = ["walk_up_for_config", "find_project_root"]

logger = logging.getLogger(__name__)

_ROOT_MARKERS = ("pyproject.toml", "package.json", ".git")


def walk_up_for_config(start_path: Path) -> Optional[Path]:
    """Return the nearest directory at or above ``start_path`` holding a pyproject.toml."""
    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    for candidate in [current] + list(current.parents):
        if (candidate / "pyproject.toml").is_file():
            logger.debug(f"Found pyproject.toml in {candidate}")
            return candidate
    return None


def find_project_root(start_path: Path) -> Optional[Path]:
    """Return the nearest directory that looks like a project root.

    A project root holds a pyproject.toml, a package.json or a .git directory.
    """
    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    for candidate in [current] + list(current.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return None
