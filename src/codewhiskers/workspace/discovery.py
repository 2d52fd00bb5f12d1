"""
File enumeration for workspace profiling.

Walks directory trees, skips ignored directories, and yields
``SourceFile`` items for code files. Read failures become
``content=None`` items so the profiler can record and skip them.

codewhiskers/src/codewhiskers/workspace/discovery.py
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..config import ProfilerSettings
from ..languages import is_code_file
from ..models import SourceFile

__all__ = ["iter_source_files", "collect_source_files", "read_source_file"]

logger = logging.getLogger(__name__)


def read_source_file(path: Path) -> SourceFile:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path}: {e}")
        content = None
    return SourceFile(path=str(path), content=content)


def iter_source_files(
    root: Path, settings: Optional[ProfilerSettings] = None
) -> Iterator[SourceFile]:
    """Yield every code file under ``root`` in sorted, depth-first order.

    Args:
    root: Directory to walk.
    settings: Supplies ``ignore_dirs``; defaults are used when omitted.
    """
    settings = settings or ProfilerSettings()
    ignored = set(settings.ignore_dirs)

    def _on_error(error: OSError) -> None:
        logger.debug(f"Could not list {error.filename}: {error}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if is_code_file(path):
                yield read_source_file(path)


def collect_source_files(
    paths: Iterable[Path], settings: Optional[ProfilerSettings] = None
) -> Iterator[SourceFile]:
    """Yield source files for a mix of file and directory paths.

    Explicit file arguments are always yielded, even without a known
    extension; they are tallied as ``Other``.
    """
    for path in paths:
        if path.is_dir():
            yield from iter_source_files(path, settings)
        else:
            yield read_source_file(path)
