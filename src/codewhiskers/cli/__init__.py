"""
Command line interface for codewhiskers.

- cli_group.py: main CLI group and shared helpers
- analysis.py: explain, functions, refactor, performance, trace commands
- profiling.py: profile command

codewhiskers/src/codewhiskers/cli/__init__.py
"""

import logging
import sys

from ..console_utils import print_error
from . import analysis, profiling  # noqa: F401  (registers commands)
from .cli_group import CodeWhiskersContext, cli

__all__ = ["cli", "main"]

logger = logging.getLogger(__name__)


def main() -> None:
    """Console script entry point."""
    try:
        cli(obj=CodeWhiskersContext(), prog_name="codewhiskers")
    except (RuntimeError, ValueError, OSError) as e:
        print_error(f"Unexpected error: {e}")
        logger.debug("Unhandled exception in CLI execution", exc_info=True)
        sys.exit(1)
