"""
Workspace profiling: per-language idiom tallies folded into a skill profile
and a learning path.

codewhiskers/src/codewhiskers/workspace/__init__.py
"""

from .context import AggregationContext
from .discovery import collect_source_files, iter_source_files
from .profiler import WorkspaceProfiler
from .progress import completion_ratio, mark_completed, next_incomplete

__all__ = [
    "AggregationContext",
    "WorkspaceProfiler",
    "iter_source_files",
    "collect_source_files",
    "mark_completed",
    "next_incomplete",
    "completion_ratio",
]
