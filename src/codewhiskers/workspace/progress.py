"""
Learning path progress helpers.

These operate on a profile owned by the caller; ``completed`` is the only
field they change.

codewhiskers/src/codewhiskers/workspace/progress.py
"""

from typing import Optional

from ..models import LearningPathItem, WorkspaceProfile

__all__ = ["mark_completed", "next_incomplete", "completion_ratio"]


def mark_completed(profile: WorkspaceProfile, area: str, challenge: str) -> bool:
    """Flag the matching path item as completed. Returns False if none matches."""
    for item in profile.learning_path:
        if item.area == area and item.challenge == challenge:
            item.completed = True
            return True
    return False


def next_incomplete(profile: WorkspaceProfile) -> Optional[LearningPathItem]:
    return next((item for item in profile.learning_path if not item.completed), None)


def completion_ratio(profile: WorkspaceProfile) -> float:
    if not profile.learning_path:
        return 1.0
    done = sum(1 for item in profile.learning_path if item.completed)
    return done / len(profile.learning_path)
