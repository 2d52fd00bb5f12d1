"""
Workspace skill profiling.

Files are tallied into an ``AggregationContext``; the profile is then
derived from that context alone, so the same metrics always produce the
same skill level, strengths, improvement areas and learning path.

codewhiskers/src/codewhiskers/workspace/profiler.py
"""

import logging
from typing import Iterable, List, Optional

from ..config import ProfilerSettings
from ..languages import Language
from ..models import LearningPathItem, SkillLevel, SourceFile, WorkspaceProfile
from .challenges import (
    CODE_COMPLEXITY,
    CODE_DOCUMENTATION,
    DEBUGGING_PRACTICES,
    MODERN_FEATURES,
    challenges_for,
    character_for,
    next_skill_level,
    stretch_area_for,
)
from .context import AggregationContext

__all__ = [
    "WorkspaceProfiler",
    "ADVANCED_IDIOMS",
    "ISSUE_IDIOMS",
    "STRENGTH_CLUSTERS",
    "skill_score",
    "skill_level_for",
    "identify_strengths",
    "identify_improvement_areas",
    "build_learning_path",
]

logger = logging.getLogger(__name__)

# Usage of these raises the skill score and counts as "modern" usage.
ADVANCED_IDIOMS = (
    "async_await",
    "destructuring",
    "arrow_functions",
    "list_comprehensions",
    "stream_api",
    "linq_queries",
)

ISSUE_IDIOMS = ("nested_callbacks", "long_functions", "debug_logging")

BEST_PRACTICE_BONUS = 5

STRENGTH_CLUSTERS = (
    ("Modern JavaScript", ("arrow_functions", "destructuring", "template_literals", "async_await")),
    ("React Development", ("react_hooks", "react_components")),
    ("Python Idioms", ("list_comprehensions", "decorators", "f_strings")),
    ("Java Modern Features", ("stream_api", "lambda_expressions")),
    ("C# Modern Features", ("linq_queries", "csharp_lambdas")),
)

LANGUAGE_STRENGTHS = 2


def skill_score(context: AggregationContext) -> float:
    """Advanced idiom counts, plus a bonus for good commenting, minus issue counts."""
    settings = context.settings
    score: float = sum(context.metric(name) for name in ADVANCED_IDIOMS)
    if context.comment_ratio > settings.comment_ratio_good:
        score += BEST_PRACTICE_BONUS
    score -= sum(context.metric(name) for name in ISSUE_IDIOMS)
    return score


def skill_level_for(score: float, settings: ProfilerSettings) -> SkillLevel:
    if score > settings.advanced_score:
        return SkillLevel.ADVANCED
    if score > settings.intermediate_score:
        return SkillLevel.INTERMEDIATE
    return SkillLevel.BEGINNER


def identify_strengths(context: AggregationContext) -> List[str]:
    settings = context.settings
    strengths = []
    ranked = sorted(
        (item for item in context.languages.items() if item[0] is not Language.OTHER),
        key=lambda item: -item[1],
    )
    for language, count in ranked[:LANGUAGE_STRENGTHS]:
        if count > settings.strength_min_files:
            strengths.append(f"{language.display_name} Development")

    for name, idioms in STRENGTH_CLUSTERS:
        if sum(context.metric(idiom) for idiom in idioms) > settings.strength_cluster_threshold:
            strengths.append(name)
    return strengths


def identify_improvement_areas(context: AggregationContext, level: SkillLevel) -> List[str]:
    settings = context.settings
    areas = []
    if (
        context.metric("long_functions") > settings.long_function_limit
        or context.metric("nested_callbacks") > settings.nested_callback_limit
    ):
        areas.append(CODE_COMPLEXITY)
    if context.metric("debug_logging") > settings.debug_logging_limit:
        areas.append(DEBUGGING_PRACTICES)
    if context.metric("line_count") and context.comment_ratio < settings.comment_ratio_min:
        areas.append(CODE_DOCUMENTATION)
    uses_modern = any(context.metric(name) > 0 for name in ADVANCED_IDIOMS)
    if not uses_modern and level is not SkillLevel.ADVANCED:
        areas.append(MODERN_FEATURES)
    return areas


def build_learning_path(
    areas: List[str], strengths: List[str], level: SkillLevel
) -> List[LearningPathItem]:
    """Every challenge for each improvement area at ``level``, then one stretch
    challenge from the next level for the strongest strength."""
    path = [
        LearningPathItem(
            area=area,
            challenge=challenge,
            difficulty=level.value,
            character=character_for(area),
        )
        for area in areas
        for challenge in challenges_for(area, level)
    ]

    if strengths:
        stretch_area = stretch_area_for(strengths[0])
        stretch_level = next_skill_level(level)
        candidates = challenges_for(stretch_area, stretch_level) if stretch_area else []
        if candidates:
            already = {(item.area, item.challenge) for item in path}
            if (stretch_area, candidates[0]) not in already:
                path.append(
                    LearningPathItem(
                        area=stretch_area,
                        challenge=candidates[0],
                        difficulty=stretch_level.value,
                        character=character_for(stretch_area),
                    )
                )
    return path


class WorkspaceProfiler:
    """Folds many files into one skill profile.

    Each run gets its own ``AggregationContext``; the profiler itself holds
    only settings, so one instance can serve any number of runs.
    """

    def __init__(self, settings: Optional[ProfilerSettings] = None):
        self.settings = settings or ProfilerSettings()

    def new_context(self) -> AggregationContext:
        return AggregationContext(settings=self.settings)

    def accumulate(
        self, files: Iterable[SourceFile], context: Optional[AggregationContext] = None
    ) -> AggregationContext:
        """Feed ``files`` into ``context`` one at a time and return it."""
        context = context if context is not None else self.new_context()
        for source in files:
            context.add_file(source)
        return context

    def derive_profile(self, context: AggregationContext) -> WorkspaceProfile:
        score = skill_score(context)
        level = skill_level_for(score, context.settings)
        strengths = identify_strengths(context)
        areas = identify_improvement_areas(context, level)
        path = build_learning_path(areas, strengths, level)
        logger.debug(
            f"Profile: score={score} level={level.value} strengths={strengths} areas={areas}"
        )
        return WorkspaceProfile(
            skill_level=level,
            strengths=strengths,
            areas_for_improvement=areas,
            learning_path=path,
            skill_score=score,
            languages=context.language_counts(),
        )

    def profile(
        self, files: Iterable[SourceFile], context: Optional[AggregationContext] = None
    ) -> WorkspaceProfile:
        context = self.accumulate(files, context)
        logger.info(
            f"Profiled {context.files_analyzed} file(s), skipped {len(context.skipped)}"
        )
        return self.derive_profile(context)
