"""
Caller-owned aggregation state for one profiling run.

codewhiskers/src/codewhiskers/workspace/context.py
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import ProfilerSettings
from ..languages import Language, language_of
from ..models import SourceFile
from .tallies import tally_file

__all__ = ["AggregationContext"]

logger = logging.getLogger(__name__)


@dataclass
class AggregationContext:
    """Running language counts and idiom metrics for a single profiling run.

    Build a fresh context per run and feed it files one at a time; it is not
    safe to share between concurrent writers.
    """

    settings: ProfilerSettings = field(default_factory=ProfilerSettings)
    languages: Counter = field(default_factory=Counter)
    metrics: Counter = field(default_factory=Counter)
    files_analyzed: int = 0
    skipped: List[str] = field(default_factory=list)

    def add_file(self, source: SourceFile) -> bool:
        """Tally one file. Returns False when the file was skipped."""
        if source.content is None:
            logger.debug(f"Skipping unreadable file {source.path}")
            self.skipped.append(source.path)
            return False

        language = language_of(source.path)
        try:
            counts = tally_file(source.content, language, self.settings)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Could not tally {source.path}: {e}")
            self.skipped.append(source.path)
            return False

        self.languages[language] += 1
        self.metrics.update(counts)
        self.files_analyzed += 1
        logger.debug(f"Tallied {source.path} as {language.display_name}")
        return True

    def metric(self, name: str) -> int:
        return self.metrics.get(name, 0)

    @property
    def comment_ratio(self) -> float:
        lines = self.metric("line_count")
        if not lines:
            return 0.0
        return self.metric("comment_lines") / lines

    def language_counts(self) -> Dict[str, int]:
        """Display name -> file count, most used first."""
        ranked = sorted(self.languages.items(), key=lambda item: -item[1])
        return {language.display_name: count for language, count in ranked}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_analyzed": self.files_analyzed,
            "skipped": list(self.skipped),
            "languages": self.language_counts(),
            "metrics": dict(sorted(self.metrics.items())),
            "comment_ratio": round(self.comment_ratio, 4),
        }

    @classmethod
    def from_metrics(
        cls,
        metrics: Dict[str, int],
        languages: Optional[Dict[Language, int]] = None,
        settings: Optional[ProfilerSettings] = None,
    ) -> "AggregationContext":
        """Build a context from already-aggregated counts."""
        return cls(
            settings=settings or ProfilerSettings(),
            languages=Counter(languages or {}),
            metrics=Counter(metrics),
            files_analyzed=sum((languages or {}).values()),
        )
