"""
Per-function behavior records.

codewhiskers/src/codewhiskers/behavior.py
"""

import logging
import re
from typing import List, Optional

from .complexity import ComplexityScorer
from .explanation import summarize_function
from .extraction import StructuralExtractor, extract_dependencies
from .models import FunctionBehavior, FunctionRecord, ReturnValue
from .patterns import PatternDetector

__all__ = ["FunctionBehaviorAnalyzer", "find_return_value"]

logger = logging.getLogger(__name__)

_RETURN_RE = re.compile(r"\breturn\s+([^;\n]+)")


def find_return_value(body: str) -> ReturnValue:
    """Describe the first ``return <expr>`` in ``body``.

    The expression counts as a plain variable when it has no spaces and
    does not open an object or array literal.
    """
    match = _RETURN_RE.search(body or "")
    if not match:
        return ReturnValue(exists=False)
    raw = match.group(1)
    value = raw.strip()
    is_variable = " " not in raw and not raw.startswith(("{", "["))
    return ReturnValue(exists=True, value=value, is_variable=is_variable)


class FunctionBehaviorAnalyzer:
    """Combines return, dependency, side-effect, idiom and complexity analysis
    for a single function body into one ``FunctionBehavior``."""

    def __init__(
        self,
        scorer: Optional[ComplexityScorer] = None,
        detector: Optional[PatternDetector] = None,
        extractor: Optional[StructuralExtractor] = None,
    ):
        self.scorer = scorer or ComplexityScorer()
        self.detector = detector or PatternDetector()
        self.extractor = extractor or StructuralExtractor()

    def analyze(self, record: FunctionRecord) -> FunctionBehavior:
        body = record.body or ""
        return_value = find_return_value(body)
        side_effects = tuple(self.detector.detect_side_effects(body))
        patterns = tuple(self.detector.detect_patterns(body))
        complexity = self.scorer.score_body(body)
        logger.debug(
            f"Analyzed function '{record.name}': complexity {complexity.score}, "
            f"{len(side_effects)} side effect(s), {len(patterns)} pattern(s)"
        )
        return FunctionBehavior(
            function=record,
            complexity=complexity,
            return_value=return_value,
            dependencies=tuple(extract_dependencies(body)),
            side_effects=side_effects,
            patterns=patterns,
            explanation=summarize_function(
                record.name, record.params, return_value, side_effects, patterns
            ),
        )

    def analyze_source(self, source_text: str, language: str) -> List[FunctionBehavior]:
        """Analyze every function found in ``source_text``, in source order.

        Raises:
            UnsupportedLanguageError: if ``language`` is not JavaScript or TypeScript.
        """
        return [self.analyze(record) for record in self.extractor.find_functions(source_text, language)]
