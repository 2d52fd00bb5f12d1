"""
Weighted complexity scoring.

Two entry points share one pair of thresholds: ``score_structure`` weighs a
full structural inventory, ``score_body`` counts constructs directly in a
single function body. Scores may be fractional; buckets are inclusive on
the lower side.

codewhiskers/src/codewhiskers/complexity.py
"""

import logging
import re
from typing import Optional

from .config import ComplexityThresholds
from .models import ComplexityLevel, ComplexityResult, StructuralInventory

__all__ = ["ComplexityScorer", "STRUCTURE_WEIGHTS", "BODY_WEIGHTS"]

logger = logging.getLogger(__name__)

STRUCTURE_WEIGHTS = {
    "functions": 2.0,
    "classes": 3.0,
    "loops": 2.0,
    "conditionals": 1.0,
    "variables": 0.5,
}

BODY_WEIGHTS = {
    "loops": 2.0,
    "conditionals": 1.0,
    "functions": 1.0,
}

_BODY_LOOP_RE = re.compile(r"\bfor\s*\(|\bwhile\s*\(|\bdo\s*\{")
# same conditional kinds the structural inventory counts
_BODY_CONDITIONAL_RE = re.compile(r"\bif\s*\(|\bswitch\s*\(")
_BODY_FUNCTION_RE = re.compile(r"\bfunction\s+[\w$]+\s*\(|=>\s*\{")


class ComplexityScorer:
    """Scores inventories and function bodies and buckets the result.

    >>> scorer = ComplexityScorer()
    >>> scorer.classify(3).value
    'low'
    >>> scorer.classify(3.5).value
    'medium'
    """

    def __init__(self, thresholds: Optional[ComplexityThresholds] = None):
        self.thresholds = thresholds or ComplexityThresholds()

    def classify(self, score: float) -> ComplexityLevel:
        if score <= self.thresholds.low_max:
            return ComplexityLevel.LOW
        if score <= self.thresholds.medium_max:
            return ComplexityLevel.MEDIUM
        return ComplexityLevel.HIGH

    def score_structure(self, inventory: StructuralInventory) -> ComplexityResult:
        counts = inventory.counts()
        score = sum(counts[category] * weight for category, weight in STRUCTURE_WEIGHTS.items())
        logger.debug(f"Structure score {score} from {counts}")
        return ComplexityResult(level=self.classify(score), score=score)

    def score_body(self, text: str) -> ComplexityResult:
        """Score a single function body by counting constructs in place."""
        text = text or ""
        counts = {
            "loops": len(_BODY_LOOP_RE.findall(text)),
            "conditionals": len(_BODY_CONDITIONAL_RE.findall(text)),
            "functions": len(_BODY_FUNCTION_RE.findall(text)),
        }
        score = sum(counts[category] * weight for category, weight in BODY_WEIGHTS.items())
        return ComplexityResult(level=self.classify(score), score=score)
