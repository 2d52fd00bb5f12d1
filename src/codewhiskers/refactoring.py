"""
Refactoring suggestions for a whole snippet.

Four independent checks, reported in this order: high cognitive
complexity, deep indentation, repeated multi-line blocks and (for JSX
sources only) chained ``.then()`` calls. Every measure is lexical; nothing
here parses the code.

codewhiskers/src/codewhiskers/refactoring.py
"""

import logging
import re
from collections import Counter
from typing import List, Tuple

from .languages import is_react_tag, normalize_language
from .models import RefactoringOpportunity, Severity

__all__ = [
    "RefactoringAnalyzer",
    "cognitive_complexity",
    "branching_depth",
    "find_duplicated_blocks",
    "find_refactoring_opportunities",
]

logger = logging.getLogger(__name__)

COGNITIVE_COMPLEXITY_MAX = 15
BRANCHING_DEPTH_MAX = 3
DUPLICATE_MIN_LENGTH = 30
DUPLICATE_MAX_LINES = 5
EXCERPT_LENGTH = 50

_CONTROL_FLOW_RE = re.compile(
    r"\b(?:if|else|for|while|do|switch|case|catch|return|break|continue)\b"
)
_LOGICAL_RE = re.compile(r"&&|\|\||\?\.")
_FUNCTION_RE = re.compile(r"\bfunction\b|=>")
_TERNARY_RE = re.compile(r"\?(?!\.)")
_PROMISE_CHAIN_RE = re.compile(r"\.then\([^)]*\)\.then\(")


def cognitive_complexity(text: str) -> int:
    """Decision points plus a penalty of 2 for every function after the first.

    >>> cognitive_complexity("if (a && b) { return x ? 1 : 2; }")
    4
    """
    functions = len(_FUNCTION_RE.findall(text))
    return (
        len(_CONTROL_FLOW_RE.findall(text))
        + len(_LOGICAL_RE.findall(text))
        + max(functions - 1, 0) * 2
        + len(_TERNARY_RE.findall(text))
    )


def branching_depth(text: str) -> int:
    """Deepest indentation reached, counting two columns per level.

    Blank lines are ignored and a tab counts as one level.
    """
    depth = deepest = previous = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        expanded = line.expandtabs(2)
        indent = len(expanded) - len(expanded.lstrip())
        if indent > previous:
            depth += (indent - previous) // 2
        elif indent < previous:
            depth -= (previous - indent) // 2
        previous = indent
        deepest = max(deepest, depth)
    return deepest


def find_duplicated_blocks(
    text: str,
    min_length: int = DUPLICATE_MIN_LENGTH,
    max_lines: int = DUPLICATE_MAX_LINES,
) -> List[Tuple[str, int]]:
    """Runs of 2 to ``max_lines`` lines that occur more than once, with their counts.

    Runs that start or end on a blank line are skipped, and a block that only
    repeats as part of a longer repeated block is left out.
    """
    lines = text.split("\n")
    counts: Counter = Counter()
    for start in range(len(lines) - 1):
        for end in range(start + 1, min(start + max_lines, len(lines))):
            if not lines[start].strip() or not lines[end].strip():
                continue
            block = "\n".join(lines[start : end + 1]).strip()
            if len(block) >= min_length:
                counts[block] += 1

    repeated = [(block, count) for block, count in counts.items() if count > 1]
    return [
        (block, count)
        for block, count in repeated
        if not any(
            other != block and block in other and other_count == count
            for other, other_count in repeated
        )
    ]


def _excerpt(block: str) -> str:
    if len(block) > EXCERPT_LENGTH:
        return block[:EXCERPT_LENGTH] + "..."
    return block


class RefactoringAnalyzer:
    def __init__(
        self,
        complexity_max: int = COGNITIVE_COMPLEXITY_MAX,
        depth_max: int = BRANCHING_DEPTH_MAX,
    ):
        self.complexity_max = complexity_max
        self.depth_max = depth_max

    def analyze(self, source_text: str, language: str) -> List[RefactoringOpportunity]:
        """Refactoring opportunities in ``source_text``.

        ``language`` may be a JSX variant (``javascriptreact`` or
        ``typescriptreact``), which enables the promise chain check.

        Raises:
            UnsupportedLanguageError: if ``language`` is not JavaScript or TypeScript.
        """
        normalize_language(language)
        text = source_text or ""
        opportunities: List[RefactoringOpportunity] = []

        complexity = cognitive_complexity(text)
        if complexity > self.complexity_max:
            opportunities.append(
                RefactoringOpportunity(
                    type="high_complexity",
                    severity=Severity.HIGH,
                    description="Function has high cognitive complexity",
                    suggestion="Consider breaking down into smaller functions",
                    metric=complexity,
                )
            )

        depth = branching_depth(text)
        if depth > self.depth_max:
            opportunities.append(
                RefactoringOpportunity(
                    type="deep_nesting",
                    severity=Severity.MEDIUM,
                    description=f"Code has deep nesting (depth: {depth})",
                    suggestion="Refactor to reduce nesting using early returns or extraction",
                    metric=depth,
                )
            )

        for block, count in find_duplicated_blocks(text):
            opportunities.append(
                RefactoringOpportunity(
                    type="duplicated_code",
                    severity=Severity.MEDIUM,
                    description=f"Duplicated code pattern ({count} instances)",
                    suggestion="Extract to a reusable function or constant",
                    metric=count,
                    excerpt=_excerpt(block),
                )
            )

        if is_react_tag(language):
            chains = len(_PROMISE_CHAIN_RE.findall(text))
            if chains:
                opportunities.append(
                    RefactoringOpportunity(
                        type="promise_chaining",
                        severity=Severity.MEDIUM,
                        description="Multiple promise chain detected",
                        suggestion="Consider using async/await for better readability",
                        metric=chains,
                    )
                )

        logger.debug(
            f"Refactoring scan: complexity {complexity}, depth {depth}, "
            f"{len(opportunities)} opportunity(ies)"
        )
        return opportunities


_default_analyzer = RefactoringAnalyzer()


def find_refactoring_opportunities(source_text: str, language: str) -> List[RefactoringOpportunity]:
    return _default_analyzer.analyze(source_text, language)
