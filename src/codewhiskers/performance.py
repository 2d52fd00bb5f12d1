"""
Performance bottleneck detection.

A fixed table of regex rules is matched against the whole snippet; every
match becomes a ``PerformanceIssue`` that points at its line. TypeScript
adds a type assertion rule and JSX sources add React rules. A few
file-wide metrics (nested loops, oversized literals, long parameter
lists, unmemoized components) are appended after the rule hits.

codewhiskers/src/codewhiskers/performance.py
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .languages import is_react_tag, normalize_language
from .models import PerformanceIssue, Severity

__all__ = ["PerformanceAnalyzer", "analyze_performance", "rules_for"]

logger = logging.getLogger(__name__)

_NESTED_LOOP_RE = re.compile(r"\bfor\s*\([^{]*\{[^}]*\bfor\s*\(")
_LARGE_ARRAY_RE = re.compile(r"\[[^\]]{1000,}\]")
_LONG_PARAMS_RE = re.compile(r"\bfunction\s+\w+\s*\([^)]{50,}\)")
_COMPONENT_RE = re.compile(r"\bfunction\s+([A-Z]\w+)\s*\([^)]*\)\s*\{")
UNMEMOIZED_COMPONENTS_MAX = 2


@dataclass(frozen=True)
class _PerformanceRule:
    category: str
    pattern: re.Pattern
    description: str
    severity: Severity
    suggestion: str


def _rule(category: str, pattern: str, description: str, severity: Severity, suggestion: str):
    return _PerformanceRule(category, re.compile(pattern), description, severity, suggestion)


_LOOP_RULES: Tuple[_PerformanceRule, ...] = (
    _rule(
        "inefficient_loops",
        r"\bfor\s*\([^)]*\)\s*\{[^}]*\$\{[^}]*\}",
        "String interpolation inside loops is inefficient",
        Severity.HIGH,
        "Move string interpolation outside the loop if possible",
    ),
    _rule(
        "inefficient_loops",
        r"\bfor\s*\([^)]*\)\s*\{[^}]*\bnew\s+",
        "Object instantiation inside loops can cause memory churn",
        Severity.MEDIUM,
        "Try to move object creation outside the loop",
    ),
    _rule(
        "inefficient_loops",
        r"\bfor\s*\([^)]*\)\s*\{[^}]*\.splice\s*\(",
        "Array splice inside loops can be slow",
        Severity.MEDIUM,
        "Consider alternative data manipulation approaches",
    ),
)

_EXPENSIVE_RULES: Tuple[_PerformanceRule, ...] = (
    _rule(
        "expensive_operations",
        r"document\.querySelectorAll\([^)]*\)",
        "querySelectorAll can be expensive on large DOM trees",
        Severity.MEDIUM,
        "Cache DOM queries outside of frequently called functions",
    ),
    _rule(
        "expensive_operations",
        r"\.forEach\([^)]*=>\s*\{[^}]*document\.",
        "DOM operations inside loops can cause reflows",
        Severity.HIGH,
        "Batch DOM operations or use DocumentFragment",
    ),
    _rule(
        "expensive_operations",
        r"JSON\.parse\([^)]*JSON\.stringify\([^)]*\)",
        "Deep cloning with JSON is inefficient",
        Severity.MEDIUM,
        "Consider structuredClone or a dedicated deep clone helper",
    ),
)

_TYPE_ASSERTION_RULE = _rule(
    "expensive_operations",
    r"\bas\s+[A-Za-z]+\[\]",
    "Type assertions in critical path",
    Severity.LOW,
    "Use proper typing to avoid runtime assertions",
)

_MEMORY_RULES: Tuple[_PerformanceRule, ...] = (
    _rule(
        "memory_leaks",
        r"setInterval\([^)]*,\s*\d+\)",
        "Potential memory leak from uncleaned intervals",
        Severity.HIGH,
        "Ensure intervals are cleared with clearInterval when no longer needed",
    ),
    _rule(
        "memory_leaks",
        r"addEventListener\([^)]*\)",
        "Potential memory leak from event listeners",
        Severity.MEDIUM,
        "Remove event listeners with removeEventListener when no longer needed",
    ),
)

_ASYNC_RULES: Tuple[_PerformanceRule, ...] = (
    _rule(
        "async_issues",
        r"await\s+Promise\.all\(\s*\[\s*[^\]]*\]\s*\)",
        "Inefficient Promise.all batch",
        Severity.LOW,
        "Ensure promises are created before calling Promise.all",
    ),
    _rule(
        "async_issues",
        r"\bfor\s*\([^)]*\)\s*\{[^}]*\bawait\s+",
        "Sequential await in loop is slow",
        Severity.HIGH,
        "Use Promise.all to parallelize async operations",
    ),
)

_REACT_RULES: Tuple[_PerformanceRule, ...] = (
    _rule(
        "react_inefficient_hooks",
        r"useEffect\(\s*\(\s*\)\s*=>\s*\{\s*[^}]*\s*\}\s*\)",
        "useEffect without dependencies array",
        Severity.MEDIUM,
        "Add dependencies array to prevent unnecessary re-renders",
    ),
    _rule(
        "react_inefficient_hooks",
        r"useState\(\s*\{[^}]*\}\s*\)",
        "useState with object state",
        Severity.LOW,
        "Consider splitting into multiple state variables",
    ),
    _rule(
        "react_rerender_issues",
        r">\s*\{[^}]*\.map\([^)]*=>\s*<[^>]*>\s*\{",
        "Nested component in map without memoization",
        Severity.MEDIUM,
        "Use React.memo or extract to a memoized component",
    ),
    _rule(
        "react_rerender_issues",
        r"\bnew\s+[A-Z][A-Za-z]*\(",
        "Creating new objects during render",
        Severity.MEDIUM,
        "Move object creation outside component or use useMemo",
    ),
)

JAVASCRIPT_RULES = _LOOP_RULES + _EXPENSIVE_RULES + _MEMORY_RULES + _ASYNC_RULES
TYPESCRIPT_RULES = (
    _LOOP_RULES + _EXPENSIVE_RULES + (_TYPE_ASSERTION_RULE,) + _MEMORY_RULES + _ASYNC_RULES
)


def rules_for(language: str) -> Tuple[_PerformanceRule, ...]:
    """Rules applied to ``language``, in reporting order.

    Raises:
        UnsupportedLanguageError: if ``language`` is not JavaScript or TypeScript.
    """
    rules = TYPESCRIPT_RULES if normalize_language(language) == "typescript" else JAVASCRIPT_RULES
    if is_react_tag(language):
        rules = rules + _REACT_RULES
    return rules


class PerformanceAnalyzer:
    """Matches the rule table and appends file-wide metrics."""

    def analyze(self, source_text: str, language: str) -> List[PerformanceIssue]:
        text = source_text or ""
        rules = rules_for(language)
        lines = text.split("\n")
        issues: List[PerformanceIssue] = []

        for rule in rules:
            for match in rule.pattern.finditer(text):
                line = text.count("\n", 0, match.start()) + 1
                issues.append(
                    PerformanceIssue(
                        category=rule.category,
                        description=rule.description,
                        severity=rule.severity,
                        suggestion=rule.suggestion,
                        line=line,
                        context=lines[line - 1].strip(),
                        match=match.group(0),
                    )
                )

        issues.extend(self._metrics(text, is_react_tag(language)))
        logger.debug(f"Performance scan matched {len(issues)} issue(s) with {len(rules)} rules")
        return issues

    def _metrics(self, text: str, react: bool) -> List[PerformanceIssue]:
        metrics = []

        nested = len(_NESTED_LOOP_RE.findall(text))
        if nested:
            metrics.append(
                _metric(
                    "nested_loops",
                    nested,
                    f"Found {nested} nested loops which can lead to O(n^2) complexity",
                    Severity.HIGH if nested > 2 else Severity.MEDIUM,
                    "Consider restructuring to avoid nested loops or use more efficient algorithms",
                )
            )

        large = len(_LARGE_ARRAY_RE.findall(text))
        if large:
            metrics.append(
                _metric(
                    "large_arrays",
                    large,
                    "Large array literals can impact load and parse time",
                    Severity.MEDIUM,
                    "Consider loading large datasets dynamically or chunking",
                )
            )

        long_params = len(_LONG_PARAMS_RE.findall(text))
        if long_params:
            metrics.append(
                _metric(
                    "excessive_params",
                    long_params,
                    "Functions with many parameters can be inefficient",
                    Severity.LOW,
                    "Use object parameters instead of many individual parameters",
                )
            )

        if react:
            unmemoized = self._unmemoized_components(text)
            if unmemoized is not None:
                metrics.append(unmemoized)
        return metrics

    def _unmemoized_components(self, text: str) -> Optional[PerformanceIssue]:
        components = _COMPONENT_RE.findall(text)
        bare = [
            name
            for name in components
            if f"export default memo({name})" not in text
            and f"export default React.memo({name})" not in text
        ]
        if len(bare) <= UNMEMOIZED_COMPONENTS_MAX:
            return None
        return PerformanceIssue(
            category="react_optimization",
            description=f"{len(bare)} of {len(components)} components are not memoized",
            severity=Severity.MEDIUM,
            suggestion="Use React.memo for components that render often with the same props",
            metric="unmemoized_components",
            count=len(bare),
        )


def _metric(name: str, count: int, description: str, severity: Severity, suggestion: str):
    return PerformanceIssue(
        category="performance_metric",
        description=description,
        severity=severity,
        suggestion=suggestion,
        metric=name,
        count=count,
    )


_default_analyzer = PerformanceAnalyzer()


def analyze_performance(source_text: str, language: str) -> List[PerformanceIssue]:
    return _default_analyzer.analyze(source_text, language)
