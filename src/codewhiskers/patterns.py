"""
Idiom and side-effect detection over raw source text.

Every test is case-sensitive substring or regex containment. Idioms are
grouped into categories; inside a category the rules are tried in order
and the first hit wins, so at most one idiom per category is reported.
Side effects are independent: each category is tested on its own.

codewhiskers/src/codewhiskers/patterns.py
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .languages import normalize_language
from .models import PatternMatch, SideEffect

__all__ = [
    "PatternDetector",
    "detect_patterns",
    "detect_side_effects",
    "idiom_flags",
    "detect_language_features",
    "IDIOM_CATEGORIES",
]

_AWAIT_RE = re.compile(r"\bawait\b")
_CALLBACK_LITERAL_RE = re.compile(r"[(,]\s*function\s*\*?\s*\w*\s*\([^)]*\)\s*\{")
_CALLBACK_NAME_RE = re.compile(r"\bcallback\b|(?<![\w.$])(?:cb|done)\s*\(")
_TEMPLATE_LITERAL_RE = re.compile(r"`[^`]*`")
_GENERIC_RE = re.compile(r"\w<[\w\s,.\[\]|]+>")

IdiomRule = Callable[[str], Optional[PatternMatch]]


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


def _async_await(text: str) -> Optional[PatternMatch]:
    # an await can only appear inside an async context
    if _AWAIT_RE.search(text):
        return PatternMatch("async", "Async/Await Pattern")
    return None


def _promise_chain(text: str) -> Optional[PatternMatch]:
    if ".then(" in text and ".catch(" in text:
        return PatternMatch("promise", "Promise Chain Pattern")
    return None


def _callback(text: str) -> Optional[PatternMatch]:
    if _CALLBACK_LITERAL_RE.search(text) or _CALLBACK_NAME_RE.search(text):
        return PatternMatch("callback", "Callback Pattern")
    return None


def _functional(text: str) -> Optional[PatternMatch]:
    if _contains_any(text, (".map(", ".filter(", ".reduce(")) and "=>" in text:
        return PatternMatch("functional", "Functional Programming Pattern")
    return None


def _module(text: str) -> Optional[PatternMatch]:
    if _contains_any(text, ("module.exports", "export default", "export const")):
        return PatternMatch("module", "Module Pattern")
    return None


def _serialization(text: str) -> Optional[PatternMatch]:
    if _contains_any(text, ("JSON.parse", "JSON.stringify")):
        return PatternMatch("serialization", "Data Serialization Pattern")
    return None


# Category name -> precedence-ordered rules. Order of categories is the
# order of the reported matches.
IDIOM_CATEGORIES: Tuple[Tuple[str, Tuple[IdiomRule, ...]], ...] = (
    ("async-style", (_async_await, _promise_chain, _callback)),
    ("functional-style", (_functional,)),
    ("module-style", (_module,)),
    ("serialization", (_serialization,)),
)


@dataclass(frozen=True)
class _SideEffectRule:
    type: str
    description: str
    needles: Tuple[str, ...]


_SIDE_EFFECT_RULES: Tuple[_SideEffectRule, ...] = (
    _SideEffectRule("DOM", "Modifies the DOM", ("document.", "window.", "element.")),
    _SideEffectRule("network", "Makes network requests", ("fetch(", "axios.", "XMLHttpRequest")),
    _SideEffectRule(
        "storage", "Accesses browser storage", ("localStorage", "sessionStorage", "cookies")
    ),
    _SideEffectRule("timer", "Uses timer functions", ("setTimeout", "setInterval")),
)

# Whole-file checklist used by the technical explanation.
_IDIOM_FLAGS: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    (
        "Uses async/await for asynchronous operations",
        lambda text: "async" in text and "await" in text,
    ),
    ("Implements error handling with try/catch", lambda text: "try" in text and "catch" in text),
    (
        "Uses functional array methods (map/filter/reduce)",
        lambda text: _contains_any(text, ("map(", "filter(", "reduce(")),
    ),
    ("Uses arrow functions", lambda text: "=>" in text),
    ("Uses spread/rest operators", lambda text: "..." in text),
)


class PatternDetector:
    """Detects idioms and side effects in a whole file or a single function body."""

    def detect_patterns(self, text: str) -> List[PatternMatch]:
        text = text or ""
        matches = []
        for _category, rules in IDIOM_CATEGORIES:
            for rule in rules:
                match = rule(text)
                if match is not None:
                    matches.append(match)
                    break
        return matches

    def detect_side_effects(self, text: str) -> List[SideEffect]:
        text = text or ""
        return [
            SideEffect(rule.type, rule.description)
            for rule in _SIDE_EFFECT_RULES
            if _contains_any(text, rule.needles)
        ]

    def idiom_flags(self, text: str) -> List[str]:
        """Descriptions of the whole-file idioms present in ``text``, in checklist order."""
        text = text or ""
        return [description for description, test in _IDIOM_FLAGS if test(text)]

    def detect_language_features(self, text: str, language: str) -> List[str]:
        """Short feature tags for JavaScript/TypeScript source."""
        tag = normalize_language(language)
        text = text or ""
        features = []
        if "async" in text and "await" in text:
            features.append("async/await")
        if "=>" in text:
            features.append("arrow functions")
        if "..." in text:
            features.append("spread/rest")
        if _TEMPLATE_LITERAL_RE.search(text):
            features.append("template literals")
        if tag == "typescript":
            if "interface " in text:
                features.append("interfaces")
            if _GENERIC_RE.search(text):
                features.append("generics")
        return features


_default_detector = PatternDetector()


def detect_patterns(text: str) -> List[PatternMatch]:
    return _default_detector.detect_patterns(text)


def detect_side_effects(text: str) -> List[SideEffect]:
    return _default_detector.detect_side_effects(text)


def idiom_flags(text: str) -> List[str]:
    return _default_detector.idiom_flags(text)


def detect_language_features(text: str, language: str) -> List[str]:
    return _default_detector.detect_language_features(text, language)
