"""
Tiered natural-language explanations.

Each explanation slot is filled by an ordered tuple of rule functions that
take an ``ExplanationContext`` and return a fragment or None. The first
non-None fragment wins, which keeps precedence explicit and lets every rule
be tested in isolation. Nothing here keeps state: the same inventory, text
and patterns always render the same three strings.

codewhiskers/src/codewhiskers/explanation.py
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .complexity import ComplexityScorer
from .models import (
    Explanation,
    FunctionRef,
    Parameter,
    PatternMatch,
    ReturnValue,
    SideEffect,
    StructuralInventory,
)
from .patterns import detect_language_features, idiom_flags

__all__ = [
    "ExplanationContext",
    "ExplanationComposer",
    "compose",
    "summarize_function",
    "SUBJECT_RULES",
    "OPERATION_RULES",
    "infer_purpose",
    "infer_role",
]

logger = logging.getLogger(__name__)

VARIABLES_LISTED = 3
PARAMETERS_LISTED = 3


@dataclass(frozen=True)
class ExplanationContext:
    """Everything a template rule may look at."""

    inventory: StructuralInventory
    text: str
    patterns: Tuple[PatternMatch, ...] = ()


Rule = Callable[[ExplanationContext], Optional[str]]


def _first(rules: Sequence[Rule], context: ExplanationContext) -> Optional[str]:
    for rule in rules:
        fragment = rule(context)
        if fragment is not None:
            return fragment
    return None


def _dominant(kinds: Sequence[str]) -> str:
    # most frequent kind, ties go to the earliest in source order
    counts = Counter(kinds)
    return max(kinds, key=lambda kind: (counts[kind], -kinds.index(kind)))


# ---- simple tier: subject clause ----


def _single_function_subject(context: ExplanationContext) -> Optional[str]:
    inventory = context.inventory
    if len(inventory.functions) != 1:
        return None
    parts = [f"defines a function called '{inventory.functions[0].name}'"]
    if inventory.loops:
        parts.append(f"that uses a {_dominant([loop.kind for loop in inventory.loops])} loop")
    if inventory.conditionals:
        parts.append("with some conditional logic")
    return " ".join(parts)


def _many_functions_subject(context: ExplanationContext) -> Optional[str]:
    count = len(context.inventory.functions)
    if count > 1:
        return f"defines {count} functions"
    return None


def _class_subject(context: ExplanationContext) -> Optional[str]:
    if context.inventory.classes:
        return f"defines a class named '{context.inventory.classes[0].name}'"
    return None


def _variables_subject(context: ExplanationContext) -> Optional[str]:
    if context.inventory.variables:
        return "sets up some variables"
    return None


def _generic_subject(context: ExplanationContext) -> Optional[str]:
    return "contains statements"


SUBJECT_RULES: Tuple[Rule, ...] = (
    _single_function_subject,
    _many_functions_subject,
    _class_subject,
    _variables_subject,
    _generic_subject,
)


# ---- simple tier: operation clause ----


def _text_rule(needles: Tuple[str, ...], fragment: str) -> Rule:
    def rule(context: ExplanationContext) -> Optional[str]:
        if any(needle in context.text for needle in needles):
            return fragment
        return None

    rule.__name__ = f"_mentions_{needles[0].rstrip('(.').lower()}"
    return rule


def _generic_operation(context: ExplanationContext) -> Optional[str]:
    return "to perform some operations."


OPERATION_RULES: Tuple[Rule, ...] = (
    _text_rule(("reduce(",), "that performs array reduction to calculate a total."),
    _text_rule(("map(",), "that transforms array elements."),
    _text_rule(("filter(",), "that filters array elements."),
    _text_rule(("fetch(", "axios."), "and makes network requests."),
    _text_rule(("localStorage", "sessionStorage"), "and interacts with browser storage."),
    _text_rule(("addEventListener",), "and attaches event listeners."),
    _generic_operation,
)


# ---- name-based purpose inference ----

# (prefixes, suffixes, detailed-tier phrase, technical-tier role)
_PURPOSES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...], Optional[str], str], ...] = (
    (("get", "fetch"), (), "retrieve data", "Data retrieval function"),
    (("set", "update"), (), "modify values", "State modification function"),
    (("handle",), ("Handler",), "respond to events", "Event handler"),
    (("calc", "compute"), (), "perform calculations", "Computation function"),
    (("render", "display"), (), None, "UI rendering function"),
)


def _matching_purposes(name: str):
    for prefixes, suffixes, phrase, role in _PURPOSES:
        if name.startswith(prefixes) or (suffixes and name.endswith(suffixes)):
            yield phrase, role


def infer_purpose(name: str) -> str:
    """Verb phrase for the detailed tier."""
    for phrase, _role in _matching_purposes(name):
        if phrase is not None:
            return phrase
    return "perform operations"


def infer_role(name: str) -> str:
    """Noun phrase for the technical tier."""
    for _phrase, role in _matching_purposes(name):
        return role
    return "General utility function"


# ---- tiers ----


def _render_simple(context: ExplanationContext) -> str:
    subject = _first(SUBJECT_RULES, context)
    operation = _first(OPERATION_RULES, context)
    return f"This code {subject} {operation}"


def _function_clause(function: FunctionRef) -> str:
    return f"has a function '{function.name}' that appears to {infer_purpose(function.name)}"


def _render_detailed(context: ExplanationContext, simple: str) -> str:
    inventory = context.inventory
    sections = [simple]
    if inventory.functions:
        clauses = ", and ".join(_function_clause(f) for f in inventory.functions)
        sections.append(f"Specifically, it {clauses}.")
    if inventory.variables:
        listed = ", ".join(
            f"'{variable.name}' ({variable.kind})"
            for variable in inventory.variables[:VARIABLES_LISTED]
        )
        remainder = len(inventory.variables) - VARIABLES_LISTED
        if remainder > 0:
            listed += f", and {remainder} others"
        sections.append(f"It uses these key variables: {listed}.")
    return "\n\n".join(sections)


def _render_technical(context: ExplanationContext) -> str:
    inventory = context.inventory
    counts = inventory.counts()
    lines = [
        "## Technical Overview",
        "",
        "### Structure",
        f"- Functions: {counts['functions']}",
        f"- Classes: {counts['classes']}",
        f"- Variables: {counts['variables']}",
        f"- Loops: {counts['loops']}",
        f"- Conditionals: {counts['conditionals']}",
        f"- Imports: {counts['imports']}",
    ]

    if inventory.functions:
        lines += ["", "### Functions"]
        lines += [f"- `{f.name}`: {infer_role(f.name)}" for f in inventory.functions]

    if inventory.classes:
        lines += ["", "### Classes"]
        for cls in inventory.classes:
            suffix = f" (extends `{cls.extends}`)" if cls.extends else ""
            lines.append(f"- `{cls.name}`: Class definition{suffix}")

    lines += ["", "### Patterns"]
    flags = idiom_flags(context.text)
    lines += [f"- {flag}" for flag in flags] or ["- No notable idioms detected"]

    features = detect_language_features(context.text, inventory.language)
    if features:
        lines += ["", "### Language Features"]
        lines += [f"- {feature}" for feature in features]

    if context.patterns:
        lines += ["", "### Detected Idioms"]
        lines += [f"- {pattern.name}" for pattern in context.patterns]

    return "\n".join(lines) + "\n"


class ExplanationComposer:
    """Renders the simple, detailed and technical tiers for one snapshot."""

    def __init__(self, scorer: Optional[ComplexityScorer] = None):
        self.scorer = scorer or ComplexityScorer()

    def compose(
        self,
        inventory: StructuralInventory,
        source_text: str,
        patterns: Sequence[PatternMatch] = (),
    ) -> Explanation:
        context = ExplanationContext(
            inventory=inventory, text=source_text or "", patterns=tuple(patterns)
        )
        simple = _render_simple(context)
        complexity = self.scorer.score_structure(inventory)
        logger.debug(f"Composed explanation at {complexity.level.value} complexity")
        return Explanation(
            simple=simple,
            detailed=_render_detailed(context, simple),
            technical=_render_technical(context),
            complexity=complexity.level,
        )


def summarize_function(
    name: str,
    params: Sequence[Parameter],
    return_value: ReturnValue,
    side_effects: Sequence[SideEffect] = (),
    patterns: Sequence[PatternMatch] = (),
) -> str:
    """One-paragraph description of a function's observable behavior."""
    sentence = f"The function `{name}` "
    if not params:
        sentence += "takes no parameters "
    else:
        plural = "s" if len(params) > 1 else ""
        sentence += f"takes {len(params)} parameter{plural} "
        if len(params) <= PARAMETERS_LISTED:
            sentence += f"({', '.join(p.name for p in params)}) "

    if return_value.exists:
        sentence += f"and returns {return_value.value}."
    else:
        sentence += "and doesn't explicitly return a value."

    parts = [sentence]
    if side_effects:
        effects = ", ".join(effect.description.lower() for effect in side_effects)
        parts.append(f"It has side effects including: {effects}.")
    if patterns:
        parts.append(f"The function uses these patterns: {', '.join(p.name for p in patterns)}.")
    return " ".join(parts)


_default_composer = ExplanationComposer()


def compose(
    inventory: StructuralInventory, source_text: str, patterns: Sequence[PatternMatch] = ()
) -> Explanation:
    return _default_composer.compose(inventory, source_text, patterns)
