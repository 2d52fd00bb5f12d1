"""
Report formatters for codewhiskers results.

Each formatter renders explanations, function behavior records,
refactoring opportunities, performance issues and workspace profiles as a
string for one kind of consumer: people at a terminal, tooling that wants
JSON, or documents that want markdown.

codewhiskers/src/codewhiskers/reporting.py
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from .models import (
    Explanation,
    FunctionBehavior,
    PerformanceIssue,
    RefactoringOpportunity,
    Severity,
    WorkspaceProfile,
)

__all__ = [
    "BaseFormatter",
    "HumanFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "BUILTIN_FORMATTERS",
    "FORMAT_CHOICES",
    "DEFAULT_FORMAT",
    "EXPLANATION_LEVELS",
    "get_formatter",
]

EXPLANATION_LEVELS = ("simple", "detailed", "technical")


def _severity_summary(issues: Sequence[PerformanceIssue]) -> str:
    return ", ".join(
        f"{sum(1 for issue in issues if issue.severity is severity)} {severity.value}"
        for severity in (Severity.HIGH, Severity.MEDIUM, Severity.LOW)
    )


class BaseFormatter(ABC):
    """Base class for formatters."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def format_explanation(self, explanation: Explanation, levels: Sequence[str]) -> str:
        """Render the requested explanation tiers."""

    @abstractmethod
    def format_functions(self, behaviors: Sequence[FunctionBehavior]) -> str:
        """Render per-function behavior records."""

    @abstractmethod
    def format_refactorings(self, opportunities: Sequence[RefactoringOpportunity]) -> str:
        """Render refactoring opportunities."""

    @abstractmethod
    def format_performance(self, issues: Sequence[PerformanceIssue]) -> str:
        """Render performance issues."""

    @abstractmethod
    def format_profile(self, profile: WorkspaceProfile) -> str:
        """Render a workspace profile."""


class HumanFormatter(BaseFormatter):
    """Plain text for reading in a terminal."""

    name = "human"
    description = "Human-readable plain text"

    def format_explanation(self, explanation: Explanation, levels: Sequence[str]) -> str:
        sections = []
        for level in levels:
            sections.append(f"[{level.upper()}]\n{explanation.tier(level)}".rstrip())
        sections.append(f"Complexity: {explanation.complexity.value}")
        return "\n\n".join(sections)

    def format_functions(self, behaviors: Sequence[FunctionBehavior]) -> str:
        if not behaviors:
            return "No functions found."
        blocks = []
        for behavior in behaviors:
            lines = [
                f"{behavior.name} (line {behavior.function.position.line}, "
                f"complexity {behavior.complexity.level.value}, score {behavior.complexity.score:g})",
                f"  {behavior.explanation}",
            ]
            if behavior.dependencies:
                deps = ", ".join(f"{d.name} ({d.kind})" for d in behavior.dependencies)
                lines.append(f"  Dependencies: {deps}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def format_refactorings(self, opportunities: Sequence[RefactoringOpportunity]) -> str:
        if not opportunities:
            return "No refactoring opportunities found."
        blocks = []
        for opportunity in opportunities:
            lines = [
                f"[{opportunity.severity.value.upper()}] {opportunity.description}",
                f"  Suggestion: {opportunity.suggestion}",
            ]
            if opportunity.excerpt is not None:
                pattern = opportunity.excerpt.replace("\n", " | ")
                lines.append(f"  Pattern: {pattern}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def format_performance(self, issues: Sequence[PerformanceIssue]) -> str:
        if not issues:
            return "No performance issues found."
        blocks = []
        for issue in issues:
            where = f"line {issue.line}: " if issue.line is not None else ""
            lines = [f"[{issue.severity.value.upper()}] {where}{issue.description}"]
            if issue.context:
                lines.append(f"  {issue.context}")
            lines.append(f"  Suggestion: {issue.suggestion}")
            blocks.append("\n".join(lines))
        blocks.append(f"{len(issues)} issue(s): {_severity_summary(issues)}")
        return "\n\n".join(blocks)

    def format_profile(self, profile: WorkspaceProfile) -> str:
        lines = [
            f"Skill level: {profile.skill_level.value} (score {profile.skill_score:g})",
        ]
        if profile.languages:
            langs = ", ".join(f"{name}: {count}" for name, count in profile.languages.items())
            lines.append(f"Languages: {langs}")
        lines.append(f"Strengths: {', '.join(profile.strengths) or 'none identified yet'}")
        lines.append(
            f"Areas for improvement: {', '.join(profile.areas_for_improvement) or 'none'}"
        )
        if profile.learning_path:
            lines.append("")
            lines.append("Learning path:")
            for index, item in enumerate(profile.learning_path, start=1):
                mark = "x" if item.completed else " "
                lines.append(
                    f"  {index}. [{mark}] {item.challenge} ({item.area}, {item.difficulty})"
                    f" with {item.character.name}"
                )
        return "\n".join(lines)


class JsonFormatter(BaseFormatter):
    """JSON output formatter for machine processing."""

    name = "json"
    description = "JSON output for tooling integration"

    def _dump(self, payload: Any) -> str:
        return json.dumps(payload, indent=2, default=str)

    def format_explanation(self, explanation: Explanation, levels: Sequence[str]) -> str:
        payload: Dict[str, Any] = {level: explanation.tier(level) for level in levels}
        payload["complexity"] = explanation.complexity.value
        return self._dump(payload)

    def format_functions(self, behaviors: Sequence[FunctionBehavior]) -> str:
        return self._dump({"functions": [behavior.to_dict() for behavior in behaviors]})

    def format_refactorings(self, opportunities: Sequence[RefactoringOpportunity]) -> str:
        return self._dump({"opportunities": [o.to_dict() for o in opportunities]})

    def format_performance(self, issues: Sequence[PerformanceIssue]) -> str:
        return self._dump({"issues": [issue.to_dict() for issue in issues]})

    def format_profile(self, profile: WorkspaceProfile) -> str:
        return self._dump(profile.to_dict())


class MarkdownFormatter(BaseFormatter):
    """Markdown suitable for pasting into docs or pull requests."""

    name = "markdown"
    description = "Markdown report"

    def format_explanation(self, explanation: Explanation, levels: Sequence[str]) -> str:
        sections: List[str] = []
        for level in levels:
            text = explanation.tier(level).rstrip()
            if level == "technical":
                # already markdown; demote headings one level under ours
                text = "\n".join("#" + line if line.startswith("#") else line for line in text.splitlines())
            sections.append(f"## {level.capitalize()}\n\n{text}")
        sections.append(f"**Complexity:** {explanation.complexity.value}")
        return "\n\n".join(sections) + "\n"

    def format_functions(self, behaviors: Sequence[FunctionBehavior]) -> str:
        lines = ["| Function | Line | Complexity | Side effects | Patterns |", "|---|---|---|---|---|"]
        for behavior in behaviors:
            effects = ", ".join(s.type for s in behavior.side_effects) or "-"
            patterns = ", ".join(p.type for p in behavior.patterns) or "-"
            lines.append(
                f"| `{behavior.name}` | {behavior.function.position.line} | "
                f"{behavior.complexity.level.value} | {effects} | {patterns} |"
            )
        lines.append("")
        for behavior in behaviors:
            lines.append(f"- {behavior.explanation}")
        return "\n".join(lines) + "\n"

    def format_refactorings(self, opportunities: Sequence[RefactoringOpportunity]) -> str:
        lines = ["## Refactoring Opportunities", ""]
        if not opportunities:
            return "\n".join(lines + ["No refactoring opportunities found."]) + "\n"
        lines += ["| Severity | Type | Description | Suggestion |", "|---|---|---|---|"]
        for o in opportunities:
            lines.append(f"| {o.severity.value} | `{o.type}` | {o.description} | {o.suggestion} |")
        excerpts = [o.excerpt for o in opportunities if o.excerpt is not None]
        if excerpts:
            lines += ["", "### Repeated Blocks"]
            for excerpt in excerpts:
                lines += ["", "```", excerpt, "```"]
        return "\n".join(lines) + "\n"

    def format_performance(self, issues: Sequence[PerformanceIssue]) -> str:
        lines = ["## Performance Issues", ""]
        if not issues:
            return "\n".join(lines + ["No performance issues found."]) + "\n"
        lines += ["| Line | Severity | Category | Description | Suggestion |", "|---|---|---|---|---|"]
        for issue in issues:
            line = issue.line if issue.line is not None else "-"
            lines.append(
                f"| {line} | {issue.severity.value} | {issue.category} | "
                f"{issue.description} | {issue.suggestion} |"
            )
        lines += ["", f"**Total:** {len(issues)} ({_severity_summary(issues)})"]
        return "\n".join(lines) + "\n"

    def format_profile(self, profile: WorkspaceProfile) -> str:
        lines = [
            "## Workspace Profile",
            "",
            f"- Skill level: **{profile.skill_level.value}** (score {profile.skill_score:g})",
        ]
        for name, count in profile.languages.items():
            lines.append(f"- {name}: {count} file(s)")
        lines += ["", "### Strengths"]
        lines += [f"- {s}" for s in profile.strengths] or ["- none identified yet"]
        lines += ["", "### Areas for Improvement"]
        lines += [f"- {a}" for a in profile.areas_for_improvement] or ["- none"]
        if profile.learning_path:
            lines += ["", "### Learning Path"]
            for item in profile.learning_path:
                mark = "x" if item.completed else " "
                lines.append(f"- [{mark}] {item.challenge} ({item.area}, {item.difficulty})")
        return "\n".join(lines) + "\n"


# Built-in report formatters
BUILTIN_FORMATTERS = {
    "human": HumanFormatter,
    "json": JsonFormatter,
    "markdown": MarkdownFormatter,
}

# Format choices for CLI - single source of truth
FORMAT_CHOICES = list(BUILTIN_FORMATTERS.keys())
DEFAULT_FORMAT = "human"


def get_formatter(name: str) -> BaseFormatter:
    try:
        return BUILTIN_FORMATTERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown format '{name}' (choose from {', '.join(FORMAT_CHOICES)})"
        ) from None
