"""Tests for report formatters."""

import json

import pytest

from codewhiskers.api import analyze_functions, analyze_performance, explain, find_refactoring_opportunities
from codewhiskers.models import SkillLevel, WorkspaceProfile
from codewhiskers.reporting import (
    FORMAT_CHOICES,
    HumanFormatter,
    JsonFormatter,
    MarkdownFormatter,
    get_formatter,
)
from codewhiskers.workspace.profiler import build_learning_path
from tests.helpers.sources import REPEATED_SOURCE, SHOP_SOURCE, SLOW_SOURCE, SUM_SOURCE

ALL_LEVELS = ("simple", "detailed", "technical")


@pytest.fixture
def sum_explanation():
    return explain(SUM_SOURCE, "javascript")


@pytest.fixture
def profile() -> WorkspaceProfile:
    return WorkspaceProfile(
        skill_level=SkillLevel.BEGINNER,
        strengths=["JavaScript Development"],
        areas_for_improvement=["Code Complexity"],
        learning_path=build_learning_path(["Code Complexity"], [], SkillLevel.BEGINNER),
        skill_score=2,
        languages={"JavaScript": 4},
    )


def test_format_choices():
    assert FORMAT_CHOICES == ["human", "json", "markdown"]
    assert isinstance(get_formatter("markdown"), MarkdownFormatter)
    with pytest.raises(ValueError, match="Unknown format"):
        get_formatter("xml")


def test_human_explanation(sum_explanation):
    text = HumanFormatter().format_explanation(sum_explanation, ["simple"])

    assert text == f"[SIMPLE]\n{sum_explanation.simple}\n\nComplexity: low"


def test_human_explanation_all_levels(sum_explanation):
    text = HumanFormatter().format_explanation(sum_explanation, ALL_LEVELS)

    assert text.index("[SIMPLE]") < text.index("[DETAILED]") < text.index("[TECHNICAL]")
    assert text.endswith("Complexity: low")


def test_human_functions():
    text = HumanFormatter().format_functions(analyze_functions(SUM_SOURCE, "javascript"))

    assert text == (
        "sum (line 1, complexity low, score 0)\n"
        "  The function `sum` takes 2 parameters (a, b) and returns a+b."
    )


def test_human_functions_empty():
    assert HumanFormatter().format_functions([]) == "No functions found."


def test_human_profile(profile):
    text = HumanFormatter().format_profile(profile)

    assert text.startswith("Skill level: beginner (score 2)")
    assert "Languages: JavaScript: 4" in text
    assert "Strengths: JavaScript Development" in text
    assert "Learning path:" in text
    assert "  1. [ ] Refactor a simple function (Code Complexity, beginner) with Professor Paws" in text


def test_json_explanation(sum_explanation):
    payload = json.loads(JsonFormatter().format_explanation(sum_explanation, ["simple", "technical"]))

    assert set(payload) == {"simple", "technical", "complexity"}
    assert payload["complexity"] == "low"


def test_json_functions_and_profile(profile):
    functions = json.loads(JsonFormatter().format_functions(analyze_functions(SHOP_SOURCE, "javascript")))
    assert [f["name"] for f in functions["functions"]] == ["calcTotal", "fetchUser", "double"]

    data = json.loads(JsonFormatter().format_profile(profile))
    assert data["skill_level"] == "beginner"
    assert len(data["learning_path"]) == 2


def test_markdown_explanation_demotes_technical_headings():
    text = MarkdownFormatter().format_explanation(explain(SHOP_SOURCE, "javascript"), ALL_LEVELS)

    assert "## Simple\n\nThis code defines 3 functions" in text
    assert "### Technical Overview" in text
    assert "#### Structure" in text
    assert "**Complexity:** high" in text


def test_markdown_functions():
    text = MarkdownFormatter().format_functions(analyze_functions(SHOP_SOURCE, "javascript"))

    assert "| `fetchUser` | 16 | low | network | async |" in text
    assert "| `double` | 21 | low | - | - |" in text


def test_markdown_profile(profile):
    text = MarkdownFormatter().format_profile(profile)

    assert text.startswith("## Workspace Profile\n")
    assert "- JavaScript: 4 file(s)" in text
    assert "### Learning Path\n- [ ] Refactor a simple function (Code Complexity, beginner)" in text


def test_human_refactorings_empty():
    assert HumanFormatter().format_refactorings([]) == "No refactoring opportunities found."


def test_human_performance_includes_context_and_summary():
    text = HumanFormatter().format_performance(analyze_performance(SLOW_SOURCE, "javascript"))

    assert text.startswith("[HIGH] line 2: String interpolation inside loops is inefficient\n")
    assert "  for (let i = 0; i < rows.length; i++) {\n  Suggestion: " in text
    assert text.endswith("4 issue(s): 2 high, 2 medium, 0 low")


def test_json_refactorings_and_performance():
    opportunities = find_refactoring_opportunities(REPEATED_SOURCE, "javascript")
    issues = analyze_performance(SLOW_SOURCE, "javascript")

    refactorings = json.loads(JsonFormatter().format_refactorings(opportunities))
    performance = json.loads(JsonFormatter().format_performance(issues))

    assert refactorings["opportunities"][0]["excerpt"] == "total += price * quantity;\nlog(total);"
    assert [i["category"] for i in performance["issues"]][:2] == ["inefficient_loops", "expensive_operations"]


def test_markdown_refactorings():
    text = MarkdownFormatter().format_refactorings(
        find_refactoring_opportunities(REPEATED_SOURCE, "javascript")
    )

    assert "| medium | `duplicated_code` | Duplicated code pattern (2 instances) |" in text
    assert "### Repeated Blocks\n\n```\ntotal += price * quantity;\nlog(total);\n```" in text


def test_markdown_performance_metric_rows_have_no_line():
    issues = analyze_performance("for (a of b) {\n  for (c of d) {\n  }\n}\n", "javascript")

    text = MarkdownFormatter().format_performance(issues)

    assert "| - | medium | performance_metric | Found 1 nested loops" in text
    assert "**Total:** 1 (0 high, 1 medium, 0 low)" in text
