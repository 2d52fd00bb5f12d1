"""Tests for refactoring suggestions."""

import pytest

from codewhiskers.errors import UnsupportedLanguageError
from codewhiskers.models import Severity
from codewhiskers.refactoring import (
    RefactoringAnalyzer,
    branching_depth,
    cognitive_complexity,
    find_duplicated_blocks,
    find_refactoring_opportunities,
)
from tests.helpers.sources import REPEATED_SOURCE, SUM_SOURCE


@pytest.mark.parametrize(
    "source, expected",
    [
        ("", 0),
        ("if (a && b) { return x ? 1 : 2; }", 4),
        # one extra function costs 2
        ("function a() { return () => 1; }", 3),
        # optional chaining counts once, as a logical step
        ("a?.b ? c : d", 2),
        ("const format = done(diff);", 0),
    ],
)
def test_cognitive_complexity(source, expected):
    assert cognitive_complexity(source) == expected


def test_branching_depth_counts_two_columns_per_level():
    assert branching_depth("a\n  b\n    c\n\n  d\n") == 2
    assert branching_depth("a\n\tb\n\t\tc\n") == 2
    assert branching_depth(SUM_SOURCE) == 0


def test_clean_code_has_no_opportunities():
    assert find_refactoring_opportunities(SUM_SOURCE, "javascript") == []


def test_high_complexity():
    source = "if (x) { y(); } " * 16

    [opportunity] = find_refactoring_opportunities(source, "javascript")

    assert opportunity.type == "high_complexity"
    assert opportunity.severity is Severity.HIGH
    assert opportunity.metric == 16
    assert "excerpt" not in opportunity.to_dict()


def test_deep_nesting():
    [opportunity] = find_refactoring_opportunities("if (a) {\n        deep();\n}\n", "typescript")

    assert opportunity.type == "deep_nesting"
    assert opportunity.description == "Code has deep nesting (depth: 4)"
    assert opportunity.metric == 4


def test_thresholds_are_adjustable():
    analyzer = RefactoringAnalyzer(complexity_max=0, depth_max=10)

    [opportunity] = analyzer.analyze("if (a) {\n        deep();\n}\n", "javascript")
    assert opportunity.type == "high_complexity"


def test_duplicated_block_ignores_trailing_blank_line():
    [opportunity] = find_refactoring_opportunities(REPEATED_SOURCE, "javascript")

    assert opportunity.type == "duplicated_code"
    assert opportunity.description == "Duplicated code pattern (2 instances)"
    assert opportunity.excerpt == "total += price * quantity;\nlog(total);"


def test_duplicated_excerpt_is_truncated():
    line = "a_long_line_number_one = compute(alpha, beta, gamma);"
    source = f"{line}\nsecond_line();\n" * 2

    [opportunity] = find_refactoring_opportunities(source, "javascript")

    assert opportunity.excerpt == line[:50] + "..."


def test_only_the_longest_repeated_block_is_reported():
    block = "x1 = load(first);\nx2 = load(second);\nx3 = load(third);"
    source = f"{block}\nsep();\n{block}"

    assert find_duplicated_blocks(source) == [(block, 2)]


def test_short_repeats_are_ignored():
    assert find_duplicated_blocks("a();\nb();\na();\nb();") == []


def test_promise_chains_only_flagged_for_jsx():
    source = "load().then(parse).then(render);"

    assert find_refactoring_opportunities(source, "javascript") == []
    [opportunity] = find_refactoring_opportunities(source, "javascriptreact")
    assert opportunity.type == "promise_chaining"
    assert opportunity.metric == 1


def test_unsupported_language():
    with pytest.raises(UnsupportedLanguageError):
        find_refactoring_opportunities("x = 1", "python")
