"""Tests for explanation composition."""

import warnings

import pytest

from codewhiskers.errors import MalformedInputWarning
from codewhiskers.explanation import (
    OPERATION_RULES,
    SUBJECT_RULES,
    ExplanationComposer,
    ExplanationContext,
    compose,
    infer_purpose,
    infer_role,
    summarize_function,
)
from codewhiskers.extraction import extract
from codewhiskers.models import ComplexityLevel, Parameter, PatternMatch, ReturnValue, SideEffect
from codewhiskers.patterns import detect_patterns
from tests.helpers.sources import SHOP_SOURCE, SUM_SOURCE


def _explain(source: str):
    return compose(extract(source, "javascript"), source, detect_patterns(source))


def test_sum_simple_mentions_name():
    explanation = _explain(SUM_SOURCE)

    assert "sum" in explanation.simple
    assert explanation.simple == "This code defines a function called 'sum' to perform some operations."
    assert explanation.complexity is ComplexityLevel.LOW


def test_single_function_mentions_loop_and_conditionals():
    source = "function walk(n) { while (n) { if (n % 2) { skip(); } n--; } }"

    assert _explain(source).simple == (
        "This code defines a function called 'walk' that uses a while loop "
        "with some conditional logic to perform some operations."
    )


def test_dominant_loop_kind_is_the_most_frequent():
    source = (
        "function scan(a) { while (a) { a--; } for (;;) { break; } for (;;) { break; } }"
    )

    assert "uses a for loop" in _explain(source).simple


def test_many_functions_and_operation_precedence():
    explanation = _explain(SHOP_SOURCE)

    assert explanation.simple == "This code defines 3 functions and makes network requests."
    assert explanation.complexity is ComplexityLevel.HIGH


@pytest.mark.parametrize(
    "source, clause",
    [
        ("const t = xs.reduce((a, b) => a + b, 0); fetch(u);", "that performs array reduction to calculate a total."),
        ("const ys = xs.map(f).filter(g);", "that transforms array elements."),
        ("const ys = xs.filter(g);", "that filters array elements."),
        ("const r = axios.get(u);", "and makes network requests."),
        ("const v = sessionStorage.getItem(k);", "and interacts with browser storage."),
        ("const b = el; b.addEventListener('click', go);", "and attaches event listeners."),
        ("const x = 1;", "to perform some operations."),
    ],
)
def test_operation_clause_precedence(source, clause):
    assert _explain(source).simple.endswith(clause)


def test_class_subject():
    source = "class Store extends Base { }"

    assert _explain(source).simple.startswith("This code defines a class named 'Store'")


def test_variables_subject():
    assert _explain("let a = 1;").simple.startswith("This code sets up some variables")


def test_empty_input_uses_generic_fallback():
    with pytest.warns(MalformedInputWarning):
        inventory = extract("", "javascript")

    explanation = compose(inventory, "", [])
    assert explanation.simple == "This code contains statements to perform some operations."
    assert explanation.detailed == explanation.simple
    assert "- Functions: 0" in explanation.technical
    assert explanation.complexity is ComplexityLevel.LOW


def test_detailed_tier():
    detailed = _explain(SHOP_SOURCE).detailed

    assert detailed.startswith("This code defines 3 functions and makes network requests.\n\n")
    assert (
        "Specifically, it has a function 'calcTotal' that appears to perform calculations, "
        "and has a function 'fetchUser' that appears to retrieve data, "
        "and has a function 'double' that appears to perform operations."
    ) in detailed
    assert "It uses these key variables: 'axios' (const), 'sum' (let), 'i' (let), and 3 others." in detailed


def test_detailed_without_remainder():
    detailed = _explain("const a = 1; let b = 2;").detailed

    assert detailed.endswith("It uses these key variables: 'a' (const), 'b' (let).")


def test_technical_tier():
    explanation = _explain(SHOP_SOURCE)
    technical = explanation.technical

    assert technical.startswith("## Technical Overview\n\n### Structure\n")
    for line in (
        "- Functions: 3",
        "- Classes: 1",
        "- Variables: 6",
        "- Loops: 1",
        "- Conditionals: 1",
        "- Imports: 2",
        "- `calcTotal`: Computation function",
        "- `fetchUser`: Data retrieval function",
        "- `double`: General utility function",
        "- `Cart`: Class definition (extends `Base`)",
        "- Uses async/await for asynchronous operations",
        "- Uses arrow functions",
        "- Async/Await Pattern",
    ):
        assert line in technical
    assert "try/catch" not in technical


def test_technical_without_idioms():
    technical = _explain("var x = 1;").technical

    assert "### Patterns\n- No notable idioms detected" in technical
    assert "### Detected Idioms" not in technical


@pytest.mark.parametrize(
    "name, purpose, role",
    [
        ("getUser", "retrieve data", "Data retrieval function"),
        ("fetchAll", "retrieve data", "Data retrieval function"),
        ("updateCart", "modify values", "State modification function"),
        ("handleClick", "respond to events", "Event handler"),
        ("clickHandler", "respond to events", "Event handler"),
        ("computeTax", "perform calculations", "Computation function"),
        ("renderList", "perform operations", "UI rendering function"),
        ("displayName", "perform operations", "UI rendering function"),
        ("main", "perform operations", "General utility function"),
    ],
)
def test_name_inference(name, purpose, role):
    assert infer_purpose(name) == purpose
    assert infer_role(name) == role


def test_rules_are_pure_and_ordered():
    inventory = extract(SUM_SOURCE, "javascript")
    context = ExplanationContext(inventory=inventory, text=SUM_SOURCE)

    results = [rule(context) for rule in SUBJECT_RULES]
    assert results[0] == "defines a function called 'sum'"
    assert results[-1] == "contains statements"
    assert OPERATION_RULES[-1](context) == "to perform some operations."
    assert [rule(context) for rule in SUBJECT_RULES] == results


def test_compose_is_deterministic():
    composer = ExplanationComposer()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MalformedInputWarning)
        for source in (SUM_SOURCE, SHOP_SOURCE, ""):
            inventory = extract(source, "javascript")
            patterns = detect_patterns(source)
            assert composer.compose(inventory, source, patterns) == composer.compose(
                inventory, source, patterns
            )


def test_summarize_function_without_return():
    text = summarize_function("init", (), ReturnValue(exists=False))

    assert text == "The function `init` takes no parameters and doesn't explicitly return a value."


def test_summarize_function_full():
    text = summarize_function(
        "load",
        (Parameter("url"),),
        ReturnValue(exists=True, value="data", is_variable=True),
        (SideEffect("network", "Makes network requests"), SideEffect("timer", "Uses timer functions")),
        (PatternMatch("async", "Async/Await Pattern"),),
    )

    assert text == (
        "The function `load` takes 1 parameter (url) and returns data. "
        "It has side effects including: makes network requests, uses timer functions. "
        "The function uses these patterns: Async/Await Pattern."
    )


def test_summarize_function_hides_long_parameter_lists():
    params = tuple(Parameter(name) for name in "abcd")
    text = summarize_function("f", params, ReturnValue(exists=False))

    assert text.startswith("The function `f` takes 4 parameters and doesn't")


def test_technical_lists_language_features():
    source = "interface Box<T> { value: T }\nconst wrap = async (x) => `${await load(x)}`;\n"
    technical = compose(extract(source, "typescript"), source).technical

    assert (
        "### Language Features\n- async/await\n- arrow functions\n- template literals\n"
        "- interfaces\n- generics"
    ) in technical


def test_technical_omits_empty_language_features():
    assert "### Language Features" not in _explain("var x = 1;").technical
