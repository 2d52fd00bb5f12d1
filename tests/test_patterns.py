"""Tests for idiom and side-effect detection."""

import pytest

from codewhiskers.errors import UnsupportedLanguageError
from codewhiskers.patterns import (
    PatternDetector,
    detect_language_features,
    detect_patterns,
    detect_side_effects,
    idiom_flags,
)
from tests.helpers.sources import FETCH_BODY

ASYNC_STYLE = {"async", "promise", "callback"}


def _types(matches):
    return [m.type for m in matches]


def test_fetch_body_scenario():
    effects = detect_side_effects(FETCH_BODY)
    patterns = detect_patterns(FETCH_BODY)

    assert [e.type for e in effects].count("network") == 1
    assert _types(patterns).count("async") == 1


def test_async_await_wins_over_promise_chain():
    body = "async function f() { await ready(); return p.then(a).catch(b); }"
    patterns = detect_patterns(body)

    async_style = [t for t in _types(patterns) if t in ASYNC_STYLE]
    assert async_style == ["async"]


def test_promise_chain_without_await():
    patterns = detect_patterns("fetch(u).then(r => r.json()).catch(e => report(e));")

    assert _types(patterns) == ["promise"]


def test_promise_chain_needs_both_then_and_catch():
    assert "promise" not in _types(detect_patterns("load().then(render);"))


@pytest.mark.parametrize(
    "body",
    [
        "readFile(path, function (err, data) { use(data); });",
        "button.on('click', function() { go(); });",
        "function run(callback) { callback(null, 1); }",
        "task(() => done());",
    ],
)
def test_callback_style(body):
    assert [t for t in _types(detect_patterns(body)) if t in ASYNC_STYLE] == ["callback"]


def test_method_named_done_is_not_a_callback():
    assert _types(detect_patterns("iterator.done(); it.next();")) == []


def test_functional_needs_arrow():
    assert "functional" in _types(detect_patterns("items.map(x => x * 2)"))
    assert "functional" not in _types(detect_patterns("items.map(double)"))


def test_module_and_serialization():
    body = "module.exports = { save: (o) => JSON.stringify(o) };"

    assert _types(detect_patterns(body)) == ["module", "serialization"]


def test_at_most_one_match_per_category():
    body = (
        "export default async function f(cb) { await g(); x.then(a).catch(b); "
        "xs.map(v => v); JSON.parse(s); }"
    )

    assert _types(detect_patterns(body)) == ["async", "functional", "module", "serialization"]


def test_side_effects_are_independent():
    body = "document.title = t; localStorage.setItem('k', v); setInterval(poll, 10); axios.get(u);"

    assert [e.type for e in detect_side_effects(body)] == ["DOM", "network", "storage", "timer"]
    assert detect_side_effects(body)[0].description == "Modifies the DOM"


def test_detection_is_case_sensitive():
    assert detect_side_effects("Document.write(x); FETCH(url)") == []


def test_empty_text():
    detector = PatternDetector()

    assert detector.detect_patterns("") == []
    assert detector.detect_side_effects("") == []
    assert detector.idiom_flags("") == []


def test_idiom_flags_in_checklist_order():
    text = "async function f() { try { await g(); } catch (e) {} return [...a].map(x => x); }"

    assert idiom_flags(text) == [
        "Uses async/await for asynchronous operations",
        "Implements error handling with try/catch",
        "Uses functional array methods (map/filter/reduce)",
        "Uses arrow functions",
        "Uses spread/rest operators",
    ]


def test_language_features_typescript():
    text = "interface User { id: number }\nconst users: Array<User> = [];\nconst f = () => `x`;"

    features = detect_language_features(text, "typescript")
    assert features == ["arrow functions", "template literals", "interfaces", "generics"]


def test_language_features_javascript_skips_typescript_checks():
    features = detect_language_features("interface Foo {}", "javascript")

    assert "interfaces" not in features


def test_language_features_rejects_other_languages():
    with pytest.raises(UnsupportedLanguageError):
        detect_language_features("x = 1", "python")
