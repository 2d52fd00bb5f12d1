"""
Per-language idiom tallies.

Every tally function takes the file content, its ``Language`` and the
profiler settings and returns a flat mapping of metric name to count.
``TALLIES`` is a closed lookup table; languages without an entry (markup,
style, Go, PHP, Ruby and ``Other``) only contribute line and comment
counts through ``tally_generic``.

codewhiskers/src/codewhiskers/workspace/tallies.py
"""

import re
from typing import Callable, Dict, Tuple

from ..config import ProfilerSettings
from ..extraction import find_functions
from ..languages import Language

__all__ = [
    "TALLIES",
    "Tally",
    "tally_file",
    "tally_generic",
    "tally_script",
    "tally_python",
    "tally_java",
    "tally_csharp",
    "count_comment_lines",
]

Tally = Callable[[str, Language, ProfilerSettings], Dict[str, int]]

_ARROW_RE = re.compile(r"=>")
_DESTRUCTURING_RE = re.compile(r"(?:\{[\s\w,]+\}|\[[\s\w,]+\])\s*=(?![=>])")
_TEMPLATE_LITERAL_RE = re.compile(r"`[^`]*`")
_ASYNC_AWAIT_RE = re.compile(r"\b(?:async|await)\b")
_CONSOLE_LOG_RE = re.compile(r"\bconsole\.log\s*\(")
_SLASH_TODO_RE = re.compile(r"//\s*TODO")
_REACT_HOOK_RE = re.compile(r"\buse[A-Z]\w*\s*\(")
_REACT_COMPONENT_RE = re.compile(
    r"\bfunction\s+[A-Z]\w*\s*\(|\bclass\s+[A-Z]\w*\s+extends\b|\bconst\s+[A-Z]\w*\s*=\s*\("
)
_NESTED_CALLBACK_RE = re.compile(r"\)\s*=>\s*\{[^}]*=>")

_LIST_COMPREHENSION_RE = re.compile(r"\[[^\[\]\n]*?\bfor\b[^\[\]\n]*?\bin\b[^\[\]\n]*\]")
_DECORATOR_RE = re.compile(r"^\s*@[\w.]+", re.MULTILINE)
_F_STRING_RE = re.compile(r"(?<![\w'\"])[fF][rR]?(?:\"[^\"\n]*\"|'[^'\n]*')")
_PRINT_RE = re.compile(r"(?<![\w.])print\s*\(")
_HASH_TODO_RE = re.compile(r"#\s*TODO")
_PY_DEF_RE = re.compile(r"^(?P<indent>[ \t]*)(?:async\s+)?def\s+\w+")

_STREAM_RE = re.compile(r"\.stream\(\)")
_JAVA_LAMBDA_RE = re.compile(r"\s->\s")
_JAVA_PRINT_RE = re.compile(r"\bSystem\.(?:out|err)\.print(?:ln|f)?\s*\(")

_LINQ_RE = re.compile(
    r"\.(?:Where|Select|SelectMany|OrderBy|OrderByDescending|GroupBy|Any|All|"
    r"First|FirstOrDefault|Aggregate)\s*\("
)
_CONSOLE_WRITE_RE = re.compile(r"\bConsole\.Write(?:Line)?\s*\(")

_C_STYLE_MARKERS = ("//", "/*", "*")

COMMENT_MARKERS: Dict[Language, Tuple[str, ...]] = {
    Language.JAVASCRIPT: _C_STYLE_MARKERS,
    Language.TYPESCRIPT: _C_STYLE_MARKERS,
    Language.REACT_JS: _C_STYLE_MARKERS + ("{/*",),
    Language.REACT_TS: _C_STYLE_MARKERS + ("{/*",),
    Language.JAVA: _C_STYLE_MARKERS,
    Language.CSHARP: _C_STYLE_MARKERS,
    Language.GO: _C_STYLE_MARKERS,
    Language.PHP: _C_STYLE_MARKERS + ("#",),
    Language.CSS: ("/*", "*"),
    Language.HTML: ("<!--",),
    Language.PYTHON: ("#",),
    Language.RUBY: ("#",),
}
_FALLBACK_MARKERS = ("//", "/*")

_STRUCTURAL_TAGS = {
    Language.JAVASCRIPT: "javascript",
    Language.REACT_JS: "javascript",
    Language.TYPESCRIPT: "typescript",
    Language.REACT_TS: "typescript",
}


def count_comment_lines(content: str, language: Language) -> int:
    """Lines whose first non-blank characters open a comment."""
    markers = COMMENT_MARKERS.get(language, _FALLBACK_MARKERS)
    return sum(1 for line in content.splitlines() if line.lstrip().startswith(markers))


def tally_generic(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    return {
        "line_count": len(content.splitlines()),
        "comment_lines": count_comment_lines(content, language),
    }


def _count(pattern: re.Pattern, content: str) -> int:
    return len(pattern.findall(content))


def _long_script_functions(content: str, language: Language, limit: int) -> int:
    long_functions = 0
    for record in find_functions(content, _STRUCTURAL_TAGS[language]):
        span = content[record.range.start : record.range.end]
        if span.count("\n") + 1 > limit:
            long_functions += 1
    return long_functions


def _long_python_functions(content: str, limit: int) -> int:
    lines = content.splitlines()
    long_functions = 0
    for start, line in enumerate(lines):
        match = _PY_DEF_RE.match(line)
        if not match:
            continue
        indent = len(match.group("indent").expandtabs())
        end = start + 1
        last_body_line = start
        while end < len(lines):
            candidate = lines[end]
            if candidate.strip():
                if len(candidate) - len(candidate.lstrip()) <= indent:
                    break
                last_body_line = end
            end += 1
        if last_body_line - start + 1 > limit:
            long_functions += 1
    return long_functions


def tally_script(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    """JavaScript, TypeScript and their JSX variants."""
    is_jsx = language in (Language.REACT_JS, Language.REACT_TS)
    return {
        "arrow_functions": _count(_ARROW_RE, content),
        "destructuring": _count(_DESTRUCTURING_RE, content),
        "template_literals": _count(_TEMPLATE_LITERAL_RE, content),
        "async_await": _count(_ASYNC_AWAIT_RE, content),
        "debug_logging": _count(_CONSOLE_LOG_RE, content),
        "todo_comments": _count(_SLASH_TODO_RE, content),
        "react_hooks": _count(_REACT_HOOK_RE, content) if is_jsx else 0,
        "react_components": _count(_REACT_COMPONENT_RE, content) if is_jsx else 0,
        "nested_callbacks": _count(_NESTED_CALLBACK_RE, content),
        "long_functions": _long_script_functions(
            content, language, settings.long_function_lines
        ),
    }


def tally_python(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    return {
        "list_comprehensions": _count(_LIST_COMPREHENSION_RE, content),
        "decorators": _count(_DECORATOR_RE, content),
        "f_strings": _count(_F_STRING_RE, content),
        "debug_logging": _count(_PRINT_RE, content),
        "todo_comments": _count(_HASH_TODO_RE, content),
        "long_functions": _long_python_functions(content, settings.long_function_lines),
    }


def tally_java(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    return {
        "stream_api": _count(_STREAM_RE, content),
        "lambda_expressions": _count(_JAVA_LAMBDA_RE, content),
        "debug_logging": _count(_JAVA_PRINT_RE, content),
        "todo_comments": _count(_SLASH_TODO_RE, content),
    }


def tally_csharp(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    return {
        "linq_queries": _count(_LINQ_RE, content),
        "csharp_lambdas": _count(_ARROW_RE, content),
        "async_await": _count(_ASYNC_AWAIT_RE, content),
        "debug_logging": _count(_CONSOLE_WRITE_RE, content),
        "todo_comments": _count(_SLASH_TODO_RE, content),
    }


TALLIES: Dict[Language, Tally] = {
    Language.JAVASCRIPT: tally_script,
    Language.TYPESCRIPT: tally_script,
    Language.REACT_JS: tally_script,
    Language.REACT_TS: tally_script,
    Language.PYTHON: tally_python,
    Language.JAVA: tally_java,
    Language.CSHARP: tally_csharp,
}


def tally_file(content: str, language: Language, settings: ProfilerSettings) -> Dict[str, int]:
    """Generic line/comment counts merged with the language's idiom tally, if any."""
    counts = tally_generic(content, language, settings)
    idiom_tally = TALLIES.get(language)
    if idiom_tally is not None:
        counts.update(idiom_tally(content, language, settings))
    return counts
