"""
Structural extraction for JavaScript and TypeScript source text.

Lexical pattern scanning, not parsing: each recognised construct is found
by a regular expression and recorded with its start position. Constructs
inside string literals or comments are reported like any other match; that
is an accepted limitation of the approach.

codewhiskers/src/codewhiskers/extraction.py
"""

import logging
import re
import warnings
from bisect import bisect_right
from typing import Iterator, List, Optional, Tuple

from .errors import MalformedInputWarning
from .languages import normalize_language
from .models import (
    ClassRef,
    ConditionalRef,
    Dependency,
    FunctionRecord,
    FunctionRef,
    ImportRef,
    LoopRef,
    Parameter,
    SourcePosition,
    SourceRange,
    StructuralInventory,
    VariableOccurrence,
    VariableRef,
)

__all__ = [
    "StructuralExtractor",
    "extract",
    "find_functions",
    "extract_dependencies",
    "trace_variable",
    "parse_params",
]

logger = logging.getLogger(__name__)

_IDENT = r"[A-Za-z_$][\w$]*"
# a parameter list, allowing one level of nested parentheses such as `cb: () => void`
_PARAMS = r"(?:[^()]|\([^()]*\))*"

_FUNCTION_RE = re.compile(
    rf"""
    \bfunction\b\s*\*?\s*(?P<decl>{_IDENT})\s*(?:<[^>()]*>)?\s*\((?P<decl_params>{_PARAMS})\)
    |
    \b(?:const|let|var)\s+(?P<bound>{_IDENT})\s*(?::[^=;\n]+)?=\s*(?:async\b\s*)?
    (?:
        function\b\s*\*?\s*(?:{_IDENT})?\s*\((?P<expr_params>{_PARAMS})\)
      | (?:<[^>()]*>\s*)?\((?P<arrow_params>{_PARAMS})\)\s*(?::[^=;{{\n]+)?=>
      | (?P<single_param>{_IDENT})\s*=>
    )
    |
    (?P<assigned>{_IDENT})\s*=\s*(?:async\b\s*)?function\b\s*\*?\s*\((?P<assigned_params>{_PARAMS})\)
    """,
    re.VERBOSE,
)
_CLASS_RE = re.compile(
    rf"\bclass\s+(?P<name>{_IDENT})(?:\s*<[^>]*>)?(?:\s+extends\s+(?P<extends>[\w$.]+))?"
)
_LOOP_RE = re.compile(
    r"\b(?:(?P<for>for)(?:\s+await)?\s*\(|(?P<while>while)\s*\(|(?P<do>do)\s*\{)"
)
_CONDITIONAL_RE = re.compile(r"\b(?P<kind>if|switch)\s*\(")
_VARIABLE_RE = re.compile(rf"\b(?P<kind>var|let|const)\s+(?P<name>{_IDENT})")
_IMPORT_RE = re.compile(r"""\bimport\s+(?:[\w$*{}\s,]+?\s+from\s+)?["'](?P<module>[^"']+)["']""")
_REQUIRE_RE = re.compile(r"""\brequire\(\s*["'](?P<module>[^"']+)["']\s*\)""")


class _LineIndex:
    """Converts absolute offsets into line/character positions."""

    def __init__(self, text: str):
        self._text = text
        self._starts = [0]
        for match in re.finditer(r"\n", text):
            self._starts.append(match.end())

    def position(self, offset: int) -> SourcePosition:
        line = bisect_right(self._starts, offset)
        return SourcePosition(offset=offset, line=line, character=offset - self._starts[line - 1])

    def line_text(self, line: int) -> str:
        start = self._starts[line - 1]
        end = self._text.find("\n", start)
        return self._text[start:] if end == -1 else self._text[start:end]


def _top_level_positions(text: str) -> Iterator[int]:
    """Indices of characters outside any bracket pair, skipping ``=>`` arrows."""
    depth = 0
    for index, char in enumerate(text):
        arrow = text[index : index + 2] == "=>" or text[index - 1 : index + 1] == "=>"
        if arrow:
            continue
        if char in "([{<":
            depth += 1
        elif char in ")]}>":
            depth = max(depth - 1, 0)
        elif depth == 0:
            yield index


def _split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` outside of brackets, braces, parentheses and generics."""
    cuts = [index for index in _top_level_positions(text) if text[index] == separator]
    parts = [text[start + 1 : end] for start, end in zip([-1] + cuts, cuts + [len(text)])]
    return [part.strip() for part in parts if part.strip()]


def _top_level_index(text: str, target: str) -> int:
    return next((index for index in _top_level_positions(text) if text[index] == target), -1)


def parse_params(params_text: Optional[str]) -> Tuple[Parameter, ...]:
    """Split a raw parameter list into name/type/default triples."""
    if not params_text:
        return ()
    params = []
    for raw in _split_top_level(params_text):
        name_part, default = raw, None
        equals = _top_level_index(raw, "=")
        if equals != -1:
            name_part = raw[:equals].strip()
            default = raw[equals + 1 :].strip()
        param_type = None
        if ":" in name_part and not name_part.startswith("{"):
            name_part, param_type = (piece.strip() for piece in name_part.split(":", 1))
        name = name_part.lstrip(".").rstrip("?").strip()
        params.append(Parameter(name=name, type=param_type, default=default))
    return tuple(params)


def _function_parts(match: re.Match) -> Tuple[str, str, Optional[str]]:
    """Name, kind and raw parameter text for a function match."""
    if match.group("decl"):
        return match.group("decl"), "declaration", match.group("decl_params")
    if match.group("bound"):
        if match.group("expr_params") is not None:
            return match.group("bound"), "expression", match.group("expr_params")
        if match.group("arrow_params") is not None:
            return match.group("bound"), "arrow", match.group("arrow_params")
        return match.group("bound"), "arrow", match.group("single_param")
    return match.group("assigned"), "assignment", match.group("assigned_params")


def _matching_close(text: str, open_index: int, opener: str, closer: str) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return len(text)


def _is_do_while_tail(text: str, match: re.Match) -> bool:
    """``while (cond);`` closing a do-block is not a loop of its own."""
    close = _matching_close(text, match.end() - 1, "(", ")")
    rest = text[close + 1 :].lstrip()
    return rest.startswith(";")


def _body_span(text: str, match: re.Match, kind: str) -> Tuple[int, int, int]:
    """Return (body_start, body_end, range_end) for a function match."""
    cursor = match.end()
    if kind == "arrow":
        while cursor < len(text) and text[cursor].isspace():
            cursor += 1
        if cursor < len(text) and text[cursor] != "{":
            end = cursor
            while end < len(text) and text[end] not in ";\n":
                end += 1
            return cursor, end, end
    brace = text.find("{", cursor)
    if brace == -1:
        return cursor, cursor, cursor
    close = _matching_close(text, brace, "{", "}")
    return brace + 1, close, min(close + 1, len(text))


class StructuralExtractor:
    """Scans source text for functions, classes, loops, conditionals,
    variables and imports.

    Holds no state between calls; one instance can serve any number of
    independent texts.
    """

    def extract(self, source_text: str, language: str) -> StructuralInventory:
        """Build the structural inventory for ``source_text``.

        Raises:
            UnsupportedLanguageError: if ``language`` is not JavaScript or TypeScript.
        """
        tag = normalize_language(language)
        text = source_text or ""
        index = _LineIndex(text)

        functions = []
        for match in _FUNCTION_RE.finditer(text):
            name, kind, params_text = _function_parts(match)
            params = tuple(p.name for p in parse_params(params_text))
            functions.append(
                FunctionRef(name=name, kind=kind, position=index.position(match.start()), params=params)
            )

        classes = [
            ClassRef(
                name=m.group("name"),
                position=index.position(m.start()),
                extends=m.group("extends"),
            )
            for m in _CLASS_RE.finditer(text)
        ]

        loops = []
        for m in _LOOP_RE.finditer(text):
            kind = m.group("for") or m.group("while") or m.group("do")
            if kind == "while" and _is_do_while_tail(text, m):
                continue
            loops.append(LoopRef(kind=kind, position=index.position(m.start())))

        conditionals = [
            ConditionalRef(kind=m.group("kind"), position=index.position(m.start()))
            for m in _CONDITIONAL_RE.finditer(text)
        ]
        variables = [
            VariableRef(name=m.group("name"), kind=m.group("kind"), position=index.position(m.start()))
            for m in _VARIABLE_RE.finditer(text)
        ]
        imports = sorted(
            [
                ImportRef(module=m.group("module"), kind="import", position=index.position(m.start()))
                for m in _IMPORT_RE.finditer(text)
            ]
            + [
                ImportRef(module=m.group("module"), kind="require", position=index.position(m.start()))
                for m in _REQUIRE_RE.finditer(text)
            ],
            key=lambda ref: ref.position.offset,
        )

        inventory = StructuralInventory(
            language=tag,
            functions=tuple(functions),
            classes=tuple(classes),
            loops=tuple(loops),
            conditionals=tuple(conditionals),
            variables=tuple(variables),
            imports=tuple(imports),
        )

        if inventory.is_empty():
            logger.debug(f"No structural patterns matched in {len(text)} characters of {tag}")
            warnings.warn(
                MalformedInputWarning(
                    f"Source text matched no {tag} structural pattern; using generic explanations"
                ),
                stacklevel=2,
            )
        else:
            logger.debug(f"Extracted {inventory.counts()} from {tag} source")

        return inventory

    def find_functions(self, source_text: str, language: str) -> List[FunctionRecord]:
        """Return every recognised function with its parameters and body text."""
        normalize_language(language)
        text = source_text or ""
        index = _LineIndex(text)
        records = []
        for match in _FUNCTION_RE.finditer(text):
            name, kind, params_text = _function_parts(match)
            body_start, body_end, range_end = _body_span(text, match, kind)
            records.append(
                FunctionRecord(
                    name=name,
                    params=parse_params(params_text),
                    body=text[body_start:body_end].strip(),
                    position=index.position(match.start()),
                    range=SourceRange(start=match.start(), end=range_end),
                )
            )
        return records

    def trace_variable(self, source_text: str, name: str) -> List[VariableOccurrence]:
        """Find every whole-word occurrence of ``name``, flagging definitions."""
        text = source_text or ""
        index = _LineIndex(text)
        pattern = re.compile(rf"(?<![\w$]){re.escape(name)}(?![\w$])")
        declaration = re.compile(rf"\bfunction\s+{re.escape(name)}\s*\(")
        occurrences = []
        for match in pattern.finditer(text):
            position = index.position(match.start())
            line_text = index.line_text(position.line)
            prefix = line_text[: position.character]
            is_definition = bool(
                re.search(r"\b(?:var|let|const)\s+$", prefix) or declaration.search(line_text)
            )
            occurrences.append(
                VariableOccurrence(position=position, line_text=line_text, is_definition=is_definition)
            )
        return occurrences


def extract_dependencies(text: str) -> List[Dependency]:
    """``import ... from`` targets first, then ``require(...)`` targets, each in source order."""
    dependencies = [
        Dependency(kind="import", name=m.group("module")) for m in _IMPORT_RE.finditer(text or "")
    ]
    dependencies.extend(
        Dependency(kind="require", name=m.group("module")) for m in _REQUIRE_RE.finditer(text or "")
    )
    return dependencies


_default_extractor = StructuralExtractor()


def extract(source_text: str, language: str) -> StructuralInventory:
    return _default_extractor.extract(source_text, language)


def find_functions(source_text: str, language: str) -> List[FunctionRecord]:
    return _default_extractor.find_functions(source_text, language)


def trace_variable(source_text: str, name: str) -> List[VariableOccurrence]:
    return _default_extractor.trace_variable(source_text, name)

