"""
Language tags understood by codewhiskers.

The structural extractor handles JavaScript and TypeScript only. The
workspace profiler recognises a wider, closed set of languages derived
from file extensions, with an explicit ``Other`` fallback.

codewhiskers/src/codewhiskers/languages.py
"""

from enum import Enum
from pathlib import PurePath
from typing import Dict, Union

from .errors import UnsupportedLanguageError

__all__ = [
    "Language",
    "EXTENSION_LANGUAGES",
    "STRUCTURAL_LANGUAGES",
    "normalize_language",
    "language_of",
    "is_code_file",
    "structural_tag_for",
    "REACT_TAGS",
    "is_react_tag",
    "source_tag_for",
]


class Language(Enum):
    """Languages tallied by the workspace profiler."""

    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    REACT_JS = "React (JS)"
    REACT_TS = "React (TS)"
    PYTHON = "Python"
    JAVA = "Java"
    CSHARP = "C#"
    HTML = "HTML"
    CSS = "CSS"
    GO = "Go"
    PHP = "PHP"
    RUBY = "Ruby"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_script_family(self) -> bool:
        """True for JavaScript, TypeScript and their JSX variants."""
        return self in (
            Language.JAVASCRIPT,
            Language.TYPESCRIPT,
            Language.REACT_JS,
            Language.REACT_TS,
        )


EXTENSION_LANGUAGES: Dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".jsx": Language.REACT_JS,
    ".tsx": Language.REACT_TS,
    ".py": Language.PYTHON,
    ".java": Language.JAVA,
    ".cs": Language.CSHARP,
    ".html": Language.HTML,
    ".css": Language.CSS,
    ".go": Language.GO,
    ".php": Language.PHP,
    ".rb": Language.RUBY,
}

# Tags accepted by the structural extractor, mapped to the pattern set used.
STRUCTURAL_LANGUAGES: Dict[str, str] = {
    "javascript": "javascript",
    "typescript": "typescript",
    "javascriptreact": "javascript",
    "typescriptreact": "typescript",
    "js": "javascript",
    "ts": "typescript",
}


def normalize_language(language: str) -> str:
    """Map a language tag onto ``javascript`` or ``typescript``.

    Raises:
        UnsupportedLanguageError: if the tag is not a structural language.
    """
    key = (language or "").strip().lower()
    if key not in STRUCTURAL_LANGUAGES:
        raise UnsupportedLanguageError(language, ("javascript", "typescript"))
    return STRUCTURAL_LANGUAGES[key]


def language_of(path: Union[str, PurePath]) -> Language:
    """Classify a path by extension; unknown extensions are ``Language.OTHER``."""
    return EXTENSION_LANGUAGES.get(PurePath(path).suffix.lower(), Language.OTHER)


def is_code_file(path: Union[str, PurePath]) -> bool:
    return language_of(path) is not Language.OTHER


def structural_tag_for(path: Union[str, PurePath]) -> str:
    """Return the structural language tag for a file, or raise if it has none."""
    language = language_of(path)
    if language in (Language.JAVASCRIPT, Language.REACT_JS):
        return "javascript"
    if language in (Language.TYPESCRIPT, Language.REACT_TS):
        return "typescript"
    raise UnsupportedLanguageError(language.display_name, ("javascript", "typescript"))


REACT_TAGS = ("javascriptreact", "typescriptreact")


def is_react_tag(language: str) -> bool:
    return (language or "").strip().lower() in REACT_TAGS


def source_tag_for(path: Union[str, PurePath]) -> str:
    """Like ``structural_tag_for`` but keeps the JSX variants (``typescriptreact``)."""
    tag = structural_tag_for(path)
    if language_of(path) in (Language.REACT_JS, Language.REACT_TS):
        return f"{tag}react"
    return tag
