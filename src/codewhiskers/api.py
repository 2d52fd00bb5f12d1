"""Public API for codewhiskers that returns results instead of calling sys.exit().

The module-level functions are thin, stateless entry points into the
engine. ``CodeWhiskersAPI`` loads project configuration once and wraps every
operation in an ``AnalysisResult`` so callers never have to catch
per-call analysis errors.

The CLI commands wrap these API functions and handle exit codes/formatting.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .behavior import FunctionBehaviorAnalyzer
from .complexity import ComplexityScorer
from .config import Config, get_complexity_thresholds, get_profiler_settings, load_config
from .errors import CodeWhiskersError
from .explanation import ExplanationComposer
from .extraction import StructuralExtractor
from .languages import source_tag_for
from .models import (
    Explanation,
    FunctionBehavior,
    PerformanceIssue,
    RefactoringOpportunity,
    SourceFile,
    WorkspaceProfile,
)
from .patterns import PatternDetector
from .performance import PerformanceAnalyzer
from .refactoring import RefactoringAnalyzer
from .workspace import WorkspaceProfiler, collect_source_files, iter_source_files

__all__ = [
    "explain",
    "analyze_functions",
    "find_refactoring_opportunities",
    "analyze_performance",
    "profile_files",
    "profile_directory",
    "AnalysisResult",
    "CodeWhiskersAPI",
]

logger = logging.getLogger(__name__)


def _scorer(config: Optional[Config]) -> ComplexityScorer:
    return ComplexityScorer(get_complexity_thresholds(config))


def explain(source: str, language: str, config: Optional[Config] = None) -> Explanation:
    """Explain a snippet at all three tiers.

    Raises:
        UnsupportedLanguageError: if ``language`` is not JavaScript or TypeScript.
        ConfigurationError: if ``config`` holds invalid thresholds.
    """
    inventory = StructuralExtractor().extract(source, language)
    patterns = PatternDetector().detect_patterns(source)
    return ExplanationComposer(_scorer(config)).compose(inventory, source, patterns)


def analyze_functions(
    source: str, language: str, config: Optional[Config] = None
) -> List[FunctionBehavior]:
    return FunctionBehaviorAnalyzer(scorer=_scorer(config)).analyze_source(source, language)


def find_refactoring_opportunities(source: str, language: str) -> List[RefactoringOpportunity]:
    """Refactoring suggestions for a snippet.

    JSX tags (``javascriptreact``, ``typescriptreact``) also enable the promise chain check.
    """
    return RefactoringAnalyzer().analyze(source, language)


def analyze_performance(source: str, language: str) -> List[PerformanceIssue]:
    return PerformanceAnalyzer().analyze(source, language)


def profile_files(files: Iterable[SourceFile], config: Optional[Config] = None) -> WorkspaceProfile:
    return WorkspaceProfiler(get_profiler_settings(config)).profile(files)


def profile_directory(root: Union[str, Path], config: Optional[Config] = None) -> WorkspaceProfile:
    settings = get_profiler_settings(config)
    return WorkspaceProfiler(settings).profile(iter_source_files(Path(root), settings))


@dataclass
class AnalysisResult:
    """Container for codewhiskers operation results."""

    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert result to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)


class CodeWhiskersAPI:
    """Main API interface for codewhiskers operations."""

    def __init__(self, working_dir: Optional[Union[str, Path]] = None):
        """Initialize the codewhiskers API.

        Args:
            working_dir: Directory used to locate pyproject.toml and to resolve
                relative paths (defaults to the current directory).

        """
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.config = load_config(self.working_dir)

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.working_dir / path

    def _read(self, path: Union[str, Path], language: Optional[str]):
        resolved = self._resolve(path)
        tag = language or source_tag_for(resolved)
        return resolved.read_text(encoding="utf-8"), tag

    def explain(self, source: str, language: str) -> AnalysisResult:
        try:
            explanation = explain(source, language, self.config)
        except CodeWhiskersError as e:
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(success=True, data=explanation.to_dict())

    def explain_file(self, path: Union[str, Path], language: Optional[str] = None) -> AnalysisResult:
        try:
            source, tag = self._read(path, language)
            explanation = explain(source, tag, self.config)
        except (CodeWhiskersError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"explain_file failed for {path}: {e}")
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(success=True, data={"path": str(path), **explanation.to_dict()})

    def analyze_functions(
        self, path: Union[str, Path], language: Optional[str] = None
    ) -> AnalysisResult:
        try:
            source, tag = self._read(path, language)
            behaviors = analyze_functions(source, tag, self.config)
        except (CodeWhiskersError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"analyze_functions failed for {path}: {e}")
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(
            success=True,
            data={"path": str(path), "functions": [b.to_dict() for b in behaviors]},
        )

    def find_refactoring_opportunities(
        self, path: Union[str, Path], language: Optional[str] = None
    ) -> AnalysisResult:
        try:
            source, tag = self._read(path, language)
            opportunities = find_refactoring_opportunities(source, tag)
        except (CodeWhiskersError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"find_refactoring_opportunities failed for {path}: {e}")
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(
            success=True,
            data={"path": str(path), "opportunities": [o.to_dict() for o in opportunities]},
        )

    def analyze_performance(
        self, path: Union[str, Path], language: Optional[str] = None
    ) -> AnalysisResult:
        try:
            source, tag = self._read(path, language)
            issues = analyze_performance(source, tag)
        except (CodeWhiskersError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"analyze_performance failed for {path}: {e}")
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(
            success=True,
            data={"path": str(path), "issues": [i.to_dict() for i in issues]},
        )

    def trace_variable(self, path: Union[str, Path], name: str) -> AnalysisResult:
        try:
            source = self._resolve(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return AnalysisResult(success=False, errors=[str(e)])
        occurrences = StructuralExtractor().trace_variable(source, name)
        return AnalysisResult(
            success=True,
            data={"name": name, "occurrences": [o.to_dict() for o in occurrences]},
        )

    def profile(self, paths: Optional[List[Union[str, Path]]] = None) -> AnalysisResult:
        """Profile the given files and directories (defaults to the working directory)."""
        try:
            settings = get_profiler_settings(self.config)
            targets = [self._resolve(p) for p in (paths or [self.working_dir])]
            profiler = WorkspaceProfiler(settings)
            context = profiler.accumulate(collect_source_files(targets, settings))
            profile = profiler.derive_profile(context)
        except CodeWhiskersError as e:
            return AnalysisResult(success=False, errors=[str(e)])
        return AnalysisResult(
            success=True,
            data={"profile": profile.to_dict(), "metrics": context.to_dict()},
            errors=[f"Skipped unreadable file: {path}" for path in context.skipped],
        )
