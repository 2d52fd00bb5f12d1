"""
codewhiskers: heuristic source analysis with plain-language explanations.

Explains JavaScript and TypeScript snippets at three levels of detail,
summarizes the behavior of individual functions, suggests refactorings,
flags likely performance bottlenecks, and folds a whole workspace into a
skill profile with a learning path.

codewhiskers/src/codewhiskers/__init__.py
"""

from .api import (
    CodeWhiskersAPI,
    analyze_functions,
    analyze_performance,
    explain,
    find_refactoring_opportunities,
    profile_directory,
    profile_files,
)
from .behavior import FunctionBehaviorAnalyzer
from .complexity import ComplexityScorer
from .config import ComplexityThresholds, Config, ProfilerSettings, load_config
from .errors import (
    CodeWhiskersError,
    ConfigurationError,
    MalformedInputWarning,
    UnsupportedLanguageError,
)
from .explanation import ExplanationComposer
from .extraction import StructuralExtractor
from .patterns import PatternDetector
from .performance import PerformanceAnalyzer
from .refactoring import RefactoringAnalyzer
from .workspace import AggregationContext, WorkspaceProfiler

__version__ = "0.2.0"

__all__ = [
    "__version__",
    "explain",
    "analyze_functions",
    "find_refactoring_opportunities",
    "analyze_performance",
    "profile_files",
    "profile_directory",
    "CodeWhiskersAPI",
    "StructuralExtractor",
    "PatternDetector",
    "ComplexityScorer",
    "ExplanationComposer",
    "FunctionBehaviorAnalyzer",
    "RefactoringAnalyzer",
    "PerformanceAnalyzer",
    "WorkspaceProfiler",
    "AggregationContext",
    "Config",
    "load_config",
    "ComplexityThresholds",
    "ProfilerSettings",
    "CodeWhiskersError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "MalformedInputWarning",
]
