"""
Core value types for codewhiskers.

Structural inventories, complexity results, detected idioms, function
behavior records, explanations and workspace profiles. Everything here is
plain data: each type converts to JSON-ready dictionaries via ``to_dict()``.

codewhiskers/src/codewhiskers/models.py
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Dict, List, Optional, Tuple

__all__ = [
    "SourcePosition",
    "SourceRange",
    "FunctionRef",
    "ClassRef",
    "LoopRef",
    "ConditionalRef",
    "VariableRef",
    "ImportRef",
    "StructuralInventory",
    "ComplexityLevel",
    "ComplexityResult",
    "PatternMatch",
    "SideEffect",
    "Parameter",
    "FunctionRecord",
    "ReturnValue",
    "Dependency",
    "FunctionBehavior",
    "VariableOccurrence",
    "Explanation",
    "Severity",
    "RefactoringOpportunity",
    "PerformanceIssue",
    "SkillLevel",
    "CharacterTag",
    "LearningPathItem",
    "WorkspaceProfile",
    "SourceFile",
]


@dataclass(frozen=True)
class SourcePosition:
    """Location of a construct: 0-based offset, 1-based line, 0-based character."""

    offset: int
    line: int
    character: int

    def to_dict(self) -> Dict[str, int]:
        return {"offset": self.offset, "line": self.line, "character": self.character}


@dataclass(frozen=True)
class SourceRange:
    """Half-open span of offsets in the source text."""

    start: int
    end: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class FunctionRef:
    """A named function found in the source.

    ``kind`` is one of ``declaration``, ``expression``, ``arrow`` or
    ``assignment`` depending on the syntax that introduced the name.
    """

    name: str
    kind: str
    position: SourcePosition
    params: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "params": list(self.params),
            "position": self.position.to_dict(),
        }


@dataclass(frozen=True)
class ClassRef:
    name: str
    position: SourcePosition
    extends: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "extends": self.extends, "position": self.position.to_dict()}


@dataclass(frozen=True)
class LoopRef:
    kind: str
    position: SourcePosition

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "position": self.position.to_dict()}


@dataclass(frozen=True)
class ConditionalRef:
    kind: str
    position: SourcePosition

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "position": self.position.to_dict()}


@dataclass(frozen=True)
class VariableRef:
    name: str
    kind: str
    position: SourcePosition

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "position": self.position.to_dict()}


@dataclass(frozen=True)
class ImportRef:
    module: str
    kind: str
    position: SourcePosition

    def to_dict(self) -> Dict[str, Any]:
        return {"module": self.module, "kind": self.kind, "position": self.position.to_dict()}


@dataclass(frozen=True)
class StructuralInventory:
    """Flat, source-ordered list of the constructs found in one snapshot of text."""

    language: str
    functions: Tuple[FunctionRef, ...] = ()
    classes: Tuple[ClassRef, ...] = ()
    loops: Tuple[LoopRef, ...] = ()
    conditionals: Tuple[ConditionalRef, ...] = ()
    variables: Tuple[VariableRef, ...] = ()
    imports: Tuple[ImportRef, ...] = ()

    def is_empty(self) -> bool:
        return not any(self.counts().values())

    def counts(self) -> Dict[str, int]:
        """Number of recognised constructs per category."""
        return {
            "functions": len(self.functions),
            "classes": len(self.classes),
            "loops": len(self.loops),
            "conditionals": len(self.conditionals),
            "variables": len(self.variables),
            "imports": len(self.imports),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "functions": [f.to_dict() for f in self.functions],
            "classes": [c.to_dict() for c in self.classes],
            "loops": [loop.to_dict() for loop in self.loops],
            "conditionals": [c.to_dict() for c in self.conditionals],
            "variables": [v.to_dict() for v in self.variables],
            "imports": [i.to_dict() for i in self.imports],
        }


@total_ordering
class ComplexityLevel(Enum):
    """Three-bucket complexity classification, ordered low < medium < high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self.value]

    def __lt__(self, other):
        if not isinstance(other, ComplexityLevel):
            return NotImplemented
        return self.rank < other.rank


_LEVEL_RANK = {"low": 0, "medium": 1, "high": 2}


@dataclass(frozen=True)
class ComplexityResult:
    level: ComplexityLevel
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level.value, "score": self.score}


@dataclass(frozen=True)
class PatternMatch:
    """An idiom tag such as ``async`` or ``functional``."""

    type: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "name": self.name}


@dataclass(frozen=True)
class SideEffect:
    """Externally observable action category: DOM, network, storage or timer."""

    type: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "description": self.description}


@dataclass(frozen=True)
class Parameter:
    name: str
    type: Optional[str] = None
    default: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"name": self.name, "type": self.type, "default": self.default}


@dataclass(frozen=True)
class FunctionRecord:
    """A function together with its recovered body text."""

    name: str
    params: Tuple[Parameter, ...]
    body: str
    position: SourcePosition
    range: SourceRange

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": [p.to_dict() for p in self.params],
            "body": self.body,
            "position": self.position.to_dict(),
            "range": self.range.to_dict(),
        }


@dataclass(frozen=True)
class ReturnValue:
    exists: bool
    value: Optional[str] = None
    is_variable: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"exists": self.exists}
        if self.exists:
            result["value"] = self.value
            result["is_variable"] = self.is_variable
        return result


@dataclass(frozen=True)
class Dependency:
    """An ``import ... from`` or ``require(...)`` target."""

    kind: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "name": self.name}


@dataclass(frozen=True)
class FunctionBehavior:
    function: FunctionRecord
    complexity: ComplexityResult
    return_value: ReturnValue
    dependencies: Tuple[Dependency, ...]
    side_effects: Tuple[SideEffect, ...]
    patterns: Tuple[PatternMatch, ...]
    explanation: str

    @property
    def name(self) -> str:
        return self.function.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.function.name,
            "params": [p.name for p in self.function.params],
            "position": self.function.position.to_dict(),
            "complexity": self.complexity.to_dict(),
            "return_value": self.return_value.to_dict(),
            "dependencies": [d.to_dict() for d in self.dependencies],
            "side_effects": [s.to_dict() for s in self.side_effects],
            "patterns": [p.to_dict() for p in self.patterns],
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class VariableOccurrence:
    position: SourcePosition
    line_text: str
    is_definition: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position.to_dict(),
            "line_text": self.line_text,
            "is_definition": self.is_definition,
        }


@dataclass(frozen=True)
class Explanation:
    """Three explanation tiers plus the structure-level complexity bucket."""

    simple: str
    detailed: str
    technical: str
    complexity: ComplexityLevel

    def tier(self, level: str) -> str:
        if level not in ("simple", "detailed", "technical"):
            raise ValueError(f"Unknown explanation level '{level}'")
        return getattr(self, level)

    def to_dict(self) -> Dict[str, str]:
        return {
            "simple": self.simple,
            "detailed": self.detailed,
            "technical": self.technical,
            "complexity": self.complexity.value,
        }


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RefactoringOpportunity:
    """A suggestion to restructure code.

    ``metric`` carries the number behind the finding (cognitive complexity,
    nesting depth, repeat or chain count); ``excerpt`` holds the start of a
    repeated block.
    """

    type: str
    severity: Severity
    description: str
    suggestion: str
    metric: Optional[int] = None
    excerpt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            "suggestion": self.suggestion,
        }
        if self.metric is not None:
            result["metric"] = self.metric
        if self.excerpt is not None:
            result["excerpt"] = self.excerpt
        return result


@dataclass(frozen=True)
class PerformanceIssue:
    """A likely bottleneck.

    Rule hits carry the 1-based ``line``, the trimmed source line and the
    matched text. File-wide metrics (nested loops, large literals) carry a
    ``metric`` name and ``count`` instead.
    """

    category: str
    description: str
    severity: Severity
    suggestion: str
    line: Optional[int] = None
    context: Optional[str] = None
    match: Optional[str] = None
    metric: Optional[str] = None
    count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "category": self.category,
            "description": self.description,
            "severity": self.severity.value,
            "suggestion": self.suggestion,
        }
        if self.line is not None:
            result.update(line=self.line, context=self.context, match=self.match)
        if self.metric is not None:
            result.update(metric=self.metric, count=self.count)
        return result


class SkillLevel(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class CharacterTag:
    """Cosmetic persona attached to learning path items."""

    name: str
    personality: str
    image: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "personality": self.personality, "image": self.image}


@dataclass
class LearningPathItem:
    """A recommended practice challenge.

    ``completed`` is the only field mutated after construction, by whoever
    tracks challenge progress.
    """

    area: str
    challenge: str
    difficulty: str
    character: CharacterTag
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "area": self.area,
            "challenge": self.challenge,
            "difficulty": self.difficulty,
            "completed": self.completed,
            "character": self.character.to_dict(),
        }


@dataclass
class WorkspaceProfile:
    skill_level: SkillLevel
    strengths: List[str] = field(default_factory=list)
    areas_for_improvement: List[str] = field(default_factory=list)
    learning_path: List[LearningPathItem] = field(default_factory=list)
    skill_score: float = 0.0
    languages: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skill_level": self.skill_level.value,
            "skill_score": self.skill_score,
            "strengths": list(self.strengths),
            "areas_for_improvement": list(self.areas_for_improvement),
            "learning_path": [item.to_dict() for item in self.learning_path],
            "languages": dict(self.languages),
        }


@dataclass(frozen=True)
class SourceFile:
    """A file handed to the profiler; ``content`` is None when it could not be read."""

    path: str
    content: Optional[str]
